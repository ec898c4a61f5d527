"""
Pytest configuration and shared fixtures for tailkit tests.

This module provides common fixtures used across multiple test files.
"""

import logging
import os
import sys

import pytest

# Add the src directory to the path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any logging setup done by tail.main() during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def five_lines(tmp_path):
    """File with lines a..e, each newline-terminated."""
    test_file = tmp_path / "five.txt"
    test_file.write_bytes(b"a\nb\nc\nd\ne\n")
    return test_file


@pytest.fixture
def numbered_file(tmp_path):
    """Create a temp file with 20 numbered lines."""
    test_file = tmp_path / "test.txt"
    test_file.write_text("\n".join(f"line {i}" for i in range(1, 21)) + "\n")
    return test_file


@pytest.fixture
def unterminated_file(tmp_path):
    """Three lines, the last one without a trailing newline."""
    test_file = tmp_path / "unterminated.txt"
    test_file.write_bytes(b"one\ntwo\nthree")
    return test_file


@pytest.fixture
def empty_file(tmp_path):
    """Create an empty temp file."""
    test_file = tmp_path / "empty.txt"
    test_file.write_bytes(b"")
    return test_file


@pytest.fixture
def make_file(tmp_path):
    """Factory writing arbitrary bytes to a new file in tmp_path."""
    counter = {'n': 0}

    def _make(content: bytes, name: str = None):
        counter['n'] += 1
        path = tmp_path / (name or f"file{counter['n']}.txt")
        path.write_bytes(content)
        return path

    return _make

