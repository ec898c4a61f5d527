"""
Tests for emitter.py - headers, separators and per-file error handling.
"""

import io

import pytest

from tailkit.emitter import emit_file, tail_files
from tailkit.errors import TailIOError
from tailkit.position import FromEnd, FromStart, PositionSpec, Unit
from tailkit.session import FileSession

LAST_TWO_LINES = PositionSpec(Unit.LINES, FromEnd(2))


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


class TestEmitFile:
    def test_returns_bytes_emitted(self, five_lines):
        out = io.StringIO()
        with FileSession.open(five_lines) as session:
            assert emit_file(session, LAST_TWO_LINES, out) == 4
        assert out.getvalue() == "d\ne\n"

    def test_invalid_utf8_is_replaced_in_text_output(self, make_file):
        """Undecodable bytes become U+FFFD only when written as text."""
        path = make_file(b"ok\n\xff\xfebad\n")
        out = io.StringIO()
        with FileSession.open(path) as session:
            assert emit_file(session, PositionSpec(Unit.LINES, FromEnd(1)), out) == 6
        assert out.getvalue() == "\ufffd\ufffdbad\n"

    def test_multibyte_char_split_across_chunks(self, make_file):
        """A UTF-8 character straddling two reads is decoded intact."""
        path = make_file("héllo wörld\n".encode("utf-8"))
        out = io.StringIO()
        with FileSession.open(path) as session:
            emit_file(session, PositionSpec(Unit.BYTES, FromStart(0)), out, chunk_size=1)
        assert out.getvalue() == "héllo wörld\n"

    def test_binary_buffer_gets_raw_bytes(self, make_file):
        """Streams with a binary buffer receive the file bytes untouched."""
        raw = b"\xff\xfe\x00raw\n"
        path = make_file(raw)
        backing = io.BytesIO()
        out = io.TextIOWrapper(backing, encoding="utf-8")
        with FileSession.open(path) as session:
            emit_file(session, PositionSpec(Unit.BYTES, FromStart(0)), out)
        assert backing.getvalue() == raw


class TestTailFiles:
    def test_single_file_has_no_header(self, five_lines, streams):
        out, err = streams
        assert tail_files([five_lines], LAST_TWO_LINES, out=out, err=err) == 0
        assert out.getvalue() == "d\ne\n"
        assert err.getvalue() == ""

    def test_headers_and_separator(self, five_lines, unterminated_file, streams):
        """Several files get '==> path <==' headers and one blank line between them."""
        out, err = streams
        tail_files([five_lines, unterminated_file], LAST_TWO_LINES, out=out, err=err)
        assert out.getvalue() == (
            f"==> {five_lines} <==\n"
            "d\ne\n"
            "\n"
            f"==> {unterminated_file} <==\n"
            "two\nthree"
        )

    def test_no_trailing_separator(self, five_lines, streams):
        out, err = streams
        tail_files([five_lines, five_lines], LAST_TWO_LINES, out=out, err=err)
        assert out.getvalue().endswith("d\ne\n")
        assert not out.getvalue().endswith("\n\n")

    def test_quiet_suppresses_headers(self, five_lines, unterminated_file, streams):
        out, err = streams
        tail_files([five_lines, unterminated_file], LAST_TWO_LINES,
                   suppress_headers=True, out=out, err=err)
        assert out.getvalue() == "d\ne\ntwo\nthree"

    def test_missing_file_is_reported_and_skipped(self, five_lines, tmp_path, streams):
        """A missing file prints an error and the next file is still shown."""
        out, err = streams
        missing = tmp_path / "missing.txt"
        failures = tail_files([missing, five_lines], LAST_TWO_LINES, out=out, err=err)
        assert failures == 1
        assert out.getvalue() == f"==> {five_lines} <==\nd\ne\n"
        assert f"tail: cannot open '{missing}' for reading" in err.getvalue()
        assert "No such file or directory" in err.getvalue()

    def test_missing_last_file_leaves_no_separator(self, five_lines, tmp_path, streams):
        out, err = streams
        missing = tmp_path / "missing.txt"
        tail_files([five_lines, missing], LAST_TWO_LINES, out=out, err=err)
        assert out.getvalue() == f"==> {five_lines} <==\nd\ne\n"
        assert "missing.txt" in err.getvalue()

    def test_directory_is_reported(self, tmp_path, five_lines, streams):
        out, err = streams
        failures = tail_files([tmp_path, five_lines], LAST_TWO_LINES, out=out, err=err)
        assert failures == 1
        assert f"'{tmp_path}'" in err.getvalue()
        assert out.getvalue().endswith("d\ne\n")

    def test_read_error_does_not_stop_later_files(self, five_lines, make_file, streams, monkeypatch):
        """A file failing mid-scan is reported; the following file is still emitted."""
        bad = make_file(b"x\ny\n", name="bad.txt")
        original_read = FileSession.read

        def flaky_read(self, size=-1):
            if self.path.name == "bad.txt":
                raise TailIOError(self.path, OSError(5, "Input/output error"))
            return original_read(self, size)

        monkeypatch.setattr(FileSession, "read", flaky_read)
        out, err = streams
        failures = tail_files([bad, five_lines], LAST_TWO_LINES, suppress_headers=True, out=out, err=err)
        assert failures == 1
        assert out.getvalue() == "d\ne\n"
        assert f"tail: error reading '{bad}': Input/output error" in err.getvalue()

    def test_empty_file(self, empty_file, streams):
        out, err = streams
        assert tail_files([empty_file], PositionSpec(Unit.LINES, FromEnd(5)), out=out, err=err) == 0
        assert out.getvalue() == ""
        assert err.getvalue() == ""

    def test_failed_file_leaves_no_partial_output(self, make_file, streams, monkeypatch):
        """A file whose second read fails writes nothing; the next file keeps its header."""
        bad = make_file(b"abcdefgh", name="bad.txt")
        good = make_file(b"ok\n", name="good.txt")
        original_read = FileSession.read
        calls = {'bad': 0}

        def failing_second_read(self, size=-1):
            if self.path.name == "bad.txt":
                calls['bad'] += 1
                if calls['bad'] == 2:
                    raise TailIOError(self.path, OSError(5, "Input/output error"))
            return original_read(self, size)

        monkeypatch.setattr(FileSession, "read", failing_second_read)
        out, err = streams
        failures = tail_files([bad, good], PositionSpec(Unit.BYTES, FromStart(0)),
                              out=out, err=err, chunk_size=3)
        assert failures == 1
        assert calls['bad'] == 2
        assert out.getvalue() == f"==> {good} <==\nok\n"
        assert f"tail: error reading '{bad}'" in err.getvalue()

    def test_failed_file_between_two_good_files(self, make_file, five_lines, streams, monkeypatch):
        """Separator placement is unaffected by a failed file in the middle."""
        bad = make_file(b"abcdefgh", name="bad.txt")
        original_read = FileSession.read

        def failing_read(self, size=-1):
            if self.path.name == "bad.txt" and self.tell() > 0:
                raise TailIOError(self.path, OSError(5, "Input/output error"))
            return original_read(self, size)

        monkeypatch.setattr(FileSession, "read", failing_read)
        out, err = streams
        tail_files([five_lines, bad, five_lines], LAST_TWO_LINES, out=out, err=err, chunk_size=3)
        assert out.getvalue() == (
            f"==> {five_lines} <==\nd\ne\n"
            "\n"
            f"==> {five_lines} <==\nd\ne\n"
        )
