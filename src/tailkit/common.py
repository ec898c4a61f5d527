"""
common.py: Shared helpers for the tail command.

This module consolidates:
- Logging setup (level from config, --debug shortcut).
- Console styling through colorama (errors and headers).
- Error printing to stderr.
"""

import logging
import sys

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()

PROGRAM_NAME = "tail"

# =============================================================================
# LOGGING
# =============================================================================

def setup_logging(config: dict):
    """
    Configures Python's logging module.

    Log records go to stderr so they never interleave with file content.
    """
    log_level_str = str(config.get('LOG_LEVEL', 'ERROR')).upper()

    numeric_level = getattr(logging, log_level_str, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level_str}')

    if numeric_level <= logging.DEBUG:
        log_format = '[DEBUG] %(message)s'
    else:
        log_format = '%(levelname)s - %(message)s'

    logging.basicConfig(level=numeric_level, format=log_format,
                        handlers=[logging.StreamHandler(sys.stderr)], force=True)
    logging.debug(f"Logging setup with level {log_level_str}.")


# =============================================================================
# DISPLAY HELPERS
# =============================================================================

def _is_tty(stream) -> bool:
    isatty = getattr(stream, 'isatty', None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def style(text: str, color: str, stream=None) -> str:
    """Wrap text in a colorama color when stream is a terminal."""
    if stream is not None and _is_tty(stream):
        return f"{color}{text}{Style.RESET_ALL}"
    return text


def print_error(text: str, stream=None):
    """Print 'tail: <text>' to stderr (red on a terminal)."""
    stream = stream if stream is not None else sys.stderr
    print(style(f"{PROGRAM_NAME}: {text}", Fore.RED, stream), file=stream)
    stream.flush()


def format_header(path, stream=None) -> str:
    """The '==> path <==' line printed above each file when several are given."""
    return style(f"==> {path} <==", Style.BRIGHT, stream)
