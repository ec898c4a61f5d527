"""
tailkit: print the last part of files.

The package resolves a position specification ("last N lines", "+K bytes", ...)
to a byte offset in each file and streams the file from that offset onward.
"""

from .version import __version__
from .errors import TailError, InvalidCount, TailIOError
from .position import Unit, FromStart, FromEnd, PositionSpec, parse_position
from .session import FileSession
from .locator import locate_boundary
from .emitter import tail_files, emit_file

__all__ = [
    "__version__",
    "TailError",
    "InvalidCount",
    "TailIOError",
    "Unit",
    "FromStart",
    "FromEnd",
    "PositionSpec",
    "parse_position",
    "FileSession",
    "locate_boundary",
    "tail_files",
    "emit_file",
]
