"""
emitter.py: Drive each input file through the locator and stream it out.

Output for several files looks like:

    ==> a.txt <==
    ...last lines of a.txt...

    ==> b.txt <==
    ...last lines of b.txt...

Files that cannot be opened or read are reported on stderr and skipped; they
never stop the files after them.
"""

import codecs
import logging
import sys
import tempfile

from .common import format_header, print_error
from .errors import TailIOError
from .locator import locate_boundary
from .position import PositionSpec
from .session import CHUNK_SIZE, FileSession

# Selections larger than this are spooled to a temporary file on disk.
SPOOL_MAX_MEMORY = 1024 * 1024


class _OutputSink:
    """
    Writes file bytes to a text stream.

    When the stream has a binary buffer (sys.stdout does) the bytes go there
    untouched. Otherwise they are decoded as UTF-8, invalid sequences replaced,
    with an incremental decoder so a character split across two chunks is
    still decoded correctly.
    """

    def __init__(self, out):
        self.out = out
        self.buffer = getattr(out, 'buffer', None)
        self.decoder = None
        if self.buffer is None:
            self.decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        else:
            out.flush()

    def write(self, chunk: bytes):
        if self.buffer is not None:
            self.buffer.write(chunk)
        else:
            self.out.write(self.decoder.decode(chunk))

    def close(self):
        if self.buffer is not None:
            self.buffer.flush()
        else:
            tail = self.decoder.decode(b'', final=True)
            if tail:
                self.out.write(tail)
            self.out.flush()


def read_selection(session: FileSession, spec: PositionSpec, chunk_size: int = CHUNK_SIZE):
    """
    Locate the boundary and copy everything after it into a spool file.

    Nothing is written to the output here, so a read failure part way through
    leaves no trace of this file on stdout.

    Returns:
        (spool, size): SpooledTemporaryFile rewound to 0, and its byte count

    Raises:
        TailIOError: If seeking or reading fails
    """
    offset = locate_boundary(session, spec, chunk_size)

    spool = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_MEMORY)
    try:
        size = 0
        for chunk in session.iter_chunks(chunk_size):
            spool.write(chunk)
            size += len(chunk)
    except BaseException:
        spool.close()
        raise
    spool.seek(0)

    logging.debug(f"{session.path}: read {size} bytes from offset {offset}")
    return spool, size


def write_selection(spool, out, chunk_size: int = CHUNK_SIZE):
    """Copy a spool produced by read_selection to out and close it."""
    with spool:
        sink = _OutputSink(out)
        while True:
            chunk = spool.read(chunk_size)
            if not chunk:
                break
            sink.write(chunk)
        sink.close()


def emit_file(session: FileSession, spec: PositionSpec, out=None, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Write the part of one open file selected by spec.

    Returns:
        Number of bytes read from the file and written to out

    Raises:
        TailIOError: If seeking or reading fails (out is left untouched)
    """
    out = out if out is not None else sys.stdout
    spool, size = read_selection(session, spec, chunk_size)
    write_selection(spool, out, chunk_size)
    return size


def tail_files(paths, spec: PositionSpec, suppress_headers: bool = False,
               out=None, err=None, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Print the selected part of every file, in order.

    A file's header and content are only written once the file has been read
    to the end, so a file failing mid-read contributes nothing to out.

    Args:
        paths: File paths as given on the command line
        spec: Position specification shared by all files
        suppress_headers: Never print '==> path <==' headers (-q)
        out: Stream for file content and headers (default sys.stdout)
        err: Stream for per-file errors (default sys.stderr)
        chunk_size: Read size for scanning and streaming

    Returns:
        Number of files that could not be opened or read
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    paths = list(paths)
    show_headers = len(paths) > 1 and not suppress_headers

    failures = 0
    header_printed = False
    for path in paths:
        try:
            session = FileSession.open(path)
        except TailIOError as e:
            logging.warning(f"Skipping {path}: {e}")
            print_error(f"cannot open '{path}' for reading: {e.strerror}", err)
            failures += 1
            continue

        with session:
            try:
                spool, _ = read_selection(session, spec, chunk_size)
            except TailIOError as e:
                logging.warning(f"Read of {path} failed: {e}")
                print_error(f"error reading '{path}': {e.strerror}", err)
                failures += 1
                continue

        if show_headers:
            if header_printed:
                out.write("\n")
            out.write(format_header(path, out) + "\n")
            header_printed = True
        write_selection(spool, out, chunk_size)

    out.flush()
    return failures
