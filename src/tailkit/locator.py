"""
locator.py: Resolve a PositionSpec to the byte offset where output begins.

One resolver exists per (unit, anchor) pair:

    bytes, +K   resolve_bytes_from_start   plain seek, no scanning
    bytes,  K   resolve_bytes_from_end     plain seek, no scanning
    lines, +K   resolve_lines_from_start   forward scan for newlines
    lines,  K   resolve_lines_from_end     backward scan for newlines

The line scans read fixed-size chunks and stop as soon as the offset is known,
so at most the requested lines (plus one chunk) are ever read.
"""

import logging

from .position import FromStart, PositionSpec, Unit
from .session import CHUNK_SIZE, FileSession

NEWLINE = b"\n"


def resolve_bytes_from_start(session: FileSession, index: int, chunk_size: int = CHUNK_SIZE) -> int:
    """Offset of byte index, clamped to the file size. No reads; chunk_size is unused."""
    return min(index, session.size)


def resolve_bytes_from_end(session: FileSession, count: int, chunk_size: int = CHUNK_SIZE) -> int:
    """Offset of the first of the last count bytes. No reads; chunk_size is unused."""
    return session.size - min(count, session.size)


def resolve_lines_from_start(session: FileSession, index: int, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Offset of the start of line index (0-based).

    Returns session.size when the file has fewer than index newlines.
    """
    if index == 0:
        return 0

    remaining = index
    position = 0
    session.seek(0)
    while position < session.size:
        chunk = session.read(chunk_size)
        if not chunk:
            break
        found = chunk.count(NEWLINE)
        if found >= remaining:
            cut = -1
            for _ in range(remaining):
                cut = chunk.index(NEWLINE, cut + 1)
            return position + cut + 1
        remaining -= found
        position += len(chunk)

    logging.debug(f"{session.path}: only {index - remaining} of {index} newlines found")
    return session.size


def resolve_lines_from_end(session: FileSession, count: int, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Offset of the first of the last count lines.

    A newline that is the very last byte of the file ends the last line; it
    does not open an extra empty one, so the scan starts just before it.
    Returns 0 when the file holds count lines or fewer.
    """
    if count == 0 or session.size == 0:
        return session.size

    end = session.size
    if session.read_at(end - 1, 1) == NEWLINE:
        end -= 1

    remaining = count
    while end > 0:
        start = max(end - chunk_size, 0)
        chunk = session.read_at(start, end - start)
        if len(chunk) != end - start:
            # File shrank underneath us; treat what is left as the whole file.
            logging.warning(f"{session.path}: short read at offset {start}")
            break
        cut = len(chunk)
        while remaining:
            cut = chunk.rfind(NEWLINE, 0, cut)
            if cut < 0:
                break
            remaining -= 1
        if not remaining:
            return start + cut + 1
        end = start

    return 0


_RESOLVERS = {
    (Unit.BYTES, True): resolve_bytes_from_start,
    (Unit.BYTES, False): resolve_bytes_from_end,
    (Unit.LINES, True): resolve_lines_from_start,
    (Unit.LINES, False): resolve_lines_from_end,
}


def locate_boundary(session: FileSession, spec: PositionSpec, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Find where output for this file starts and leave the cursor there.

    Args:
        session: Open FileSession; its cursor may be anywhere
        spec: Parsed position specification
        chunk_size: Read size used by the line scans

    Returns:
        Byte offset in the range [0, session.size]

    Raises:
        TailIOError: If seeking or reading the file fails
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    from_start = isinstance(spec.anchor, FromStart)
    magnitude = spec.anchor.index if from_start else spec.anchor.count
    resolver = _RESOLVERS[(spec.unit, from_start)]

    offset = resolver(session, magnitude, chunk_size)
    session.seek(offset)
    logging.debug(f"{session.path}: {resolver.__name__}({magnitude}) -> offset {offset} of {session.size}")
    return offset
