"""
errors.py: Error kinds raised by the tail engine.

Two kinds exist:
- InvalidCount: the count given to -n/-c is malformed. Fatal, the run stops
  before any file is opened.
- TailIOError: a file could not be opened, sought or read. Reported for that
  file only; the remaining files are still processed.
"""


class TailError(Exception):
    """Base class for every error raised by tailkit."""


class InvalidCount(TailError, ValueError):
    """
    A -n/-c count specification did not parse.

    Args:
        unit: The Unit the text was given for (bytes or lines)
        text: The raw text supplied on the command line
    """

    def __init__(self, unit, text: str):
        self.unit = unit
        self.text = text
        super().__init__(f"illegal {unit.noun} count -- {text}")


class TailIOError(TailError, OSError):
    """
    An I/O failure tied to one input file.

    Keeps errno/strerror of the underlying OSError so callers can still
    inspect them.
    """

    def __init__(self, path, cause: OSError):
        self.path = str(path)
        self.cause = cause
        errno = getattr(cause, "errno", None)
        strerror = getattr(cause, "strerror", None) or str(cause)
        super().__init__(errno, strerror)

    def __str__(self):
        return f"{self.path}: {self.strerror}"
