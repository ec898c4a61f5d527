"""
position.py: Parse -n/-c count strings into a PositionSpec.

Accepted forms:
  K     - the last K units
  -K    - the same as K
  +K    - every unit starting with the Kth (1-based)

A unit is either a byte or a line, selected by which option supplied the text.
"""

import logging
import re
from enum import Enum
from typing import NamedTuple, Optional, Union

from .errors import InvalidCount

DEFAULT_LINES = "10"

_COUNT_PATTERN = re.compile(r"([+-]?)([0-9]+)")


class Unit(Enum):
    BYTES = "byte"
    LINES = "line"

    @property
    def noun(self) -> str:
        return self.value


class FromStart(NamedTuple):
    """0-based index of the first unit to emit."""
    index: int


class FromEnd(NamedTuple):
    """Number of trailing units to emit."""
    count: int


Anchor = Union[FromStart, FromEnd]


class PositionSpec(NamedTuple):
    unit: Unit
    anchor: Anchor

    @property
    def from_start(self) -> bool:
        return isinstance(self.anchor, FromStart)


def parse_position(text: str, unit: Unit) -> PositionSpec:
    """
    Parse a count string for the given unit.

    A bare number and a number with a leading '-' both mean "the last K
    units". Most tail implementations reject an explicit '-' here; it is
    accepted because the command has always accepted it.

    Args:
        text: Raw count text, e.g. "10", "+5", "-3"
        unit: Unit.BYTES or Unit.LINES

    Returns:
        Normalized PositionSpec

    Raises:
        InvalidCount: If the text is not an optional sign followed by digits
    """
    match = _COUNT_PATTERN.fullmatch(text or "")
    if match is None:
        raise InvalidCount(unit, text or "")

    sign, digits = match.groups()
    magnitude = int(digits)

    if sign == "+":
        anchor = FromStart(max(magnitude - 1, 0))
    else:
        anchor = FromEnd(magnitude)

    logging.debug(f"Parsed {unit.noun} count '{text}' as {anchor}")
    return PositionSpec(unit, anchor)


def position_from_args(lines: Optional[str] = None, bytes_: Optional[str] = None) -> PositionSpec:
    """
    Build the PositionSpec from the -n/-c option values.

    -c wins when both are present; with neither, the last 10 lines are shown.
    """
    if bytes_ is not None:
        return parse_position(bytes_, Unit.BYTES)
    if lines is not None:
        return parse_position(lines, Unit.LINES)
    return parse_position(DEFAULT_LINES, Unit.LINES)
