"""Numeric tokens in problem, position and solution text."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from flipull.models.errors import OutOfRangeError, ParseError

T = TypeVar("T")

# Budgets are stored in a single byte by the game.
MAX_MOVE_REMAIN = 255


def check_budget(value: int) -> int:
    if not 0 <= value <= MAX_MOVE_REMAIN:
        raise OutOfRangeError("move budget", value, 0, MAX_MOVE_REMAIN)
    return value


def parse_number(
    token: str, what: str, convert: Callable[[int], T], line: int | None = None
) -> T:
    """Convert a numeric token, reporting every failure as ``ParseError``."""
    try:
        value = int(token)
    except ValueError:
        raise ParseError(f"{what} is not a number: {token!r}", line) from None
    try:
        return convert(value)
    except OutOfRangeError as err:
        raise ParseError(f"invalid {what}: {err}", line) from err
