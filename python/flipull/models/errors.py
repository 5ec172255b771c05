"""Exception hierarchy shared by every layer of the solver."""

from __future__ import annotations


class FlipullError(Exception):
    """Base class for every error raised on purpose by this package."""


class OutOfRangeError(FlipullError, ValueError):
    """An integer does not name a valid grid identifier."""

    def __init__(self, kind: str, value: int, low: int, high: int) -> None:
        super().__init__(f"Invalid {kind}: {value} (expected {low}..{high}).")
        self.kind = kind
        self.value = value
        self.low = low
        self.high = high


class ParseError(FlipullError, ValueError):
    """Malformed problem, position, grid or solution text."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class ConstraintError(FlipullError, ValueError):
    """A problem board breaks an ADVANCE-mode layout rule."""


class ConfigError(FlipullError):
    """Invalid cost table configuration."""


class RomError(FlipullError):
    """The ROM image is not a readable iNES file of the expected layout."""


# -- verification -------------------------------------------------------------


class VerificationError(FlipullError):
    """A replayed solution does not legally solve its problem."""


class BudgetExhaustedError(VerificationError):
    def __init__(self, index: int) -> None:
        super().__init__(f"No moves remain before move {index}.")
        self.index = index


class UnknownLaneError(VerificationError):
    def __init__(self, index: int, lane: int) -> None:
        super().__init__(f"Move {index}: lane {lane} has no move in this problem.")
        self.index = index
        self.lane = lane


class RejectedMoveError(VerificationError):
    def __init__(self, index: int, lane: int) -> None:
        super().__init__(f"Move {index}: lane {lane} does not touch any block.")
        self.index = index
        self.lane = lane


class NotStuckError(VerificationError):
    def __init__(self, position: object) -> None:
        super().__init__(f"A legal move remains in the final position:\n{position}")
        self.position = position


class UnsolvedError(VerificationError):
    def __init__(self, position: object) -> None:
        super().__init__(f"The final position is not solved:\n{position}")
        self.position = position
