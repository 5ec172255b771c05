"""Real-time cost of hero moves, throws and the end-of-stage clear.

All costs are integer frame counts. The defaults are placeholders; calibrate
them against reference traces with a JSON file (see ``CostTable.from_json``).
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flipull.models.block import BlocksCol, BlocksRow, BlocksSquare
from flipull.models.errors import ConfigError
from flipull.models.moves import BOARD_WIDTH, FIELD_LANE_OFFSET, Lane

logger = logging.getLogger(__name__)

# Fields that drive the movie exporter, which spends one frame per press.
_AT_LEAST_ONE = ("hero_step", "throw_base")

# A row throw can clear its whole row, then column A below it.
MAX_ERASED_PER_THROW = len(BlocksCol) + len(BlocksRow) - 1
# Nearest square to the thrower: column F, at or above the lane.
MIN_THROW_DISTANCE = BOARD_WIDTH - BlocksCol.F.index


def throw_distance(lane: Lane, square: BlocksSquare) -> int:
    """Tiles a thrown block travels from *lane* to *square*.

    The hero stands just right of the board, so the block crosses every
    board column down to the square's, then falls to the square's row if
    that row is below the lane.
    """
    across = BOARD_WIDTH - square.col.index
    board_row = square.row.value + FIELD_LANE_OFFSET
    down = max(0, board_row - lane.value)
    return across + down


@dataclass(frozen=True)
class CostTable:
    """Frame costs used by the solver and by every replay."""

    hero_step: int = 8
    throw_base: int = 16
    throw_per_tile: int = 4
    clear_per_block: int = 2
    last_throw: int = 1

    def __post_init__(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{field.name} must be an integer, got {value!r}.")
            low = 1 if field.name in _AT_LEAST_ONE else 0
            if value < low:
                raise ConfigError(f"{field.name} must be at least {low}, got {value}.")

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CostTable:
        """Create a table from a mapping; missing keys keep their defaults."""
        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown cost keys: {', '.join(unknown)}.")
        return cls(**data)

    @classmethod
    def from_json(cls, filepath: Path) -> CostTable:
        try:
            data = json.loads(filepath.read_text())
        except json.JSONDecodeError as err:
            raise ConfigError(f"{filepath}: {err}") from err
        if not isinstance(data, dict):
            raise ConfigError(f"{filepath}: expected a JSON object.")
        table = cls.from_dict(data)
        logger.debug("Loaded cost table from %s: %s", filepath, table)
        return table

    # -- costs ----------------------------------------------------------------

    def hero_move(self, src: Lane, dst: Lane) -> int:
        return self.hero_step * abs(dst - src)

    def throw(self, lane: Lane, last_square: BlocksSquare) -> int:
        return self.throw_base + self.throw_per_tile * throw_distance(lane, last_square)

    def clear(self, block_count: int) -> int:
        return self.clear_per_block * block_count

    def min_throw(self) -> int:
        return self.throw_base + self.throw_per_tile * MIN_THROW_DISTANCE

    def pruning_is_exact(self) -> bool:
        """True if the end-of-run cost never drops as a run grows.

        Holds when every throw costs at least the clear time it can save.
        """
        return self.clear_per_block * MAX_ERASED_PER_THROW <= self.min_throw()

    def terminal(
        self, cost: int, last_throw_cost: int, block_count: int, last_stage: bool
    ) -> int:
        """Total cost if the run ended with *cost* accumulated so far.

        On the last stage the final throw need not finish travelling and
        no clear animation is waited for.
        """
        if last_stage:
            return cost - last_throw_cost + self.last_throw
        return cost + self.clear(block_count)


DEFAULT_COSTS = CostTable()
