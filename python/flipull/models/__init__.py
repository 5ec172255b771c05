from flipull.models.block import Block, Blocks, BlocksCol, BlocksRow, BlocksSquare
from flipull.models.moves import Horizontal, Lane, Move, Vertical

__all__ = [
    "Block",
    "Blocks",
    "BlocksCol",
    "BlocksRow",
    "BlocksSquare",
    "Horizontal",
    "Lane",
    "Move",
    "Vertical",
]
