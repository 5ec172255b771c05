from flipull.engine.gamestate.state import SOLVED_BLOCK_LIMIT, MoveOutcome, Position

__all__ = ["SOLVED_BLOCK_LIMIT", "MoveOutcome", "Position"]
