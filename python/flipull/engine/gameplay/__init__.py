from flipull.engine.gameplay.game import GamePlay, ReplayStep

__all__ = ["GamePlay", "ReplayStep"]
