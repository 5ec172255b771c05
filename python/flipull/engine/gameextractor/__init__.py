from flipull.engine.gameextractor.extractor import STAGE_COUNT, GameExtractor, Rom

__all__ = ["STAGE_COUNT", "GameExtractor", "Rom"]
