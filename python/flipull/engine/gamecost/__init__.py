from flipull.engine.gamecost.cost import DEFAULT_COSTS, CostTable, throw_distance

__all__ = ["DEFAULT_COSTS", "CostTable", "throw_distance"]
