from flipull.engine.gamesolver.solver import Solver, SolverStats, solve_problem

__all__ = ["Solver", "SolverStats", "solve_problem"]
