from backend.engine.gamesolver.solver import Candidate, SearchStats, Solver

__all__ = ["Candidate", "SearchStats", "Solver"]
