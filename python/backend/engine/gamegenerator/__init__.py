from backend.engine.gamegenerator.generator import GeneratedLevel, LevelGenerator

__all__ = ["GeneratedLevel", "LevelGenerator"]
