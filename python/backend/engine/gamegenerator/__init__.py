from backend.engine.gamegenerator.generator import DeckGenerator

__all__ = ["DeckGenerator"]
