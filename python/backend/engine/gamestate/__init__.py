from backend.engine.gamestate.state import GameState, GameStatus, SessionState

__all__ = ["GameState", "GameStatus", "SessionState"]
