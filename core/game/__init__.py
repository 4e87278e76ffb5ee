"""Game engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import GamePhase, GameState
from core.game.moves import Move, MoveKind
from core.game.engine import KlondikeGame

__all__ = [
    "GameEvent",
    "EventType",
    "GamePhase",
    "GameState",
    "Move",
    "MoveKind",
    "KlondikeGame",
]
