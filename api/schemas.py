"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal

from core.cards import Card
from core.game import GameState, Move, MoveKind

MoveKindName = Literal[
    "draw",
    "waste_to_foundation",
    "waste_to_tableau",
    "tableau_to_foundation",
    "tableau_to_tableau",
    "foundation_to_tableau",
]


class MoveRequest(BaseModel):
    """Request to perform or probe a move."""

    kind: MoveKindName
    column: int | None = Field(default=None, ge=0, le=6)
    card_index: int | None = Field(default=None, ge=0)
    to_column: int | None = Field(default=None, ge=0, le=6)
    foundation: int | None = Field(default=None, ge=0, le=3)

    def to_move(self) -> Move:
        """Convert to a core Move."""
        return Move(
            kind=MoveKind(self.kind),
            column=self.column,
            card_index=self.card_index,
            to_column=self.to_column,
            foundation=self.foundation,
        )

    @classmethod
    def from_move(cls, move: Move) -> "MoveRequest":
        """Describe a core Move."""
        return cls(
            kind=move.kind.value,
            column=move.column,
            card_index=move.card_index,
            to_column=move.to_column,
            foundation=move.foundation,
        )


class CardResponse(BaseModel):
    """Card representation. Face-down cards hide their suit and rank."""

    id: int
    face_up: bool
    rank: str | None = None
    suit: str | None = None
    label: str | None = None
    face_class: str | None = None

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        """Build the response for a core card."""
        if not card.face_up:
            return cls(id=card.id, face_up=False)
        return cls(
            id=card.id,
            face_up=True,
            rank=str(card.rank),
            suit=str(card.suit),
            label=card.label,
            face_class=card.face_class,
        )


class GameStateResponse(BaseModel):
    """Current game state."""

    phase: str
    stock_count: int
    waste: list[CardResponse]
    foundations: list[list[CardResponse]]
    tableau: list[list[CardResponse]]
    can_undo: bool
    is_win: bool

    @classmethod
    def from_state(
        cls, state: GameState, phase: str, can_undo: bool, is_win: bool
    ) -> "GameStateResponse":
        """Build the response for a state view."""
        return cls(
            phase=phase,
            stock_count=len(state.stock),
            waste=[CardResponse.from_card(c) for c in state.waste],
            foundations=[[CardResponse.from_card(c) for c in pile] for pile in state.foundations],
            tableau=[[CardResponse.from_card(c) for c in column] for column in state.tableau],
            can_undo=can_undo,
            is_win=is_win,
        )


class ProbeResponse(BaseModel):
    """Dry-run move result."""

    legal: bool


class HintsResponse(BaseModel):
    """Currently legal moves."""

    moves: list[MoveRequest]
