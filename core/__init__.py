"""Core Klondike engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Suit, create_deck, shuffle
from core.rules import (
    can_stack_on_foundation,
    can_stack_on_tableau,
    get_tableau_build,
    is_red,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "shuffle",
    "is_red",
    "can_stack_on_tableau",
    "can_stack_on_foundation",
    "get_tableau_build",
]
