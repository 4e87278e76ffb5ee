"""Klondike stacking rules - pure predicates over cards and piles."""

from typing import Sequence

from core.cards import Card, Rank


def is_red(card: Card) -> bool:
    """Check if a card belongs to a red suit."""
    return card.suit.is_red


def can_stack_on_tableau(card: Card, on_top_of: Card | None) -> bool:
    """
    Check if ``card`` may be placed directly on ``on_top_of`` in a tableau column.

    Args:
        card: Card being placed
        on_top_of: Current top card of the column, or None for an empty column

    Returns:
        True for a King on an empty column, or a card one rank lower and of
        the opposite colour
    """
    if on_top_of is None:
        return card.rank == Rank.KING
    return card.rank.value == on_top_of.rank.value - 1 and is_red(card) != is_red(on_top_of)


def can_stack_on_foundation(card: Card, pile: Sequence[Card]) -> bool:
    """
    Check if ``card`` may be placed on a foundation pile.

    An empty pile takes only an Ace; otherwise the card must follow the top
    card in suit, one rank higher.
    """
    if not pile:
        return card.rank == Rank.ACE
    top = pile[-1]
    return card.suit == top.suit and card.rank.value == top.rank.value + 1


def get_tableau_build(column: Sequence[Card], from_index: int) -> list[Card] | None:
    """
    Return the run of cards from ``from_index`` to the top of ``column``.

    The run is returned only if every adjacent pair in it stacks legally;
    otherwise (or for an index outside the column) the result is None.
    """
    if from_index < 0 or from_index >= len(column):
        return None
    cards = list(column[from_index:])
    for lower, upper in zip(cards, cards[1:]):
        if not can_stack_on_tableau(upper, lower):
            return None
    return cards
