"""Game phase enumeration and the immutable state view."""

from dataclasses import dataclass
from enum import Enum, auto

from core.cards import Card


class GamePhase(Enum):
    """
    Game phases.

    Flow: IN_PROGRESS ⇄ WON. WON is reached when every foundation is complete
    and left again if a card comes back off a foundation (move or undo).
    """

    IN_PROGRESS = auto()
    WON = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


Pile = tuple[Card, ...]


@dataclass(frozen=True)
class GameState:
    """
    Read-only view of the table.

    Every pile is a tuple of immutable cards with the top card last, so the
    view can be handed to any caller without exposing engine internals.
    """

    stock: Pile
    waste: Pile
    foundations: tuple[Pile, Pile, Pile, Pile]
    tableau: tuple[Pile, Pile, Pile, Pile, Pile, Pile, Pile]

    def all_cards(self) -> list[Card]:
        """Return every card on the table, pile by pile."""
        cards = list(self.stock) + list(self.waste)
        for pile in self.foundations:
            cards.extend(pile)
        for column in self.tableau:
            cards.extend(column)
        return cards

    def find_card(self, card_id: int) -> tuple[int, int] | None:
        """Locate a card in the tableau as (column, index), or None."""
        for col, column in enumerate(self.tableau):
            for index, card in enumerate(column):
                if card.id == card_id:
                    return col, index
        return None
