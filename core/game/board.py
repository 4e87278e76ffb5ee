"""Mutable table layout owned by the engine."""

from dataclasses import dataclass, field

from core.cards import Card
from core.game.state import GameState

NUM_FOUNDATIONS = 4
NUM_COLUMNS = 7


def _empty_piles(count: int) -> list[list[Card]]:
    return [[] for _ in range(count)]


@dataclass
class Board:
    """The five pile collections of a Klondike table. Top of each pile is last."""

    stock: list[Card] = field(default_factory=list)
    waste: list[Card] = field(default_factory=list)
    foundations: list[list[Card]] = field(default_factory=lambda: _empty_piles(NUM_FOUNDATIONS))
    tableau: list[list[Card]] = field(default_factory=lambda: _empty_piles(NUM_COLUMNS))

    @classmethod
    def deal(cls, deck: list[Card]) -> "Board":
        """
        Deal a shuffled deck into a new board.

        Column k receives k + 1 cards with only the last one turned up; the
        rest of the deck becomes the stock.
        """
        board = cls()
        idx = 0
        for col in range(NUM_COLUMNS):
            for n in range(col + 1):
                board.tableau[col].append(deck[idx].flipped(n == col))
                idx += 1
        board.stock = [card.flipped(False) for card in deck[idx:]]
        return board

    def copy(self) -> "Board":
        """
        Return an independent copy of the board.

        Cards are immutable, so copying the pile lists copies the whole state.
        """
        return Board(
            stock=list(self.stock),
            waste=list(self.waste),
            foundations=[list(pile) for pile in self.foundations],
            tableau=[list(column) for column in self.tableau],
        )

    def view(self) -> GameState:
        """Return an immutable view of the board."""
        return GameState(
            stock=tuple(self.stock),
            waste=tuple(self.waste),
            foundations=tuple(tuple(pile) for pile in self.foundations),  # type: ignore[arg-type]
            tableau=tuple(tuple(column) for column in self.tableau),  # type: ignore[arg-type]
        )

    def reveal_top(self, col: int) -> Card | None:
        """Turn up the top card of a column if it is face-down; return it if turned."""
        column = self.tableau[col]
        if column and not column[-1].face_up:
            column[-1] = column[-1].flipped(True)
            return column[-1]
        return None
