"""Move descriptions used for dispatch, dry-run probes and hints."""

from dataclasses import dataclass
from enum import Enum


class MoveKind(Enum):
    """Kinds of player moves, named by source and target pile."""

    DRAW = "draw"
    WASTE_TO_FOUNDATION = "waste_to_foundation"
    WASTE_TO_TABLEAU = "waste_to_tableau"
    TABLEAU_TO_FOUNDATION = "tableau_to_foundation"
    TABLEAU_TO_TABLEAU = "tableau_to_tableau"
    FOUNDATION_TO_TABLEAU = "foundation_to_tableau"


@dataclass(frozen=True)
class Move:
    """
    A single player move.

    Only the fields relevant to ``kind`` are read:

    - WASTE_TO_FOUNDATION: ``foundation`` (None scans foundations 0..3)
    - WASTE_TO_TABLEAU: ``to_column``
    - TABLEAU_TO_FOUNDATION: ``column``, ``card_index``, ``foundation`` (None scans)
    - TABLEAU_TO_TABLEAU: ``column``, ``card_index``, ``to_column``
    - FOUNDATION_TO_TABLEAU: ``foundation``, ``to_column``
    """

    kind: MoveKind
    column: int | None = None
    card_index: int | None = None
    to_column: int | None = None
    foundation: int | None = None

    def __str__(self) -> str:
        parts = [self.kind.value]
        for name in ("column", "card_index", "to_column", "foundation"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value}")
        return " ".join(parts)

    @classmethod
    def draw(cls) -> "Move":
        return cls(MoveKind.DRAW)

    @classmethod
    def waste_to_foundation(cls, foundation: int | None = None) -> "Move":
        return cls(MoveKind.WASTE_TO_FOUNDATION, foundation=foundation)

    @classmethod
    def waste_to_tableau(cls, to_column: int) -> "Move":
        return cls(MoveKind.WASTE_TO_TABLEAU, to_column=to_column)

    @classmethod
    def tableau_to_foundation(
        cls, column: int, card_index: int, foundation: int | None = None
    ) -> "Move":
        return cls(
            MoveKind.TABLEAU_TO_FOUNDATION,
            column=column,
            card_index=card_index,
            foundation=foundation,
        )

    @classmethod
    def tableau_to_tableau(cls, column: int, card_index: int, to_column: int) -> "Move":
        return cls(
            MoveKind.TABLEAU_TO_TABLEAU,
            column=column,
            card_index=card_index,
            to_column=to_column,
        )

    @classmethod
    def foundation_to_tableau(cls, foundation: int, to_column: int) -> "Move":
        return cls(MoveKind.FOUNDATION_TO_TABLEAU, foundation=foundation, to_column=to_column)
