"""Card, Suit and Rank types plus deck construction and shuffling."""

from dataclasses import dataclass, replace
from enum import Enum
from random import Random


class Suit(Enum):
    """Card suits, in deck-construction order."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is red (hearts or diamonds)."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def char(self) -> str:
        """Single-letter code used in face class names."""
        return "shdc"[self.value]


class Rank(Enum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if Rank.TWO.value <= self.value <= Rank.TEN.value:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def char(self) -> str:
        """Single-letter code used in face class names."""
        return "a23456789tjqk"[self.value - 1]


RANK_PARSE = {
    "A": Rank.ACE,
    "1": Rank.ACE,
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
}

SUIT_PARSE = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    ``id`` is assigned once when the deck is built and identifies the card in
    every pile for the rest of the game. Turning a card over yields a new value
    with the same ``id``.
    """

    id: int
    suit: Suit
    rank: Rank
    face_up: bool = False

    def __str__(self) -> str:
        return self.label if self.face_up else "??"

    def __repr__(self) -> str:
        side = "up" if self.face_up else "down"
        return f"Card({self.id}, {self.rank.name}, {self.suit.name}, {side})"

    @property
    def label(self) -> str:
        """Human-facing label such as ``10♥``."""
        return f"{self.rank}{self.suit}"

    @property
    def face_class(self) -> str:
        """CSS class naming the card face, e.g. ``cardas`` for the ace of spades."""
        return f"card{self.rank.char}{self.suit.char}"

    @property
    def is_red(self) -> bool:
        """Check if this card is red."""
        return self.suit.is_red

    def flipped(self, face_up: bool = True) -> "Card":
        """Return this card turned to the given side."""
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    @classmethod
    def from_string(cls, s: str, card_id: int | None = None, face_up: bool = True) -> "Card":
        """
        Create a card from a label like 'AS', '10♥' or 'kd'.

        When ``card_id`` is omitted the id matches the card's position in a
        fresh deck.
        """
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in RANK_PARSE:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in SUIT_PARSE:
            raise ValueError(f"Invalid suit: {suit_str}")

        rank = RANK_PARSE[rank_str]
        suit = SUIT_PARSE[suit_str]
        if card_id is None:
            card_id = deck_id(suit, rank)
        return cls(card_id, suit, rank, face_up)


def deck_id(suit: Suit, rank: Rank) -> int:
    """Return the id a (suit, rank) pair receives in a fresh deck."""
    return suit.value * len(Rank) + (rank.value - 1)


def create_deck() -> list[Card]:
    """
    Build a fresh 52-card deck.

    Cards are ordered suit-major, rank-minor, all face-down, with ids 0..51.
    """
    deck = []
    card_id = 0
    for suit in Suit:
        for rank in Rank:
            deck.append(Card(card_id, suit, rank, face_up=False))
            card_id += 1
    return deck


def shuffle(deck: list[Card], rng: Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of ``deck`` (Fisher-Yates).

    The input list is left untouched.

    Args:
        deck: Cards to shuffle
        rng: Random number generator for reproducible shuffles
    """
    rng = rng or Random()
    out = list(deck)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
