"""Pytest fixtures for Klondike engine tests."""

import pytest
from random import Random

from core.cards import Card, Rank, Suit, create_deck, deck_id
from core.game import KlondikeGame
from core.game.board import Board


def card(label: str, face_up: bool = True) -> Card:
    """Build a card from a label like 'AS' or '10H' with its fresh-deck id."""
    return Card.from_string(label, face_up=face_up)


def down(label: str) -> Card:
    """Build a face-down card."""
    return card(label, face_up=False)


def full_suit(suit: Suit, up_to: Rank = Rank.KING) -> list[Card]:
    """A foundation pile of ``suit`` from Ace to ``up_to``."""
    return [
        Card(deck_id(suit, rank), suit, rank, face_up=True)
        for rank in Rank
        if rank.value <= up_to.value
    ]


def load_board(
    game: KlondikeGame,
    stock: list[Card] | None = None,
    waste: list[Card] | None = None,
    foundations: list[list[Card]] | None = None,
    tableau: list[list[Card]] | None = None,
) -> KlondikeGame:
    """Replace a game's table with a hand-built one and clear its history."""
    board = Board(stock=list(stock or []), waste=list(waste or []))
    for i, pile in enumerate(foundations or []):
        board.foundations[i] = list(pile)
    for i, column in enumerate(tableau or []):
        board.tableau[i] = list(column)
    game._board = board
    game._history.clear()
    game._sync_phase()
    return game


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck():
    """A fresh, unshuffled deck."""
    return create_deck()


@pytest.fixture
def game(rng):
    """A new game instance."""
    return KlondikeGame(rng=rng)


@pytest.fixture
def empty_game(game):
    """A game with nothing on the table."""
    return load_board(game)


@pytest.fixture
def nearly_won_game(game):
    """Three complete foundations, diamonds up to the Queen, King of diamonds on the waste."""
    return load_board(
        game,
        waste=[card("KD")],
        foundations=[
            full_suit(Suit.SPADES),
            full_suit(Suit.HEARTS),
            full_suit(Suit.DIAMONDS, up_to=Rank.QUEEN),
            full_suit(Suit.CLUBS),
        ],
    )


def check_invariants(state) -> None:
    """Assert every table invariant on a GameState view."""
    ids = [c.id for c in state.all_cards()]
    assert sorted(ids) == list(range(52)), "cards lost or duplicated"

    assert all(not c.face_up for c in state.stock)
    assert all(c.face_up for c in state.waste)

    for pile in state.foundations:
        if pile:
            assert len({c.suit for c in pile}) == 1
            assert [c.rank.value for c in pile] == list(range(1, len(pile) + 1))
            assert all(c.face_up for c in pile)

    for column in state.tableau:
        if not column:
            continue
        assert column[-1].face_up, "column top must be face-up"
        first_up = next(i for i, c in enumerate(column) if c.face_up)
        suffix = column[first_up:]
        assert all(c.face_up for c in suffix), "face-up cards must form a suffix"
        for lower, upper in zip(suffix, suffix[1:]):
            assert upper.rank.value == lower.rank.value - 1
            assert upper.is_red != lower.is_red
