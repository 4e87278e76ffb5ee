"""Property-based tests: table invariants hold through random play."""

from random import Random

from hypothesis import given, settings, strategies as st

from core.game import KlondikeGame, Move
from conftest import check_invariants

UNDO = "undo"


def _play(seed: int, choices: list[int]):
    """Yield (game, pick, state_before) for each step of a random game."""
    game = KlondikeGame(rng=Random(seed))
    for choice in choices:
        options: list[Move | str] = list(game.legal_moves()) + [UNDO]
        pick = options[choice % len(options)]
        yield game, pick, game.get_state()


@settings(max_examples=40, deadline=None)
@given(seed=st.integers(0, 2**32 - 1), choices=st.lists(st.integers(0, 10_000), max_size=80))
def test_random_play_preserves_invariants(seed, choices):
    """Test closure, foundation order and tableau alternation after every step."""
    for game, pick, _ in _play(seed, choices):
        if pick == UNDO:
            game.undo()
        else:
            assert game.apply(pick)
        check_invariants(game.get_state())
        assert game.is_win() == all(len(p) == 13 for p in game.get_state().foundations)


@settings(max_examples=40, deadline=None)
@given(seed=st.integers(0, 2**32 - 1), choices=st.lists(st.integers(0, 10_000), max_size=60))
def test_every_move_undoes_exactly(seed, choices):
    """Test each legal move followed by undo restores the prior state."""
    for game, pick, before in _play(seed, choices):
        if pick == UNDO:
            continue
        depth = game.undo_depth
        assert game.apply(pick)
        assert game.undo()
        assert game.get_state() == before
        assert game.undo_depth == depth
        game.apply(pick)


@settings(max_examples=25, deadline=None)
@given(seed=st.integers(0, 2**32 - 1), choices=st.lists(st.integers(0, 10_000), max_size=40))
def test_probes_never_mutate(seed, choices):
    """Test can_apply on every hint leaves the game untouched."""
    for game, pick, before in _play(seed, choices):
        depth = game.undo_depth
        for move in game.legal_moves():
            assert game.can_apply(move)
        assert game.get_state() == before
        assert game.undo_depth == depth
        if pick != UNDO:
            game.apply(pick)
