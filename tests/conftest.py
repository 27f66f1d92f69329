from pathlib import Path
import random
import sys

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from duel.core.types import Phase, Player
from duel.game import DuelGame
from duel.mechanics import set_dice
from duel.world.state import Piece, Snapshot


class ScriptedRandom(random.Random):
    """Random whose randint() returns queued values before falling back to the seeded stream."""

    rolls: list

    def randint(self, a, b):
        queued = getattr(self, "rolls", None)
        if queued:
            return queued.pop(0)
        return super().randint(a, b)


def make_scripted_rng(*rolls, seed=0):
    rng = ScriptedRandom(seed)
    rng.rolls = list(rolls)
    return rng


@pytest.fixture
def scripted_rng():
    """Factory for a Random that hands out the given die faces first."""
    return make_scripted_rng


@pytest.fixture
def make_snapshot():
    """Build a PLAY-phase snapshot from (owner, archetype, (row, col)) tuples; ids start at 1."""
    def build(pieces, current=Player.ONE, dice=None):
        state = Snapshot(phase=Phase.PLAY, current_player=current)
        for piece_id, (owner, archetype, pos) in enumerate(pieces, start=1):
            state.rosters[owner].pieces.append(Piece.create(piece_id, owner, archetype, pos))
        if dice is not None:
            set_dice(state, dice)
        return state
    return build


@pytest.fixture
def make_game():
    """Build a DuelGame already in PLAY with the given pieces and a scripted die."""
    def build(pieces, current=Player.ONE, rolls=(), ai_players=()):
        game = DuelGame(ai_players=ai_players, rng=make_scripted_rng(*rolls))
        state = game.state
        for owner, archetype, pos in pieces:
            state.rosters[owner].pieces.append(Piece.create(state.new_piece_id(), owner, archetype, pos))
        state.phase = Phase.PLAY
        state.current_player = current
        return game
    return build
