import logging

import pytest

from agents import BaseAgent, GreedyAgent, RandomAgent
from duel.core.actions import Action
from duel.core.types import Archetype, Phase, Player
from duel.game import DuelGame
from game_runner import main, run_multiple_games
from runtime.events import extract_events
from runtime.runner import GameRunner

P1, P2 = Player.ONE, Player.TWO
K, G, B = Archetype.KING, Archetype.GUNSLINGER, Archetype.BRUISER

BASE = [
    (P1, K, (5, 0)), (P1, G, (4, 1)), (P1, B, (4, 4)),
    (P2, K, (0, 5)), (P2, G, (1, 1)), (P2, B, (0, 3)),
]


class ExplodingAgent(BaseAgent):
    def choose_action(self, state):
        raise RuntimeError("boom")


class GhostAgent(BaseAgent):
    def choose_action(self, state):
        return Action(999, target_id=4)


def test_agent_exception_ends_turn(make_game, caplog):
    game = make_game(BASE, rolls=(2,))
    runner = GameRunner(game, {P1: ExplodingAgent(P1)})

    with caplog.at_level(logging.WARNING):
        record = runner.take_ai_turn()

    assert record.action is None
    assert record.dice == 2
    assert game.current_player == P2
    assert game.state.dice is None
    assert any(r.exc_info for r in caplog.records)


def test_agent_unknown_piece_is_logged_and_turn_ended(make_game, caplog):
    game = make_game(BASE, rolls=(3,))
    runner = GameRunner(game, {P1: GhostAgent(P1)})

    with caplog.at_level(logging.WARNING):
        record = runner.take_ai_turn()

    assert not record.result
    assert record.result.error_code == "UNKNOWN_PIECE"
    assert game.current_player == P2
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_rolled_six_is_recorded_as_skip(make_game):
    game = make_game(BASE, rolls=(6,))
    runner = GameRunner(game, {P1: GreedyAgent(P1)})
    record = runner.take_ai_turn()
    assert record.skipped
    assert record.action is None
    assert game.current_player == P2


def test_take_ai_turn_refuses_human_turn(make_game):
    game = make_game(BASE, current=P1)
    runner = GameRunner(game, {P2: GreedyAgent(P2)})
    assert not runner.is_ai_turn()
    with pytest.raises(ValueError):
        runner.take_ai_turn()


def test_run_ai_turns_stops_at_human(make_game):
    game = make_game(BASE, current=P2, rolls=(1,))
    runner = GameRunner(game, {P2: GreedyAgent(P2)})
    records = runner.run_ai_turns()
    assert len(records) == 1
    assert records[0].player == P2
    assert game.current_player == P1 or game.phase == Phase.FINISHED


def test_greedy_vs_random_episode_terminates():
    game = DuelGame(seed=21)
    runner = GameRunner(game, {P1: GreedyAgent(P1), P2: RandomAgent(P2, seed=4)})

    result = runner.run_episode(max_turns=400)

    assert result.turns <= 400
    assert result.truncated == (game.phase != Phase.FINISHED)
    if not result.truncated:
        assert result.winner in (P1, P2)
        assert game.winner == result.winner


def test_episode_with_capped_turns_reports_truncation():
    game = DuelGame(seed=5)
    runner = GameRunner(game, {P1: RandomAgent(P1, seed=1), P2: RandomAgent(P2, seed=2)})
    result = runner.run_episode(max_turns=1)
    assert result.turns == 1
    assert result.truncated
    assert result.winner is None


def test_episode_needs_both_agents():
    runner = GameRunner(DuelGame(seed=1), {P1: GreedyAgent(P1)})
    with pytest.raises(ValueError):
        runner.run_episode()


def test_extract_events_reports_damage_and_kills(make_snapshot):
    before = make_snapshot(BASE)
    after = before.clone()
    after.get_piece(5).hp -= 3
    after.get_piece(6).hp = 0
    after.rosters[P2].remove_dead()

    events = extract_events(prev_state=before, state=after)

    assert {"type": "DAMAGE", "piece_id": 5, "owner": 2, "damage": 3, "hp": 4} in events
    assert any(e["type"] == "PIECE_ELIMINATED" and e["piece_id"] == 6 for e in events)


def test_multiple_games_tally_adds_up():
    tally = run_multiple_games("greedy", "random", games=2, seed=3, max_turns=300)
    assert sum(tally.values()) == 2


def test_cli_prints_tally(capsys):
    assert main(["--p1", "random", "--p2", "random", "--games", "1", "--seed", "9", "--max-turns", "50"]) == 0
    out = capsys.readouterr().out
    assert "Player 1 wins:" in out
