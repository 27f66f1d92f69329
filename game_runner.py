"""
Run AI-vs-AI duels from the command line.

    python game_runner.py --p1 greedy --p2 mcts --games 20 --seed 7
"""

from __future__ import annotations

import argparse
import random
from collections import Counter
from typing import Dict, Optional, Sequence

from agents import AgentSpec, create_agent_from_spec, registered_keys
from duel.core.types import Player
from duel.game import DuelGame
from infra.logger import configure_logging, get_logger
from runtime.runner import EpisodeResult, GameRunner

log = get_logger(__name__)


def run_single_game(
    p1: str,
    p2: str,
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
) -> EpisodeResult:
    """
    Play one game between two registered agent types.

    Args:
        p1: Agent key for player 1 (e.g. "greedy")
        p2: Agent key for player 2
        seed: Seeds the game and both agents' RNGs
        max_turns: Turn cap (KOTW_MAX_TURNS when None)
    """
    rng = random.Random(seed)
    game = DuelGame(rng=rng)
    specs = [
        AgentSpec(type=p1, player=Player.ONE, init_params={"seed": rng.randrange(2**31)}),
        AgentSpec(type=p2, player=Player.TWO, init_params={"seed": rng.randrange(2**31)}),
    ]
    runner = GameRunner(game, {spec.player: create_agent_from_spec(spec) for spec in specs})
    return runner.run_episode(max_turns=max_turns)


def run_multiple_games(
    p1: str,
    p2: str,
    games: int,
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
) -> Dict[str, int]:
    """Play ``games`` games and tally wins per player plus unfinished games."""
    tally: Counter = Counter({"player_1": 0, "player_2": 0, "unfinished": 0})
    seeds = random.Random(seed)
    for index in range(games):
        result = run_single_game(p1, p2, seed=seeds.randrange(2**31), max_turns=max_turns)
        if result.winner is None:
            tally["unfinished"] += 1
        else:
            tally[f"player_{int(result.winner)}"] += 1
        log.info("Game %d/%d: %s", index + 1, games, result.to_dict())
    return dict(tally)


def build_parser() -> argparse.ArgumentParser:
    keys = registered_keys()
    parser = argparse.ArgumentParser(description="Kings of the West AI-vs-AI runner")
    parser.add_argument("--p1", default="greedy", choices=keys, help="agent for player 1")
    parser.add_argument("--p2", default="random", choices=keys, help="agent for player 2")
    parser.add_argument("--games", type=int, default=1, help="number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    parser.add_argument("--max-turns", type=int, default=None, help="turn cap per game")
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, logfile=None)

    tally = run_multiple_games(args.p1, args.p2, args.games, seed=args.seed, max_turns=args.max_turns)

    print(f"{args.p1} (Player 1) vs {args.p2} (Player 2) over {args.games} game(s)")
    print("=" * 60)
    print(f"  Player 1 wins: {tally['player_1']}")
    print(f"  Player 2 wins: {tally['player_2']}")
    print(f"  Unfinished:    {tally['unfinished']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
