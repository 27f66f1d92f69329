from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from agents import BaseAgent, create_agent_from_spec
from agents.spec import AgentSpec
from duel.core.actions import Action
from duel.core.types import ActionValidation, Phase, Player
from duel.game import DuelGame, auto_pick_roster
from infra.logger import get_logger
from infra.settings import get_settings
from .events import extract_events

log = get_logger(__name__)


@dataclass
class TurnRecord:
    """What one AI-driven turn did."""
    player: Player
    dice: Optional[int]
    action: Optional[Action]
    result: ActionValidation
    events: List[Dict[str, Any]] = field(default_factory=list)
    skipped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": int(self.player),
            "dice": self.dice,
            "action": self.action.to_dict() if self.action is not None else None,
            "result": self.result.to_dict(),
            "events": self.events,
            "skipped": self.skipped,
        }


@dataclass
class EpisodeResult:
    winner: Optional[Player]
    turns: int
    truncated: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": int(self.winner) if self.winner is not None else None,
            "turns": self.turns,
            "truncated": self.truncated,
        }


class GameRunner:
    """
    Drives AI-controlled turns of a DuelGame.

    The runner rolls for the AI, hands the agent a snapshot, and applies the
    returned action through DuelGame.apply_action. Anything that goes wrong
    inside the agent is logged and the turn is ended so the game never
    stalls.
    """

    def __init__(self, game: DuelGame, agents: Mapping[Player, BaseAgent]):
        self.game = game
        self.agents: Dict[Player, BaseAgent] = {Player(p): a for p, a in agents.items()}
        self.game.ai_players.update(self.agents)
        log.info("GameRunner initialized with %s", ", ".join(str(a) for a in self.agents.values()))

    @classmethod
    def from_specs(cls, game: DuelGame, specs: List[AgentSpec]) -> "GameRunner":
        agents: Dict[Player, BaseAgent] = {}
        for spec in specs:
            if spec.player in agents:
                raise ValueError(f"Multiple AgentSpecs found for {spec.player}; expected at most one.")
            agents[spec.player] = create_agent_from_spec(spec)
        return cls(game, agents)

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def is_ai_turn(self) -> bool:
        return self.game.phase == Phase.PLAY and self.game.current_player in self.agents

    def take_ai_turn(self) -> TurnRecord:
        """
        Play one full turn for the AI whose turn it is.

        Raises:
            ValueError: if it is not an AI player's turn
        """
        if not self.is_ai_turn():
            raise ValueError(f"Not an AI turn (phase={self.game.phase}, player={self.game.current_player})")

        player = self.game.current_player
        agent = self.agents[player]
        before = self.game.snapshot()

        # A die may already be showing if the AI was interrupted mid-turn.
        if self.game.state.dice is None:
            roll = self.game.roll()
            if not roll.validation:
                return TurnRecord(player, None, None, roll.validation)
            if roll.skipped:
                return TurnRecord(player, roll.value, None, roll.validation, skipped=True)
        dice = self.game.state.dice

        try:
            action = agent.choose_action(self.game.snapshot())
        except Exception:
            log.exception("%s raised while choosing an action; ending turn", agent)
            result = self.game.end_turn()
            return TurnRecord(player, dice, None, result)

        result = self.game.apply_action(action)
        events = extract_events(prev_state=before, state=self.game.snapshot())
        return TurnRecord(player, dice, action, result, events)

    def run_ai_turns(self) -> List[TurnRecord]:
        """Play AI turns until a human is to move or the game ends."""
        records: List[TurnRecord] = []
        while self.is_ai_turn():
            records.append(self.take_ai_turn())
        return records

    def run_episode(
        self,
        rosters: Optional[Mapping[Player, List[str]]] = None,
        max_turns: Optional[int] = None,
    ) -> EpisodeResult:
        """
        Play a whole AI-vs-AI game from SETUP.

        Rosters default to auto-picked ones; placement is automatic for every
        AI player. Stops after ``max_turns`` turns (KOTW_MAX_TURNS by default).
        """
        if set(self.agents) != set(Player):
            raise ValueError("run_episode needs an agent for both players")
        max_turns = max_turns if max_turns is not None else get_settings().max_turns

        for agent in self.agents.values():
            agent.reset()

        rosters = dict(rosters or {})
        for player in Player:
            if player not in rosters:
                rosters[player] = [a.value for a in auto_pick_roster(self.game.rng)]
        started = self.game.start(rosters[Player.ONE], rosters[Player.TWO])
        if not started:
            raise ValueError(started.message)

        turns = 0
        while self.game.phase == Phase.PLAY and turns < max_turns:
            self.take_ai_turn()
            turns += 1

        truncated = self.game.phase != Phase.FINISHED
        if truncated:
            log.info("Episode stopped after %d turns without a winner", turns)
        else:
            log.info("Episode finished after %d turns: %s wins", turns, self.game.winner)
        return EpisodeResult(self.game.winner, turns, truncated)
