"""
Greedy agent: one-ply scoring of every legal action.

Score for a candidate (piece, destination, optional target):
- damage x 10, plus 50 when the hit would kill
- minus 6 for every enemy that could hit the destination
- plus (10 - distance to the enemy king) while that king lives
- plus 1 for actually moving

The first candidate with the strictly highest score is played, so the
choice is deterministic for a given state.
"""

from typing import Any, List, Optional, Tuple

from duel.core.actions import Action
from duel.core.types import GridPos, Player
from duel.mechanics import CombatResolver, legal_actions, threat_count
from duel.world.grid import GRID
from duel.world.state import Piece, Snapshot
from infra.logger import get_logger
from ..base_agent import BaseAgent
from ..registry import register_agent

log = get_logger(__name__)

DAMAGE_WEIGHT = 10
KILL_BONUS = 50
THREAT_PENALTY = 6
KING_PULL = 10
MOVE_BONUS = 1


@register_agent("greedy")
class GreedyAgent(BaseAgent):
    """
    Greedy policy scoring damage, kills, exposure and advance on the king.
    """

    def __init__(self, player: Player, name: str | None = None, **_: Any):
        super().__init__(player, name)

    def choose_action(self, state: Snapshot) -> Optional[Action]:
        """
        Score every legal action on a private clone and return the best one.
        """
        sim = state.clone()
        if not sim.pieces(self.player):
            return None

        candidates = legal_actions(sim, self.player)
        if not candidates:
            return None

        best: Optional[Action] = None
        best_score = float("-inf")
        for action in candidates:
            score = self.score_action(sim, action)
            if score > best_score:
                best, best_score = action, score

        log.debug("%s picked %s (score %s of %d candidates)", self, best, best_score, len(candidates))
        return best

    def score_action(self, state: Snapshot, action: Action) -> float:
        """Heuristic value of ``action`` for this agent in ``state``."""
        piece = state.get_piece(action.piece_id)
        if piece is None:
            return float("-inf")
        origin = action.move if action.move is not None else piece.pos

        score = 0.0
        if action.target_id is not None:
            target = state.get_piece(action.target_id)
            if target is not None:
                damage = CombatResolver.damage_for(piece, target, state.dice_multiplier, origin=origin)
                score += damage * DAMAGE_WEIGHT
                if damage >= target.hp:
                    score += KILL_BONUS

        score -= threat_count(state, piece.owner, origin) * THREAT_PENALTY
        score += self._king_pull(state, piece, origin)
        if action.move is not None:
            score += MOVE_BONUS
        return score

    @staticmethod
    def _king_pull(state: Snapshot, piece: Piece, origin: GridPos) -> int:
        king = state.king(piece.owner.opponent)
        if king is None:
            return 0
        return KING_PULL - GRID.manhattan_distance(origin, king.pos)

    def ranked(self, state: Snapshot) -> List[Tuple[Action, float]]:
        """All legal actions with scores, best first (stable on ties)."""
        sim = state.clone()
        scored = [(a, self.score_action(sim, a)) for a in legal_actions(sim, self.player)]
        return sorted(scored, key=lambda item: item[1], reverse=True)
