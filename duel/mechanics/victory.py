"""
Victory condition checking for the duel.

A player wins the instant the opponent has no living king, or no living
non-king pieces. The check runs after every attack resolution.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Dict, Any

from ..core.types import Phase, Player

if TYPE_CHECKING:
    from ..world.state import Snapshot


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        winner: Winning player (None while the game continues)
        reason: Human-readable explanation of the outcome
    """
    winner: Optional[Player] = None
    reason: str = "Game ongoing"

    @property
    def is_game_over(self) -> bool:
        return self.winner is not None

    def __str__(self) -> str:
        if self.winner is None:
            return "Game in progress"
        return f"{self.winner} wins: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": int(self.winner) if self.winner else None,
            "reason": self.reason,
        }


class VictoryConditions:
    """
    Stateless checker for the win condition.

    Usage:
        result = VictoryConditions().check(state)
        if result.is_game_over:
            print(result)
    """

    def check(self, state: Snapshot) -> VictoryResult:
        """
        Evaluate the win condition without touching the state.

        Players are examined in order, so if both sides were somehow broken
        at once player 1 is reported as the winner.
        """
        for player in Player:
            opponent = player.opponent
            roster = state.rosters[opponent]
            if roster.king() is None:
                return VictoryResult(player, f"{opponent}'s king was eliminated")
            if not roster.fighters():
                return VictoryResult(player, f"{opponent} has no fighters left")
        return VictoryResult()

    def apply(self, state: Snapshot) -> VictoryResult:
        """
        Check and, if the game is over, move the state to FINISHED.
        """
        result = self.check(state)
        if result.is_game_over:
            state.phase = Phase.FINISHED
            state.winner = result.winner
        return result
