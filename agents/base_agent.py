"""
Base agent interface for Kings of the West.

All AI players implement this interface so the runner can drive them
interchangeably.
"""

from abc import ABC, abstractmethod
from typing import Optional

from duel.core.actions import Action
from duel.core.types import Player
from duel.world.state import Snapshot


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    Agents observe a read-only Snapshot and return one Action for the
    side to move. They must never mutate the snapshot they are given;
    any search happens on private clones.

    Subclasses must implement:
    - choose_action(): Produce the action for this turn

    Attributes:
        player: The player this agent controls
        name: Agent name for logging/identification
    """

    def __init__(self, player: Player, name: str = None):
        """
        Initialize the agent.

        Args:
            player: Player this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.player = Player(player)
        self.name = name or self.__class__.__name__

    @abstractmethod
    def choose_action(self, state: Snapshot) -> Optional[Action]:
        """
        Pick one action for the current turn.

        Called after the die has been rolled (``state.dice`` is set). The
        agent should:
        1. Clone the state if it needs to simulate anything
        2. Enumerate candidates with duel.mechanics.legal_actions
        3. Return the chosen Action

        Args:
            state: Snapshot of the game with the current die

        Returns:
            The chosen Action, or None when there is nothing to do
            (no living pieces, no die, a 6, or no candidates)

        Notes:
            - The returned action must come from the legal action set
            - Invalid actions are logged and the turn is ended
        """
        pass

    def reset(self) -> None:
        """
        Reset agent state between games.

        Override if your agent keeps state across turns.
        """
        pass

    def __str__(self) -> str:
        return f"{self.name} ({self.player})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(player={int(self.player)}, name='{self.name}')"
