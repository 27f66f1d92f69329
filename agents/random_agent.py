"""
Random agent implementation for testing and baseline comparison.

This agent picks uniformly among the legal actions of the current turn.
"""

import random
from typing import Any, Optional

from duel.core.actions import Action
from duel.core.types import Player
from duel.mechanics import legal_actions
from duel.world.state import Snapshot
from .base_agent import BaseAgent
from .registry import register_agent


@register_agent("random")
class RandomAgent(BaseAgent):
    """
    Agent that takes random actions.

    Decision process:
    - Sample uniformly from the legal action set for the rolled die.

    This serves as a baseline for AI-vs-AI runs.
    """

    def __init__(
        self,
        player: Player,
        name: str = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Initialize random agent.

        Args:
            player: Player to control
            name: Agent name (default: "RandomAgent")
            seed: Random seed for reproducibility (None = random)
        """
        super().__init__(player, name)
        self.rng = random.Random(seed)

    def choose_action(self, state: Snapshot) -> Optional[Action]:
        actions = legal_actions(state, self.player)
        if not actions:
            return None
        return self.rng.choice(actions)
