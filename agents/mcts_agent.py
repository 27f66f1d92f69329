"""
Monte Carlo Tree Search agent.

Every node owns a private Snapshot. Dice are chance events: a node's side
to move rolls a fresh die into that node's snapshot the first time the
node is expanded, so each child fixes one sampled roll for the reply.

Search loop per iteration:
1. Selection - descend by UCT while the node is fully expanded
2. Expansion - try one random untried action
3. Simulation - random playout with fresh dice up to ``rollout_depth`` plies
4. Backpropagation - add the reward (1 win / 0.5 undecided / 0 loss) upwards

The move played is the root child with the most visits.
"""

from __future__ import annotations

import math
import random
from typing import Any, List, Optional

from duel.core.actions import Action
from duel.core.types import Player
from duel.mechanics import apply_action, legal_actions, pass_turn, roll_for_turn
from duel.world.state import Snapshot
from infra.logger import get_logger
from infra.settings import get_settings
from .base_agent import BaseAgent
from .registry import register_agent

log = get_logger(__name__)

WIN_REWARD = 1.0
DRAW_REWARD = 0.5
LOSS_REWARD = 0.0


class MCTSNode:
    """Search tree node holding its own snapshot."""

    def __init__(
        self,
        state: Snapshot,
        parent: Optional["MCTSNode"] = None,
        action: Optional[Action] = None,
        untried_actions: Optional[List[Action]] = None,
    ) -> None:
        self.state = state
        self.parent = parent
        self.action = action
        self.children: List["MCTSNode"] = []
        self.visits = 0
        self.value = 0.0
        # None until the node is first expanded
        self.untried_actions: Optional[List[Action]] = untried_actions

    def expand_actions(self, rng: random.Random) -> List[Action]:
        """Untried actions for the side to move, rolling its die on first use."""
        if self.untried_actions is None:
            if self.state.is_finished:
                self.untried_actions = []
            else:
                if self.state.dice is None:
                    roll_for_turn(self.state, rng)
                self.untried_actions = legal_actions(self.state)
        return self.untried_actions

    def uct_select_child(self, exploration: float) -> "MCTSNode":
        """Child maximising value/visits + C * sqrt(ln(N + 1) / n)."""
        log_parent = math.log(self.visits + 1)

        def uct(child: "MCTSNode") -> float:
            visits = max(child.visits, 1)
            return child.value / visits + exploration * math.sqrt(log_parent / visits)

        return max(self.children, key=uct)

    def add_child(self, action: Action, state: Snapshot) -> "MCTSNode":
        child = MCTSNode(state, parent=self, action=action)
        self.children.append(child)
        return child

    def update(self, reward: float) -> None:
        self.visits += 1
        self.value += reward

    def __repr__(self) -> str:
        return f"MCTSNode(action={self.action}, visits={self.visits}, value={self.value:.1f})"


@register_agent("mcts")
class MCTSAgent(BaseAgent):
    """
    UCT search over sampled dice, with random playouts.

    Defaults for iterations, exploration and rollout depth come from
    infra.settings (KOTW_MCTS_*).
    """

    def __init__(
        self,
        player: Player,
        name: str | None = None,
        *,
        iterations: Optional[int] = None,
        exploration: Optional[float] = None,
        rollout_depth: Optional[int] = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Args:
            player: Player to control
            name: Optional agent name
            iterations: Search rounds per decision
            exploration: UCT exploration constant C
            rollout_depth: Ply cap for random playouts
            seed: Seed for the agent's private RNG (None = random)
        """
        super().__init__(player, name)
        settings = get_settings()
        self.iterations = iterations if iterations is not None else settings.mcts_iterations
        self.exploration = exploration if exploration is not None else settings.mcts_exploration
        self.rollout_depth = rollout_depth if rollout_depth is not None else settings.mcts_rollout_depth
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        self.rng = random.Random(seed)

    def choose_action(self, state: Snapshot) -> Optional[Action]:
        root_state = state.clone()
        root_actions = legal_actions(root_state, self.player)
        if not root_actions:
            return None

        root = MCTSNode(root_state, untried_actions=list(root_actions))

        for _ in range(self.iterations):
            node = root

            # Selection
            while not node.expand_actions(self.rng) and node.children:
                node = node.uct_select_child(self.exploration)

            # Expansion
            untried = node.expand_actions(self.rng)
            if untried:
                action = untried.pop(self.rng.randrange(len(untried)))
                child_state = node.state.clone()
                apply_action(child_state, action)
                node = node.add_child(action, child_state)

            # Simulation
            reward = self.rollout(node.state.clone())

            # Backpropagation
            while node is not None:
                node.update(reward)
                node = node.parent

        best = max(root.children, key=lambda child: child.visits)
        log.debug(
            "%s searched %d iterations over %d actions; playing %s (%d visits)",
            self, self.iterations, len(root_actions), best.action, best.visits,
        )
        return best.action

    def rollout(self, state: Snapshot) -> float:
        """Random playout on ``state`` (mutated); reward from this agent's side."""
        depth = 0
        while not state.is_finished and depth < self.rollout_depth:
            depth += 1
            if state.dice is None:
                roll_for_turn(state, self.rng)
            actions = legal_actions(state)
            if not actions:
                pass_turn(state)
                continue
            apply_action(state, self.rng.choice(actions))
        return self.reward(state)

    def reward(self, state: Snapshot) -> float:
        if state.winner is None:
            return DRAW_REWARD
        return WIN_REWARD if state.winner == self.player else LOSS_REWARD
