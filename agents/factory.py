from __future__ import annotations

from typing import Any, Dict

from duel.core.types import Difficulty, Player

from .base_agent import BaseAgent
from .registry import resolve_agent_class
from .spec import AgentSpec

# Closed strategy set behind the difficulty selector.
DIFFICULTY_AGENTS: Dict[Difficulty, str] = {
    Difficulty.EASY: "greedy",
    Difficulty.MEDIUM: "mcts",
}


def create_agent_from_spec(spec: AgentSpec) -> BaseAgent:
    """Instantiate an agent from an AgentSpec."""
    cls = resolve_agent_class(spec.type)

    init_kwargs = dict(spec.init_params)
    init_kwargs.setdefault("player", spec.player)
    if spec.name is not None:
        init_kwargs.setdefault("name", spec.name)

    agent = cls(**init_kwargs)
    if not isinstance(agent, BaseAgent):
        raise TypeError(f"Agent {cls} is not a BaseAgent")
    return agent


def create_agent_for_difficulty(difficulty: Difficulty | str, player: Player, **init_params: Any) -> BaseAgent:
    """
    Build the AI behind a difficulty level.

    Args:
        difficulty: Difficulty enum or its string value (parsed strictly)
        player: Player the agent controls
        **init_params: Extra constructor arguments (e.g. seed, iterations)

    Raises:
        ValueError: for an unknown difficulty string
    """
    if not isinstance(difficulty, Difficulty):
        difficulty = Difficulty.parse(difficulty)
    spec = AgentSpec(type=DIFFICULTY_AGENTS[difficulty], player=Player(player), init_params=init_params)
    return create_agent_from_spec(spec)
