"""
AI players for Kings of the West.

This module provides:
- BaseAgent: Abstract interface for all agents
- GreedyAgent: One-ply heuristic ("greedy", difficulty easy)
- MCTSAgent: Monte Carlo Tree Search ("mcts", difficulty medium)
- RandomAgent: Uniform baseline ("random")
- Registry and factory helpers to build agents by key or difficulty
"""

from .base_agent import BaseAgent
from .greedy_agent import GreedyAgent
from .mcts_agent import MCTSAgent, MCTSNode
from .random_agent import RandomAgent
from .registry import AGENT_REGISTRY, register_agent, registered_keys, resolve_agent_class
from .spec import AgentSpec
from .factory import DIFFICULTY_AGENTS, create_agent_for_difficulty, create_agent_from_spec

__all__ = [
    "BaseAgent",
    "GreedyAgent",
    "MCTSAgent",
    "MCTSNode",
    "RandomAgent",
    "AGENT_REGISTRY",
    "register_agent",
    "registered_keys",
    "resolve_agent_class",
    "AgentSpec",
    "DIFFICULTY_AGENTS",
    "create_agent_for_difficulty",
    "create_agent_from_spec",
]
