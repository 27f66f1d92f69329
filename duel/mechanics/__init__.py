"""
Mechanics module - Rule resolution systems.

This module provides stateless resolvers over a Snapshot:
- MovementResolver: Breadth-first reachability and moves
- CombatResolver: Range-banded damage, elimination
- VictoryConditions: King / fighter elimination check
- turns: legal action enumeration and simulated application shared by agents

All resolvers are stateless - they take a Snapshot and return results
without keeping state of their own.
"""

from .movement import MovementResolver, MovementResult
from .combat import CombatResolver, CombatResult, attack_range, enemies_in_range, threat_count
from .victory import VictoryConditions, VictoryResult
from .dice import roll_die, roll_off, multiplier_for, step_budget, can_act
from .turns import legal_actions, apply_action, pass_turn, set_dice, roll_for_turn

__all__ = [
    "MovementResolver",
    "MovementResult",
    "CombatResolver",
    "CombatResult",
    "attack_range",
    "enemies_in_range",
    "threat_count",
    "VictoryConditions",
    "VictoryResult",
    "roll_die",
    "roll_off",
    "multiplier_for",
    "step_budget",
    "can_act",
    "legal_actions",
    "apply_action",
    "pass_turn",
    "set_dice",
    "roll_for_turn",
]
