"""
Dice semantics.

A single six-sided die decides each turn's budget:
    1-3  move up to N steps, then optionally attack (x1)
    4    move 0-1 step, then attack (x2)
    5    move 0-1 step, then attack (x3)
    6    turn forfeited
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from ..core.types import Player, SKIP_FACE


def roll_die(rng: random.Random) -> int:
    return rng.randint(1, 6)


def multiplier_for(dice: Optional[int]) -> int:
    """Damage multiplier opened by a roll."""
    if dice == 4:
        return 2
    if dice == 5:
        return 3
    return 1


def step_budget(dice: Optional[int]) -> int:
    """Orthogonal steps a piece may take under a roll (0 when it cannot act)."""
    if dice is None:
        return 0
    if 1 <= dice <= 3:
        return dice
    if dice in (4, 5):
        return 1
    return 0


def can_act(dice: Optional[int]) -> bool:
    """True when a roll allows any action at all."""
    return dice is not None and 1 <= dice < SKIP_FACE


def roll_off(rng: random.Random) -> Tuple[Player, int, int]:
    """
    Dice duel for the first move: both players roll until the rolls differ.

    Returns:
        (starting player, player 1's roll, player 2's roll)
    """
    a, b = roll_die(rng), roll_die(rng)
    while a == b:
        a, b = roll_die(rng), roll_die(rng)
    return (Player.ONE if a > b else Player.TWO), a, b
