"""
Core types and constants for the duel.
"""

# Instead of from duel.core.types import Player, you can do: from duel.core import Player
from .types import (
    GridPos,
    Player,
    Archetype,
    Phase,
    Difficulty,
    ActionValidation,
    ROWS,
    COLS,
    ROSTER_CHOICES,
    ROSTER_SIZE,
)
from .actions import Action


__all__ = [
    "GridPos",
    "Player",
    "Archetype",
    "Phase",
    "Difficulty",
    "ActionValidation",
    "Action",
    "ROWS",
    "COLS",
    "ROSTER_CHOICES",
    "ROSTER_SIZE",
]
