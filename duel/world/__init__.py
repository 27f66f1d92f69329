"""
Board and state for the duel.

This module provides:
- Grid: Spatial logic and geometry
- Piece / PlayerRoster: Units and their owners
- Snapshot: Rules-relevant state, the only view agents copy
- GameState: Canonical state owned by DuelGame
"""

from .grid import Grid, GRID
from .state import Piece, PlayerRoster, Snapshot, GameState

__all__ = [
    "Grid",
    "GRID",
    "Piece",
    "PlayerRoster",
    "Snapshot",
    "GameState",
]
