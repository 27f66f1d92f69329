"""
Action definitions and utilities.

An action is the unit of play handed from an AI (or the HTTP driver) to the
turn state machine: one acting piece, an optional destination cell, and an
optional attack target. This module provides:
- Action dataclass
- Parameter validation
- Action factory methods
- Dict serialization
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional

from .types import GridPos


@dataclass(frozen=True)
class Action:
    """
    A decision for a single piece.

    Combinations:
        - move only:        Action(piece_id, move=(r, c))
        - attack only:      Action(piece_id, target_id=t)
        - move then attack: Action(piece_id, move=(r, c), target_id=t)
        - no-op:            Action(piece_id)  (stay and do not attack)

    Actions are immutable and hashable so they can be de-duplicated and used
    as dictionary keys by the search agents.
    """

    piece_id: int
    move: Optional[GridPos] = None
    target_id: Optional[int] = None

    def __post_init__(self):
        """Validate action parameters after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Raises:
            ValueError: If parameters have the wrong shape
        """
        if not isinstance(self.piece_id, int):
            raise ValueError(f"'piece_id' must be an int, got {type(self.piece_id)}")

        if self.move is not None:
            if len(self.move) != 2 or not all(isinstance(v, int) for v in self.move):
                raise ValueError(f"'move' must be a (row, col) pair of ints, got {self.move!r}")
            # Normalise lists coming from JSON into tuples.
            object.__setattr__(self, "move", (self.move[0], self.move[1]))

        if self.target_id is not None and not isinstance(self.target_id, int):
            raise ValueError(f"'target_id' must be an int, got {type(self.target_id)}")

    @property
    def is_noop(self) -> bool:
        return self.move is None and self.target_id is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to a JSON-serializable dictionary."""
        return {
            "piece_id": self.piece_id,
            "move": list(self.move) if self.move is not None else None,
            "target_id": self.target_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        """
        Create an action from a dictionary.

        Raises:
            ValueError: If dictionary format is invalid
        """
        if "piece_id" not in data:
            raise ValueError("Action dictionary must contain 'piece_id'")

        move = data.get("move")
        return cls(
            piece_id=data["piece_id"],
            move=tuple(move) if move is not None else None,
            target_id=data.get("target_id"),
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        if self.is_noop:
            return f"STAY piece={self.piece_id}"
        parts = [f"piece={self.piece_id}"]
        if self.move is not None:
            parts.append(f"MOVE {self.move}")
        if self.target_id is not None:
            parts.append(f"ATTACK target={self.target_id}")
        return " ".join(parts)

    # FACTORY METHODS
    @staticmethod
    def stay(piece_id: int) -> Action:
        """Stay in place without attacking."""
        return Action(piece_id)

    @staticmethod
    def move_to(piece_id: int, cell: GridPos) -> Action:
        return Action(piece_id, move=cell)

    @staticmethod
    def attack(piece_id: int, target_id: int, move: Optional[GridPos] = None) -> Action:
        """Attack a target, optionally after moving to ``move``."""
        return Action(piece_id, move=move, target_id=target_id)
