"""
Core type definitions for the Kings of the West duel.

This module contains all fundamental types, enums, and constants used
throughout the system. No logic, just pure data structures.
"""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import Tuple
from dataclasses import dataclass

from infra.logger import get_logger

log = get_logger(__name__)

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (row, col) where:
# - Row 0 is player 2's back edge, row 5 is player 1's back edge
# - Col increases to the RIGHT
GridPos = Tuple[int, int]

ROWS = 6
COLS = 6


class Player(IntEnum):
    """Side of the duel. Values match the 1/2 numbering used on the wire."""
    ONE = 1
    TWO = 2

    def __str__(self) -> str:
        return f"Player {self.value}"

    @property
    def opponent(self) -> Player:
        """Get the opposing player."""
        return Player.TWO if self == Player.ONE else Player.ONE


# ============================================================================
# ARCHETYPES
# ============================================================================

class Archetype(Enum):
    """The three unit kinds. Fixes base hit points and attack bands."""
    KING = "king"
    GUNSLINGER = "gunslinger"
    BRUISER = "bruiser"

    def __str__(self) -> str:
        return self.value

    @property
    def base_hp(self) -> int:
        """Starting hit points."""
        return {
            Archetype.KING: 10,
            Archetype.GUNSLINGER: 7,
            Archetype.BRUISER: 8,
        }[self]

    @property
    def icon(self) -> str:
        """Get the display icon for this archetype."""
        return {
            Archetype.KING: "⭐",
            Archetype.GUNSLINGER: "\U0001F52B",
            Archetype.BRUISER: "\U0001FA93",
        }[self]


# Archetypes a player may pick for the four non-king roster slots.
ROSTER_CHOICES = (Archetype.GUNSLINGER, Archetype.BRUISER)
ROSTER_SIZE = 4


# ============================================================================
# PHASES & DICE
# ============================================================================

class Phase(Enum):
    """Game lifecycle: SETUP -> PLACEMENT -> PLAY -> FINISHED."""
    SETUP = "setup"
    PLACEMENT = "placement"
    PLAY = "play"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value


# Die face that forfeits the whole turn.
SKIP_FACE = 6


# ============================================================================
# DIFFICULTY
# ============================================================================

class Difficulty(Enum):
    """AI strength. Closed set: each value selects exactly one strategy."""
    EASY = "easy"
    MEDIUM = "medium"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Difficulty) -> Difficulty:
        """
        Strictly parse a difficulty.

        Raises:
            ValueError: If the value is not a recognised difficulty
        """
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None

    @classmethod
    def from_setting(cls, value: str | Difficulty | None) -> Difficulty:
        """
        Lenient parse for user-facing settings: unknown values become EASY.
        """
        if value is None:
            return cls.EASY
        try:
            return cls.parse(value)
        except ValueError:
            log.warning("Selected AI difficulty %r not implemented; defaulting to easy", value)
            return cls.EASY


# ============================================================================
# ACTION VALIDATION
# ============================================================================

@dataclass
class ActionValidation:
    """
    Structured result of validating (and possibly applying) a request.

    Attributes:
        valid: Whether the request was accepted
        error_code: Machine-readable error code (None if valid)
        message: Human-readable message explaining the result

    Error codes:
        - "WRONG_PHASE": Request not allowed in the current phase
        - "GAME_OVER": The game has finished
        - "ROSTER_SIZE": A roster does not hold exactly four picks
        - "ROSTER_ARCHETYPE": A roster pick is not a gunslinger or bruiser
        - "OUT_OF_BAND": Placement outside the player's two back rows
        - "OCCUPIED": Target cell holds a living piece
        - "NO_DICE": No die has been rolled this turn
        - "DICE_PENDING": A die was already rolled this turn
        - "TURN_FORFEIT": The die shows a 6
        - "NOT_YOUR_PIECE": Piece belongs to the other player
        - "UNKNOWN_PIECE": No living piece with that id
        - "ACTION_LOCKED": Another piece already acted this turn
        - "UNREACHABLE": Cell is not reachable under the die's step budget
        - "INVALID_TARGET": Target is missing, dead or friendly
        - "OUT_OF_RANGE": Target is outside the attacker's bands
        - "AI_TURN": A human request arrived while the AI side is to move
    """
    valid: bool
    error_code: str | None = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.valid

    @staticmethod
    def success(message: str = "") -> ActionValidation:
        """Create a validation success result."""
        return ActionValidation(valid=True, error_code=None, message=message)

    @staticmethod
    def fail(error_code: str, message: str) -> ActionValidation:
        """Create a validation failure result."""
        return ActionValidation(valid=False, error_code=error_code, message=message)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "error_code": self.error_code, "message": self.message}
