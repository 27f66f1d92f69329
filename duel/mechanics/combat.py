"""
CombatResolver - Attack range, damage and elimination.

Damage table (base damage before the dice multiplier):

    archetype        distance 1   distance 2-3   other
    gunslinger           3             2           0
    bruiser / king       3             0           0

A base damage of 0 means the target is out of range.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List

from ..core.types import Archetype, GridPos, Player
from ..world.grid import GRID
from .victory import VictoryConditions, VictoryResult

if TYPE_CHECKING:
    from ..world.state import Piece, Snapshot


def attack_range(archetype: Archetype, distance: int) -> int:
    """Base damage an archetype deals at a Manhattan distance."""
    if distance == 1:
        return 3
    if archetype == Archetype.GUNSLINGER and 2 <= distance <= 3:
        return 2
    return 0


def enemies_in_range(state: Snapshot, piece: Piece, cell: GridPos) -> List[Piece]:
    """Living enemies ``piece`` could hit if it stood on ``cell``."""
    return [
        enemy for enemy in state.pieces(piece.owner.opponent)
        if attack_range(piece.archetype, GRID.manhattan_distance(cell, enemy.pos)) > 0
    ]


def threat_count(state: Snapshot, owner: Player, cell: GridPos) -> int:
    """How many living enemies of ``owner`` could hit ``cell`` from where they stand."""
    return sum(
        1 for enemy in state.pieces(owner.opponent)
        if attack_range(enemy.archetype, GRID.manhattan_distance(cell, enemy.pos)) > 0
    )


@dataclass
class CombatResult:
    """
    Result of resolving a single attack.

    Attributes:
        attacker_id: Attacking piece
        target_id: Targeted piece
        success: Whether damage was dealt
        damage: Damage dealt (0 on failure)
        eliminated: Whether the target was removed
        failure_reason: Machine-readable reason when the attack is rejected
        victory: Win check run right after the attack (None on failure)
    """
    attacker_id: int
    target_id: int
    success: bool
    damage: int = 0
    eliminated: bool = False
    failure_reason: str | None = None
    victory: VictoryResult | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attacker_id": self.attacker_id,
            "target_id": self.target_id,
            "success": self.success,
            "damage": self.damage,
            "eliminated": self.eliminated,
            "failure_reason": self.failure_reason,
            "victory": self.victory.to_dict() if self.victory else None,
        }


class CombatResolver:
    """
    Stateless resolver for attacks.

    The resolver re-validates range even though callers should only ever
    offer in-range targets.
    """

    def __init__(self, victory: VictoryConditions | None = None):
        self._victory = victory or VictoryConditions()

    @staticmethod
    def damage_for(attacker: Piece, target: Piece, multiplier: int = 1, origin: GridPos | None = None) -> int:
        """Damage ``attacker`` would deal to ``target`` from ``origin`` (default: its own cell)."""
        origin = origin if origin is not None else attacker.pos
        distance = GRID.manhattan_distance(origin, target.pos)
        return attack_range(attacker.archetype, distance) * multiplier

    def resolve_attack(self, state: Snapshot, attacker: Piece, target: Piece, multiplier: int = 1) -> CombatResult:
        """
        Apply an attack, remove the target if it drops to 0 hp, then check for a win.
        """
        if not target.alive or target.owner == attacker.owner or state.get_piece(target.id) is not target:
            return CombatResult(attacker.id, target.id, False, failure_reason="INVALID_TARGET")

        damage = self.damage_for(attacker, target, multiplier)
        if damage <= 0:
            return CombatResult(attacker.id, target.id, False, failure_reason="OUT_OF_RANGE")

        target.hp -= damage
        eliminated = not target.alive
        if eliminated:
            state.rosters[target.owner].remove_dead()

        victory = self._victory.apply(state)
        return CombatResult(
            attacker_id=attacker.id,
            target_id=target.id,
            success=True,
            damage=damage,
            eliminated=eliminated,
            victory=victory,
        )
