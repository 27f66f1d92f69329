"""
MovementResolver - Movement reachability and resolution.

This module handles:
- Breadth-first reachability under an orthogonal step budget
- Checking bounds and occupancy
- Applying position changes
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Set

from ..core.types import GridPos
from ..world.grid import GRID

if TYPE_CHECKING:
    from ..world.state import Piece, Snapshot


@dataclass
class MovementResult:
    """
    Result of resolving a single move.

    Attributes:
        piece_id: ID of the piece that moved (or tried to)
        success: Whether movement succeeded
        old_pos: Position before movement
        new_pos: Position after movement (same as old if failed)
        failure_reason: Machine-readable reason code when movement fails
    """
    piece_id: int
    success: bool
    old_pos: GridPos
    new_pos: GridPos
    failure_reason: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "piece_id": self.piece_id,
            "success": self.success,
            "old_pos": list(self.old_pos),
            "new_pos": list(self.new_pos),
            "failure_reason": self.failure_reason,
        }


class MovementResolver:
    """
    Stateless resolver for movement.

    Occupied cells are dead ends: they block passage entirely, so a piece
    never jumps over another piece even when the cell beyond is empty.
    """

    def reachable_cells(self, state: Snapshot, piece: Piece, steps: int) -> List[GridPos]:
        """
        Empty cells reachable within ``steps`` orthogonal moves.

        Args:
            state: Snapshot providing occupancy
            piece: Moving piece (its own cell is the origin, never included)
            steps: Step budget

        Returns:
            Cells in BFS discovery order
        """
        if steps <= 0:
            return []

        origin = piece.pos
        seen: Set[GridPos] = {origin}
        queue = deque([(origin, 0)])
        reachable: List[GridPos] = []

        while queue:
            cur, dist = queue.popleft()
            for nxt in GRID.neighbors(cur):
                if nxt in seen:
                    continue
                seen.add(nxt)
                if state.is_occupied(nxt):
                    continue
                nd = dist + 1
                if nd > steps:
                    continue
                reachable.append(nxt)
                queue.append((nxt, nd))

        return reachable

    def can_reach(self, state: Snapshot, piece: Piece, cell: GridPos, steps: int) -> bool:
        return cell in self.reachable_cells(state, piece, steps)

    def resolve_move(self, state: Snapshot, piece: Piece, cell: GridPos, steps: int) -> MovementResult:
        """
        Validate and apply a move.

        Failure leaves the state untouched.
        """
        old_pos = piece.pos

        if not GRID.in_bounds(cell):
            return MovementResult(piece.id, False, old_pos, old_pos, "OUT_OF_BOUNDS")
        if state.is_occupied(cell):
            return MovementResult(piece.id, False, old_pos, old_pos, "OCCUPIED")
        if not self.can_reach(state, piece, cell, steps):
            return MovementResult(piece.id, False, old_pos, old_pos, "UNREACHABLE")

        piece.row, piece.col = cell
        return MovementResult(piece.id, True, old_pos, cell)
