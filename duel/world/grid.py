"""
Grid - Spatial logic for the duel board.

The Grid handles:
- Coordinate validation
- Distance calculations
- Orthogonal neighbours
- Home bands and king home cells per player

Coordinate System:
- Positions are (row, col)
- Row 0 is the top edge (player 2's back row)
- Row 5 is the bottom edge (player 1's back row)
"""

from __future__ import annotations
from typing import Tuple

from ..core.types import GridPos, Player, ROWS, COLS


class Grid:
    """
    The fixed 6x6 board.

    Provides spatial queries without game logic or state.

    Attributes:
        rows: Number of rows
        cols: Number of columns
    """

    # Orthogonal deltas in BFS expansion order.
    DIRECTIONS: Tuple[GridPos, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive: {rows}x{cols}")

        self.rows = rows
        self.cols = cols

    def in_bounds(self, pos: GridPos) -> bool:
        """
        Check if a position is within grid boundaries.

        Args:
            pos: Position to check (row, col)

        Returns:
            True if position is valid, False otherwise
        """
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    @staticmethod
    def manhattan_distance(a: GridPos, b: GridPos) -> int:
        """Manhattan (taxicab) distance between two positions."""
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def neighbors(self, pos: GridPos) -> list[GridPos]:
        """In-bounds orthogonal neighbours in a fixed order (down, up, right, left)."""
        r, c = pos
        candidates = [(r + dr, c + dc) for dr, dc in self.DIRECTIONS]
        return [p for p in candidates if self.in_bounds(p)]

    def home_rows(self, player: Player) -> Tuple[int, int]:
        """The two back rows a player may place pieces on."""
        if player == Player.ONE:
            return (self.rows - 2, self.rows - 1)
        return (0, 1)

    def home_cells(self, player: Player) -> list[GridPos]:
        """Every cell of a player's placement band, row-major."""
        return [(r, c) for r in self.home_rows(player) for c in range(self.cols)]

    def king_home(self, player: Player) -> GridPos:
        """
        Fixed cell where a player's king is auto-placed.

        Player 1: own back row, column 0. Player 2: the mirrored corner.
        """
        if player == Player.ONE:
            return (self.rows - 1, 0)
        return (0, self.cols - 1)

    def __str__(self) -> str:
        return f"Grid({self.rows}x{self.cols})"

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"


# Shared board geometry; the duel never uses another size.
GRID = Grid()
