"""
Game state for the duel.

Two layers:
- Snapshot: rosters, dice, phase, current player and winner. This is the
  only structure agents see or copy, so search can clone it freely without
  any risk of touching the live game.
- GameState: the canonical instance owned by DuelGame. Extends Snapshot with
  UI selection, placement bookkeeping and per-turn action locking.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional

from ..core.types import Archetype, GridPos, Phase, Player
from .grid import GRID


@dataclass
class Piece:
    """A single unit on the board."""
    id: int
    owner: Player
    archetype: Archetype
    row: int
    col: int
    hp: int

    @classmethod
    def create(cls, piece_id: int, owner: Player, archetype: Archetype, pos: GridPos) -> Piece:
        """Build a fresh piece at full hit points."""
        return cls(
            id=piece_id,
            owner=owner,
            archetype=archetype,
            row=pos[0],
            col=pos[1],
            hp=archetype.base_hp,
        )

    @property
    def pos(self) -> GridPos:
        return (self.row, self.col)

    @property
    def is_king(self) -> bool:
        return self.archetype == Archetype.KING

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def label(self) -> str:
        """Short description used in log lines."""
        return f"{self.owner}'s {self.archetype}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner": int(self.owner),
            "type": self.archetype.value,
            "r": self.row,
            "c": self.col,
            "hp": self.hp,
            "is_king": self.is_king,
            "icon": self.archetype.icon,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Piece:
        return cls(
            id=data["id"],
            owner=Player(data["owner"]),
            archetype=Archetype(data["type"]),
            row=data["r"],
            col=data["c"],
            hp=data["hp"],
        )


@dataclass
class PlayerRoster:
    """One player's pieces, in placement order."""
    owner: Player
    pieces: List[Piece] = field(default_factory=list)

    def living(self) -> List[Piece]:
        return [p for p in self.pieces if p.alive]

    def king(self) -> Optional[Piece]:
        for p in self.pieces:
            if p.is_king and p.alive:
                return p
        return None

    def fighters(self) -> List[Piece]:
        """Living non-king pieces."""
        return [p for p in self.pieces if p.alive and not p.is_king]

    def remove_dead(self) -> List[Piece]:
        """Drop dead pieces from the roster and return them."""
        dead = [p for p in self.pieces if not p.alive]
        if dead:
            self.pieces = [p for p in self.pieces if p.alive]
        return dead

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)


def _empty_rosters() -> Dict[Player, PlayerRoster]:
    return {player: PlayerRoster(player) for player in Player}


@dataclass
class Snapshot:
    """
    Rules-relevant view of a game.

    Every mechanics function takes a Snapshot (or a GameState, which is one)
    and reads occupancy, dice and phase from it.
    """
    rosters: Dict[Player, PlayerRoster] = field(default_factory=_empty_rosters)
    current_player: Optional[Player] = None
    phase: Phase = Phase.SETUP
    dice: Optional[int] = None
    dice_multiplier: int = 1
    winner: Optional[Player] = None

    # ========================================================================
    # PIECE QUERIES
    # ========================================================================

    def pieces(self, player: Optional[Player] = None, alive_only: bool = True) -> List[Piece]:
        """Pieces of one player (or both, player 1 first)."""
        owners = [player] if player is not None else list(Player)
        result: List[Piece] = []
        for owner in owners:
            for p in self.rosters[owner].pieces:
                if alive_only and not p.alive:
                    continue
                result.append(p)
        return result

    def get_piece(self, piece_id: int) -> Optional[Piece]:
        """Look up a living piece by id."""
        for roster in self.rosters.values():
            for p in roster.pieces:
                if p.id == piece_id and p.alive:
                    return p
        return None

    def occupant_at(self, row: int, col: int) -> Optional[Piece]:
        """The sole living piece at a cell, or None."""
        for roster in self.rosters.values():
            for p in roster.pieces:
                if p.row == row and p.col == col and p.alive:
                    return p
        return None

    def is_occupied(self, pos: GridPos) -> bool:
        return self.occupant_at(pos[0], pos[1]) is not None

    def king(self, player: Player) -> Optional[Piece]:
        return self.rosters[player].king()

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    # ========================================================================
    # COPY / SERIALIZATION
    # ========================================================================

    def clone(self) -> Snapshot:
        """
        Independent copy of the rules-relevant fields.

        Pieces are plain value objects so a field-level copy is a deep copy.
        """
        return Snapshot(
            rosters={
                owner: PlayerRoster(owner, [replace(p) for p in roster.pieces])
                for owner, roster in self.rosters.items()
            },
            current_player=self.current_player,
            phase=self.phase,
            dice=self.dice,
            dice_multiplier=self.dice_multiplier,
            winner=self.winner,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable view of the snapshot."""
        return {
            "grid": {"rows": GRID.rows, "cols": GRID.cols},
            "players": {
                str(int(owner)): {"pieces": [p.to_dict() for p in roster.pieces]}
                for owner, roster in self.rosters.items()
            },
            "current_player": int(self.current_player) if self.current_player else None,
            "phase": self.phase.value,
            "dice": self.dice,
            "dice_multiplier": self.dice_multiplier,
            "winner": int(self.winner) if self.winner else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Snapshot:
        snapshot = cls()
        snapshot._load_core(data)
        return snapshot

    def _load_core(self, data: Dict[str, Any]) -> None:
        for owner_key, roster_data in data.get("players", {}).items():
            owner = Player(int(owner_key))
            self.rosters[owner] = PlayerRoster(
                owner, [Piece.from_dict(p) for p in roster_data.get("pieces", [])]
            )
        current = data.get("current_player")
        self.current_player = Player(current) if current else None
        self.phase = Phase(data.get("phase", Phase.SETUP.value))
        self.dice = data.get("dice")
        self.dice_multiplier = data.get("dice_multiplier", 1)
        winner = data.get("winner")
        self.winner = Player(winner) if winner else None

    def __str__(self) -> str:
        alive = len(self.pieces())
        return (f"Snapshot(phase={self.phase}, player={self.current_player}, "
                f"dice={self.dice}, pieces={alive})")


@dataclass
class GameState(Snapshot):
    """
    The canonical game state. Mutated only by DuelGame.

    Attributes beyond Snapshot:
        selected_piece_id: Piece the UI last selected (no rule effect)
        placement_owner: Player currently dropping pieces
        pending_placement: Archetypes still to place for placement_owner
        roster_choices: Each player's four chosen archetypes
        action_locked: A piece has moved this turn; only it may still attack
        acting_piece_id: The piece that moved this turn
    """
    selected_piece_id: Optional[int] = None
    placement_owner: Optional[Player] = None
    pending_placement: List[Archetype] = field(default_factory=list)
    roster_choices: Dict[Player, List[Archetype]] = field(default_factory=dict)
    action_locked: bool = False
    acting_piece_id: Optional[int] = None
    next_piece_id: int = 1

    @property
    def awaiting_placement(self) -> int:
        """Pieces the active placer still has to drop."""
        return len(self.pending_placement)

    def new_piece_id(self) -> int:
        piece_id = self.next_piece_id
        self.next_piece_id += 1
        return piece_id

    def snapshot(self) -> Snapshot:
        """Copy of just the rules-relevant fields, safe to hand to an agent."""
        return Snapshot.clone(self)

    def clone(self) -> GameState:
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "selected_piece_id": self.selected_piece_id,
            "placement_owner": int(self.placement_owner) if self.placement_owner else None,
            "pending_placement": [a.value for a in self.pending_placement],
            "awaiting_placement": self.awaiting_placement,
            "roster_choices": {
                str(int(owner)): [a.value for a in choices]
                for owner, choices in self.roster_choices.items()
            },
            "action_locked": self.action_locked,
            "acting_piece_id": self.acting_piece_id,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameState:
        state = cls()
        state._load_core(data)
        owner = data.get("placement_owner")
        state.placement_owner = Player(owner) if owner else None
        state.pending_placement = [Archetype(a) for a in data.get("pending_placement", [])]
        state.roster_choices = {
            Player(int(k)): [Archetype(a) for a in v]
            for k, v in data.get("roster_choices", {}).items()
        }
        state.selected_piece_id = data.get("selected_piece_id")
        state.action_locked = data.get("action_locked", False)
        state.acting_piece_id = data.get("acting_piece_id")
        ids = [p.id for p in state.pieces(alive_only=False)]
        state.next_piece_id = max(ids, default=0) + 1
        return state
