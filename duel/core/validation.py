"""
Shared request validation helpers.

DuelGame and the "what can this piece do?" selection query both go through
these checks, so the UI never offers something the rules would reject.
Every helper is read-only: it inspects the state and returns an
ActionValidation without mutating anything.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .types import ActionValidation, Archetype, GridPos, Phase, ROSTER_CHOICES, ROSTER_SIZE
from ..mechanics.combat import CombatResolver
from ..mechanics.dice import can_act, step_budget
from ..mechanics.movement import MovementResolver
from ..world.grid import GRID

if TYPE_CHECKING:
    from ..world.state import GameState, Piece

_movement = MovementResolver()


def validate_roster(choices: Sequence[Archetype | str], label: str = "Each player") -> ActionValidation:
    """A roster is exactly four gunslinger/bruiser picks (the king is implicit)."""
    if len(choices) != ROSTER_SIZE:
        return ActionValidation.fail(
            "ROSTER_SIZE",
            f"{label} must select exactly {ROSTER_SIZE} additional pieces (plus the king makes 5).",
        )
    for choice in choices:
        try:
            archetype = Archetype(choice) if not isinstance(choice, Archetype) else choice
        except ValueError:
            archetype = None
        if archetype not in ROSTER_CHOICES:
            return ActionValidation.fail(
                "ROSTER_ARCHETYPE",
                f"{label}: {choice!s} is not a selectable piece (choose gunslinger or bruiser)",
            )
    return ActionValidation.success()


def validate_placement(state: GameState, cell: GridPos) -> ActionValidation:
    if state.phase == Phase.FINISHED:
        return ActionValidation.fail("GAME_OVER", "The game is over")
    if state.phase != Phase.PLACEMENT or state.placement_owner is None or not state.pending_placement:
        return ActionValidation.fail("WRONG_PHASE", "Nothing to place right now")

    owner = state.placement_owner
    rows = GRID.home_rows(owner)
    if not GRID.in_bounds(cell) or cell[0] not in rows:
        return ActionValidation.fail(
            "OUT_OF_BAND",
            f"Choose a tile in your back two rows (rows {rows[0]}-{rows[1]})",
        )
    if state.is_occupied(cell):
        return ActionValidation.fail("OCCUPIED", "Tile occupied")
    return ActionValidation.success()


def validate_turn(state: GameState) -> ActionValidation:
    """The side to move has a usable die."""
    if state.phase == Phase.FINISHED:
        return ActionValidation.fail("GAME_OVER", "The game is over")
    if state.phase != Phase.PLAY:
        return ActionValidation.fail("WRONG_PHASE", f"Not in play (phase: {state.phase})")
    if state.dice is None:
        return ActionValidation.fail("NO_DICE", "Roll the die first")
    if not can_act(state.dice):
        return ActionValidation.fail("TURN_FORFEIT", "Rolled 6: turn skipped")
    return ActionValidation.success()


def validate_actor(state: GameState, piece: Piece | None) -> ActionValidation:
    """``piece`` may act this turn."""
    turn = validate_turn(state)
    if not turn:
        return turn
    if piece is None:
        return ActionValidation.fail("UNKNOWN_PIECE", "No such piece")
    if piece.owner != state.current_player:
        return ActionValidation.fail("NOT_YOUR_PIECE", f"That piece belongs to {piece.owner}")
    if state.action_locked and state.acting_piece_id != piece.id:
        return ActionValidation.fail("ACTION_LOCKED", "Another piece already acted this turn")
    return ActionValidation.success()


def validate_move(state: GameState, piece: Piece | None, cell: GridPos) -> ActionValidation:
    actor = validate_actor(state, piece)
    if not actor:
        return actor
    if state.action_locked:
        return ActionValidation.fail("ACTION_LOCKED", "This piece already moved; attack or end turn")
    if not GRID.in_bounds(cell):
        return ActionValidation.fail("OUT_OF_BAND", f"{cell} is off the board")
    if state.is_occupied(cell):
        return ActionValidation.fail("OCCUPIED", "Tile occupied")
    budget = step_budget(state.dice)
    if not _movement.can_reach(state, piece, cell, budget):
        return ActionValidation.fail(
            "UNREACHABLE",
            f"{piece.label()} cannot reach {cell} within {budget} step(s)",
        )
    return ActionValidation.success()


def validate_attack(state: GameState, attacker: Piece | None, target: Piece | None) -> ActionValidation:
    actor = validate_actor(state, attacker)
    if not actor:
        return actor
    if target is None or not target.alive or target.owner == attacker.owner:
        return ActionValidation.fail("INVALID_TARGET", "Target invalid or dead")
    if CombatResolver.damage_for(attacker, target) <= 0:
        return ActionValidation.fail("OUT_OF_RANGE", "Target out of range")
    return ActionValidation.success()
