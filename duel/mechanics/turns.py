"""
Turn-level rules shared by the live game and every agent's simulation.

- set_dice / pass_turn: the dice window and hand-over between players
- legal_actions: the exact action set for the side to move under its die
- apply_action: move-then-attack application used on private snapshots

Agents must only ever call these on their own clones.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional, Set

from ..core.actions import Action
from ..core.types import Phase, Player
from .combat import CombatResolver, enemies_in_range
from .dice import can_act, multiplier_for, roll_die, step_budget
from .movement import MovementResolver

if TYPE_CHECKING:
    from ..world.state import Snapshot

_movement = MovementResolver()
_combat = CombatResolver()


def set_dice(state: Snapshot, value: int) -> None:
    """Record a roll and open its multiplier window."""
    state.dice = value
    state.dice_multiplier = multiplier_for(value)


def roll_for_turn(state: Snapshot, rng: random.Random) -> int:
    value = roll_die(rng)
    set_dice(state, value)
    return value


def pass_turn(state: Snapshot) -> None:
    """Close the dice window and hand control to the other player."""
    state.dice = None
    state.dice_multiplier = 1
    if state.current_player is not None:
        state.current_player = state.current_player.opponent


def legal_actions(state: Snapshot, player: Optional[Player] = None) -> List[Action]:
    """
    Every distinct legal action for ``player`` (default: side to move) under the current die.

    Per living piece, in roster order:
    1. attacks from the current cell
    2. every reachable cell (BFS order) then "stay", each paired with every
       attack available from it, or a plain move / no-op when none is

    Stay-and-attack repeats of (1) are listed once.
    """
    player = player if player is not None else state.current_player
    if player is None or state.phase == Phase.FINISHED or not can_act(state.dice):
        return []

    budget = step_budget(state.dice)
    actions: List[Action] = []
    seen: Set[Action] = set()

    def add(action: Action) -> None:
        if action not in seen:
            seen.add(action)
            actions.append(action)

    for piece in state.pieces(player):
        for enemy in enemies_in_range(state, piece, piece.pos):
            add(Action.attack(piece.id, enemy.id))

        cells = [*_movement.reachable_cells(state, piece, budget), None]
        for cell in cells:
            origin = cell if cell is not None else piece.pos
            enemies = enemies_in_range(state, piece, origin)
            if not enemies:
                add(Action.move_to(piece.id, cell) if cell is not None else Action.stay(piece.id))
                continue
            for enemy in enemies:
                add(Action.attack(piece.id, enemy.id, move=cell))

    return actions


def apply_action(state: Snapshot, action: Action) -> bool:
    """
    Apply a legal action to a private snapshot and end the turn.

    The move is committed first, then the attack resolves with the open
    multiplier. Unless the attack ended the game, control passes to the
    other player.

    Returns:
        False if the action referenced a piece that no longer exists
    """
    piece = state.get_piece(action.piece_id)
    if piece is None:
        pass_turn(state)
        return False

    if action.move is not None:
        piece.row, piece.col = action.move

    if action.target_id is not None:
        target = state.get_piece(action.target_id)
        if target is not None:
            _combat.resolve_attack(state, piece, target, state.dice_multiplier)

    if state.phase == Phase.FINISHED:
        state.dice = None
        state.dice_multiplier = 1
    else:
        pass_turn(state)
    return True
