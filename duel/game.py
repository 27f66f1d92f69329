"""
DuelGame - The turn state machine.

DuelGame owns the canonical GameState and is the only component that
mutates it during live play. It delegates rule checks to the shared
validation helpers and rule effects to the mechanics resolvers, so the
live game and every agent's simulation apply identical rules.

Usage:
    game = DuelGame(ai_players={Player.TWO})
    game.start(["gunslinger"] * 4, ["bruiser"] * 4)
    game.place(4, 1)            # ... until placement is complete
    roll = game.roll()
    game.move(piece_id, 3, 1)
    game.attack(piece_id, target_id)

Phases: SETUP -> PLACEMENT -> PLAY -> FINISHED
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Iterable, List, Optional, Sequence

from infra.logger import get_logger

from .core.actions import Action
from .core.types import ActionValidation, Archetype, GridPos, Phase, Player, ROSTER_CHOICES, ROSTER_SIZE, SKIP_FACE
from .core.validation import (
    validate_actor,
    validate_attack,
    validate_move,
    validate_placement,
    validate_roster,
    validate_turn,
)
from .mechanics import (
    CombatResolver,
    MovementResolver,
    VictoryConditions,
    enemies_in_range,
    legal_actions,
    pass_turn,
    roll_for_turn,
    roll_off,
    step_budget,
)
from .world.grid import GRID
from .world.state import GameState, Piece, Snapshot

log = get_logger(__name__)

# Pool the AI draws its roster from: three of each selectable archetype.
ROSTER_POOL = tuple(a for a in ROSTER_CHOICES for _ in range(3))


def auto_pick_roster(rng: random.Random) -> List[Archetype]:
    """Shuffle the roster pool and take the first four picks."""
    pool = list(ROSTER_POOL)
    rng.shuffle(pool)
    return pool[:ROSTER_SIZE]


@dataclass
class RollResult:
    """
    Outcome of a turn roll.

    Attributes:
        validation: Whether the roll was allowed
        value: Die face (None when rejected)
        skipped: True when a 6 forfeited the turn
    """
    validation: ActionValidation
    value: Optional[int] = None
    skipped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {**self.validation.to_dict(), "value": self.value, "skipped": self.skipped}


@dataclass
class SelectionOptions:
    """
    What a selected piece may do under the current die.

    Attributes:
        validation: Whether the piece can act at all
        move_cells: Cells the piece may move to
        attack_now_ids: Enemies in range from the piece's current cell
        attack_target_ids: Every enemy offered, including those only in range after a move
    """
    validation: ActionValidation
    move_cells: List[GridPos] = field(default_factory=list)
    attack_now_ids: List[int] = field(default_factory=list)
    attack_target_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.validation.to_dict(),
            "move_cells": [list(c) for c in self.move_cells],
            "attack_now_ids": self.attack_now_ids,
            "attack_target_ids": self.attack_target_ids,
        }


class DuelGame:
    """
    Canonical game controller.

    Every public mutator returns an ActionValidation. A rejected request
    leaves the GameState exactly as it was.

    Attributes:
        state: The canonical GameState (treat as read-only outside this class)
        ai_players: Players whose pieces are auto-placed
        messages: Recent human-readable game log lines
    """

    def __init__(
        self,
        ai_players: Iterable[Player] = (),
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        max_messages: int = 200,
    ):
        self.state = GameState()
        self.rng = rng or random.Random(seed)
        self.ai_players = {Player(p) for p in ai_players}
        self.messages: Deque[str] = deque(maxlen=max_messages)

        self._movement = MovementResolver()
        self._combat = CombatResolver()
        self._victory = VictoryConditions()

    # ========================================================================
    # SETUP & PLACEMENT
    # ========================================================================

    def start(
        self,
        roster_one: Sequence[Archetype | str],
        roster_two: Sequence[Archetype | str],
    ) -> ActionValidation:
        """
        Leave SETUP with both rosters chosen and begin player 1's placement.
        """
        if self.state.phase != Phase.SETUP:
            return self._reject(ActionValidation.fail("WRONG_PHASE", "The game has already started"))

        for player, roster in ((Player.ONE, roster_one), (Player.TWO, roster_two)):
            check = validate_roster(roster, label=str(player))
            if not check:
                return self._reject(check)

        self.state.roster_choices = {
            Player.ONE: [Archetype(a) for a in roster_one],
            Player.TWO: [Archetype(a) for a in roster_two],
        }
        self.state.phase = Phase.PLACEMENT
        self._begin_segment(Player.ONE)
        return ActionValidation.success("Placement started")

    def place(self, row: int, col: int) -> ActionValidation:
        """Drop the active placer's next queued archetype on (row, col)."""
        cell = (row, col)
        check = validate_placement(self.state, cell)
        if not check:
            return self._reject(check)

        archetype = self._drop(cell)
        if self.state.pending_placement:
            self._log(f"Placed {archetype}. {self.state.awaiting_placement} left to place.")
        else:
            self._finish_segment()
        return ActionValidation.success(f"Placed {archetype} at {cell}")

    def auto_place(self) -> ActionValidation:
        """Place the active placer's whole queue on random empty cells of its band."""
        if self.state.phase != Phase.PLACEMENT or not self.state.pending_placement:
            return self._reject(ActionValidation.fail("WRONG_PHASE", "Nothing to place right now"))

        owner = self.state.placement_owner
        empty = [cell for cell in GRID.home_cells(owner) if not self.state.is_occupied(cell)]
        self.rng.shuffle(empty)

        placed = 0
        while self.state.pending_placement and empty:
            self._drop(empty.pop(0))
            placed += 1

        self._log(f"{owner} auto-placed {placed} pieces.")
        self._finish_segment()
        return ActionValidation.success(f"Auto-placed {placed} pieces")

    def _begin_segment(self, owner: Player) -> None:
        self.state.placement_owner = owner
        self.state.pending_placement = list(self.state.roster_choices[owner])

        home = GRID.king_home(owner)
        self._add_piece(owner, Archetype.KING, home)
        rows = GRID.home_rows(owner)
        self._log(
            f"{owner} king placed at {home}. {owner}: place remaining pieces "
            f"in your back two rows (rows {rows[0]}-{rows[1]})."
        )

        if owner in self.ai_players:
            self.auto_place()

    def _finish_segment(self) -> None:
        # auto_place may already have advanced past this segment
        if self.state.phase != Phase.PLACEMENT or self.state.pending_placement:
            return
        if self.state.placement_owner == Player.ONE:
            self._begin_segment(Player.TWO)
        else:
            self._start_play()

    def _start_play(self) -> None:
        self.state.placement_owner = None
        self._log("Both players placed. Ready to begin.")

        starter, a, b = roll_off(self.rng)
        self.state.current_player = starter
        self.state.phase = Phase.PLAY
        self._log(f"Player 1 rolled {a}, Player 2 rolled {b}. {starter} goes first.")

    def _drop(self, cell: GridPos) -> Archetype:
        archetype = self.state.pending_placement.pop(0)
        self._add_piece(self.state.placement_owner, archetype, cell)
        return archetype

    def _add_piece(self, owner: Player, archetype: Archetype, cell: GridPos) -> Piece:
        piece = Piece.create(self.state.new_piece_id(), owner, archetype, cell)
        self.state.rosters[owner].pieces.append(piece)
        return piece

    # ========================================================================
    # PLAY
    # ========================================================================

    def roll(self) -> RollResult:
        """
        Roll the turn die for the current player.

        A 6 forfeits the turn: control passes immediately with dice cleared.
        """
        if self.state.phase != Phase.PLAY:
            code = "GAME_OVER" if self.state.phase == Phase.FINISHED else "WRONG_PHASE"
            return RollResult(self._reject(ActionValidation.fail(code, "Cannot roll now")))
        if self.state.dice is not None:
            return RollResult(self._reject(ActionValidation.fail("DICE_PENDING", "Already rolled this turn")))

        self._clear_turn_flags()
        value = roll_for_turn(self.state, self.rng)
        self._log(f"{self.state.current_player} rolled {value}")

        if value == SKIP_FACE:
            self._log("Unlucky! Turn skipped.")
            self._pass()
            return RollResult(ActionValidation.success("Rolled 6: turn skipped"), value, skipped=True)

        if value in (4, 5):
            desc = f"Select a piece to move up to 1 and attack (x{self.state.dice_multiplier})"
        else:
            desc = f"Select a piece to move up to {value}"
        return RollResult(ActionValidation.success(desc), value)

    def select(self, piece_id: int) -> SelectionOptions:
        """Highlight what one of the current player's pieces may do."""
        piece = self.state.get_piece(piece_id)
        check = validate_actor(self.state, piece)
        if not check:
            return SelectionOptions(check)

        self.state.selected_piece_id = piece.id
        budget = 0 if self.state.action_locked else step_budget(self.state.dice)
        cells = self._movement.reachable_cells(self.state, piece, budget)

        attack_now = [e.id for e in enemies_in_range(self.state, piece, piece.pos)]
        offered = list(attack_now)
        # 4/5 offer every target reachable after the one-step move up front
        if self.state.dice in (4, 5) and not self.state.action_locked:
            for cell in cells:
                for enemy in enemies_in_range(self.state, piece, cell):
                    if enemy.id not in offered:
                        offered.append(enemy.id)

        return SelectionOptions(ActionValidation.success(), cells, attack_now, offered)

    def move(self, piece_id: int, row: int, col: int) -> ActionValidation:
        """
        Move a piece within the die's step budget.

        The turn locks to that piece. With no enemy in range of the new
        cell the turn ends on its own; otherwise it waits for attack() or
        end_turn().
        """
        piece = self.state.get_piece(piece_id)
        cell = (row, col)
        check = validate_move(self.state, piece, cell)
        if not check:
            return self._reject(check)

        result = self._movement.resolve_move(self.state, piece, cell, step_budget(self.state.dice))
        if not result.success:
            return self._reject(ActionValidation.fail(result.failure_reason, f"{piece.label()} cannot move to {cell}"))

        self.state.action_locked = True
        self.state.acting_piece_id = piece.id
        self._log(f"{piece.label()} moves to {cell}")

        if not enemies_in_range(self.state, piece, piece.pos):
            self._pass()
            return ActionValidation.success("Moved; no target in range, turn ended")
        return ActionValidation.success("Choose an enemy to attack or end turn.")

    def attack(self, attacker_id: int, target_id: int) -> ActionValidation:
        """Attack from the attacker's current cell with the open multiplier."""
        attacker = self.state.get_piece(attacker_id)
        target = self.state.get_piece(target_id)
        check = validate_attack(self.state, attacker, target)
        if not check:
            return self._reject(check)

        result = self._combat.resolve_attack(self.state, attacker, target, self.state.dice_multiplier)
        if not result.success:
            return self._reject(ActionValidation.fail(result.failure_reason, "Target out of range"))

        self._log(f"{attacker.label()} hits {target.label()} for {result.damage} damage.")
        if result.eliminated:
            self._log(f"{target.archetype} ({target.owner}) was eliminated.")

        if result.victory is not None and result.victory.is_game_over:
            self._log(f"{result.victory.winner} wins!")
            self._clear_turn_flags()
            self.state.dice = None
            self.state.dice_multiplier = 1
        else:
            self._pass()
        return ActionValidation.success(f"Dealt {result.damage} damage")

    def end_turn(self) -> ActionValidation:
        """Give up the rest of the turn."""
        if self.state.phase != Phase.PLAY:
            code = "GAME_OVER" if self.state.phase == Phase.FINISHED else "WRONG_PHASE"
            return self._reject(ActionValidation.fail(code, "No turn to end"))
        self._pass()
        return ActionValidation.success(f"{self.state.current_player} to move")

    def check_win(self) -> Optional[Player]:
        """The winner, finishing the game if the win condition now holds."""
        if self.state.phase == Phase.FINISHED:
            return self.state.winner
        if self.state.phase != Phase.PLAY:
            return None
        result = self._victory.apply(self.state)
        if result.is_game_over:
            self._log(f"{result.winner} wins!")
        return result.winner

    def _pass(self) -> None:
        self._clear_turn_flags()
        pass_turn(self.state)

    def _clear_turn_flags(self) -> None:
        self.state.selected_piece_id = None
        self.state.action_locked = False
        self.state.acting_piece_id = None

    # ========================================================================
    # AGENT SUPPORT
    # ========================================================================

    def legal_actions(self) -> List[Action]:
        """Legal actions for the side to move (empty before a roll)."""
        if self.state.action_locked:
            return []
        return legal_actions(self.state)

    def snapshot(self) -> Snapshot:
        """Private copy for an agent to search on."""
        return self.state.snapshot()

    def apply_action(self, action: Optional[Action]) -> ActionValidation:
        """
        Apply an agent's decision: move (if any), then attack (if any), else end turn.

        Fail-soft: if the decision references something that does not exist
        or breaks a rule, the anomaly is logged and the turn is ended so the
        game never stalls.
        """
        turn = validate_turn(self.state)
        if not turn:
            return self._reject(turn)
        player = self.state.current_player

        if action is None:
            self._log("AI found no action; ending turn.")
            self._pass()
            return ActionValidation.success("No action; turn ended")

        piece = self.state.get_piece(action.piece_id)
        if piece is None or piece.owner != player:
            return self._fail_soft("UNKNOWN_PIECE", f"AI piece {action.piece_id} not found")

        if action.move is not None:
            moved = self.move(piece.id, *action.move)
            if not moved:
                return self._fail_soft(moved.error_code, f"AI move rejected: {moved.message}")
            if self.state.current_player != player or self.state.dice is None:
                if action.target_id is not None:
                    log.warning("AI planned an attack on %s but nothing is in range after moving", action.target_id)
                return moved

        if action.target_id is not None:
            if self.state.get_piece(action.target_id) is None:
                return self._fail_soft("INVALID_TARGET", f"AI target {action.target_id} not found")
            hit = self.attack(piece.id, action.target_id)
            if not hit:
                return self._fail_soft(hit.error_code, f"AI attack rejected: {hit.message}")
            return hit

        self._pass()
        return ActionValidation.success("Turn ended")

    def _fail_soft(self, code: str | None, message: str) -> ActionValidation:
        log.warning("%s; ending turn", message)
        self.messages.append(f"{message}; ending turn.")
        if self.state.phase == Phase.PLAY:
            self._pass()
        return ActionValidation.fail(code or "INVALID_ACTION", message)

    # ========================================================================
    # UTILITY
    # ========================================================================

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def winner(self) -> Optional[Player]:
        return self.state.winner

    @property
    def current_player(self) -> Optional[Player]:
        return self.state.current_player

    def is_ai(self, player: Optional[Player]) -> bool:
        return player in self.ai_players

    def to_dict(self) -> Dict[str, Any]:
        data = self.state.to_dict()
        data["ai_players"] = sorted(int(p) for p in self.ai_players)
        data["messages"] = list(self.messages)
        return data

    def _log(self, message: str) -> None:
        log.info(message)
        self.messages.append(message)

    def _reject(self, validation: ActionValidation) -> ActionValidation:
        log.info("Rejected (%s): %s", validation.error_code, validation.message)
        return validation

    def __repr__(self) -> str:
        return f"DuelGame(phase={self.state.phase}, player={self.state.current_player}, dice={self.state.dice})"
