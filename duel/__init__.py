"""
Kings of the West - rules engine for a 6x6 dice-driven tactical duel.

Usage:
    from duel import DuelGame, Player

    game = DuelGame(ai_players={Player.TWO})
    game.start(["gunslinger", "gunslinger", "bruiser", "bruiser"],
               ["bruiser", "bruiser", "gunslinger", "gunslinger"])
"""

from .core import Action, ActionValidation, Archetype, Difficulty, Phase, Player
from .world import GameState, Piece, PlayerRoster, Snapshot
from .game import DuelGame, RollResult, SelectionOptions, auto_pick_roster

__all__ = [
    "Action",
    "ActionValidation",
    "Archetype",
    "Difficulty",
    "Phase",
    "Player",
    "GameState",
    "Piece",
    "PlayerRoster",
    "Snapshot",
    "DuelGame",
    "RollResult",
    "SelectionOptions",
    "auto_pick_roster",
]
