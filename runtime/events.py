from typing import Any, Dict, List

from duel.core.types import Player
from duel.world.state import Snapshot


def extract_events(
    *,
    prev_state: Snapshot,
    state: Snapshot,
) -> List[Dict[str, Any]]:
    """
    Diff two snapshots of the same game into damage / elimination events.

    Used by the runner to summarise what an AI turn did.
    """
    events: List[Dict[str, Any]] = []

    prev_pieces = {p.id: p for p in prev_state.pieces()}
    curr_pieces = {p.id: p for p in state.pieces()}

    for piece_id, before in prev_pieces.items():
        after = curr_pieces.get(piece_id)

        # ---------------------------------------------------------
        # 1. ELIMINATION
        # ---------------------------------------------------------
        if after is None:
            events.append({
                "type": "KING_LOST" if before.is_king else "PIECE_ELIMINATED",
                "piece_id": piece_id,
                "owner": int(before.owner),
                "archetype": before.archetype.value,
                "last_position": list(before.pos),
            })
            continue

        # ---------------------------------------------------------
        # 2. DAMAGE
        # ---------------------------------------------------------
        if after.hp < before.hp:
            events.append({
                "type": "DAMAGE",
                "piece_id": piece_id,
                "owner": int(after.owner),
                "damage": before.hp - after.hp,
                "hp": after.hp,
            })

        # ---------------------------------------------------------
        # 3. MOVEMENT
        # ---------------------------------------------------------
        if after.pos != before.pos:
            events.append({
                "type": "MOVED",
                "piece_id": piece_id,
                "owner": int(after.owner),
                "from": list(before.pos),
                "to": list(after.pos),
            })

    # ---------------------------------------------------------
    # 4. GAME END
    # ---------------------------------------------------------
    if state.winner is not None and prev_state.winner is None:
        events.append({"type": "GAME_WON", "winner": int(Player(state.winner))})

    return events
