from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from duel.core.types import Player


@dataclass
class AgentSpec:
    """
    Serializable description of an AI player.

    Lets the CLI and HTTP driver name an agent by key ("greedy", "mcts",
    "random") and have the factory build it.
    """
    type: str
    player: Player
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "player": int(self.player),
            "name": self.name,
            "init_params": self.init_params,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentSpec":
        """Construct from a dict (e.g., a JSON request body)."""
        player_raw = data.get("player")
        if player_raw is None:
            raise ValueError("AgentSpec requires 'player'")
        return cls(
            type=data["type"],
            player=Player(int(player_raw)),
            name=data.get("name"),
            init_params=data.get("init_params", {}) or {},
        )
