"""Transport-agnostic responses returned by the game engine."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from game import CellUpdate, GameStatus


@dataclass(frozen=True)
class GameResponse:
    """
    Result of a new game or a click.

    Attributes:
        status: Game status after the operation.
        updates: Cells revealed by the operation, in reveal order.
    """

    status: GameStatus
    updates: List[CellUpdate] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "updates": [update.to_json() for update in self.updates],
        }
