"""
Cell update module for Minesweeper game.

A CellUpdate describes one cell that a reveal just uncovered.
"""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CellUpdate:
    """
    A single newly revealed cell.

    Attributes:
        row: Row index.
        col: Column index.
        value: Adjacent mine count (0-8), or 9 for the mine that ended the game.
    """

    row: int
    col: int
    value: int

    def to_json(self) -> Dict[str, int]:
        """Wire form used by the HTTP layer."""
        return {"r": self.row, "c": self.col, "val": self.value}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CellUpdate":
        return cls(row=int(data["r"]), col=int(data["c"]), value=int(data["val"]))
