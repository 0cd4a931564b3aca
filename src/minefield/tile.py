"""
Tile module for Minesweeper game.

Represents individual tiles on the minefield with their reveal state,
player flag marker and the value shown once revealed.
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

MINE_MARKER = "*"


class FlagState(Enum):
    """Player markers on an unrevealed tile."""

    NONE = "none"
    FLAGGED = "flagged"
    QUESTIONED = "questioned"

    def next(self) -> "FlagState":
        """Next marker in the none -> flagged -> questioned cycle."""
        return _FLAG_CYCLE[self]


_FLAG_CYCLE = {
    FlagState.NONE: FlagState.FLAGGED,
    FlagState.FLAGGED: FlagState.QUESTIONED,
    FlagState.QUESTIONED: FlagState.NONE,
}


# ============================================================================
# Tile Data Classes
# ============================================================================

@dataclass(frozen=True)
class TileSnapshot:
    """Read-only view of a tile handed to the host."""

    id: int
    revealed: bool
    flag: FlagState
    display_value: str


@dataclass
class Tile:
    """
    Represents a single tile in the Minesweeper grid.

    Attributes:
        id: Row-major index (row * width + column), fixed for the board.
        row: Row of the tile.
        column: Column of the tile.
        revealed: Whether the tile has been uncovered.
        flag: Player marker, only meaningful while unrevealed.
        display_value: "" (blank), "1".."8", or MINE_MARKER once revealed.
    """

    id: int
    row: int = 0
    column: int = 0
    revealed: bool = False
    flag: FlagState = FlagState.NONE
    display_value: str = ""

    def reveal(self, display_value: str) -> bool:
        """
        Reveal this tile with the given display value.

        Returns:
            True if the tile was revealed, False if already revealed
            or carrying a flag.
        """
        if self.revealed or self.is_marked:
            return False
        self.revealed = True
        self.display_value = display_value
        return True

    def uncover(self, display_value: str) -> bool:
        """
        Reveal this tile as part of a cascade, dropping any marker.

        Returns:
            True if the tile was revealed, False if already revealed.
        """
        if self.revealed:
            return False
        self.flag = FlagState.NONE
        return self.reveal(display_value)

    def expose_mine(self) -> None:
        """Show this tile as a mine, dropping any marker."""
        self.revealed = True
        self.flag = FlagState.NONE
        self.display_value = MINE_MARKER

    def toggle_flag(self) -> bool:
        """
        Advance the flag marker one step.

        Returns:
            True if the marker changed, False if the tile is revealed.
        """
        if self.revealed:
            return False
        self.flag = self.flag.next()
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if tile is unrevealed and carries no marker."""
        return not self.revealed and self.flag == FlagState.NONE

    @property
    def is_flagged(self) -> bool:
        return self.flag == FlagState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        return self.flag == FlagState.QUESTIONED

    @property
    def is_marked(self) -> bool:
        """Check if tile carries a flag or question marker."""
        return self.flag != FlagState.NONE

    def snapshot(self) -> TileSnapshot:
        return TileSnapshot(
            id=self.id,
            revealed=self.revealed,
            flag=self.flag,
            display_value=self.display_value,
        )

    def to_observation(self) -> int:
        """
        Convert tile to observation value for an agent.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            -3: Questioned tile
            0-8: Revealed tile with adjacent mine count
            9: Revealed mine (game over state)
        """
        if not self.revealed:
            if self.flag == FlagState.FLAGGED:
                return -2
            if self.flag == FlagState.QUESTIONED:
                return -3
            return -1
        if self.display_value == MINE_MARKER:
            return 9
        if not self.display_value:
            return 0
        return int(self.display_value)
