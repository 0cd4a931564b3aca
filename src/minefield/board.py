"""
Board module for Minesweeper game.

Implements the minefield engine: lazy mine placement that keeps the first
reveal safe, flood reveal of blank regions, flag markers and win/loss
detection.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

import numpy as np

from .tile import FlagState, Tile, TileSnapshot

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class InvalidConfig(ValueError):
    """Raised when a board configuration cannot start a game."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 12

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfig(f"{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise InvalidConfig("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfig("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfig(f"Too many mines (max {max_mines})")

    @property
    def tile_count(self) -> int:
        return self.width * self.height

    @property
    def safe_tile_count(self) -> int:
        """Number of tiles that must be revealed to win."""
        return self.tile_count - self.num_mines


class Difficulty(Enum):
    """Built-in board sizes."""

    EASY = "easy"
    INTERMEDIATE = "intermediate"
    HARD = "hard"
    EXPERT = "expert"


# Preset difficulty levels
EASY = BoardConfig(10, 10, 12)
INTERMEDIATE = BoardConfig(18, 14, 35)
HARD = BoardConfig(24, 20, 70)
EXPERT = BoardConfig(34, 20, 110)

PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.EASY: EASY,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.HARD: HARD,
    Difficulty.EXPERT: EXPERT,
}

# Custom mine counts on the easy board stop below this
EASY_MINE_LIMIT = 90


def custom_config(difficulty: Difficulty, num_mines: int) -> BoardConfig:
    """
    Build a config with a preset's size and a custom mine count.

    Args:
        difficulty: Preset whose width and height are kept.
        num_mines: Requested mine count.

    Returns:
        Validated board configuration.

    Raises:
        InvalidConfig: If the count breaks the preset's policy or the
            general board limits.
    """
    if difficulty == Difficulty.EASY and num_mines >= EASY_MINE_LIMIT:
        raise InvalidConfig("Too many mines for the selected size.")
    preset = PRESETS[difficulty]
    return BoardConfig(preset.width, preset.height, num_mines)


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class BoardSnapshot:
    """
    Immutable view of the board for a renderer.

    Behaves as an ordered sequence of TileSnapshot, indexed by tile id.
    """

    tiles: Tuple[TileSnapshot, ...]
    status: GameStatus
    remaining_mines: int

    def __len__(self) -> int:
        return len(self.tiles)

    def __getitem__(self, tile_id: int) -> TileSnapshot:
        return self.tiles[tile_id]

    def __iter__(self) -> Iterator[TileSnapshot]:
        return iter(self.tiles)


# ============================================================================
# Minefield Engine
# ============================================================================

@dataclass
class Minefield:
    """
    Minesweeper game engine.

    Owns the tiles, the mine set and the revealed set. Every command
    returns a fresh BoardSnapshot; malformed commands (unknown tile ids,
    input after the game has ended) leave the state untouched.
    """

    config: BoardConfig = field(default_factory=lambda: EASY)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _tiles: List[Tile] = field(default_factory=list, repr=False)
    _mines: FrozenSet[int] = field(default_factory=frozenset, repr=False)
    _mines_placed: bool = False
    _revealed: Set[int] = field(default_factory=set, repr=False)
    _status: GameStatus = GameStatus.PLAYING

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a fresh grid of unrevealed tiles."""
        width = self.config.width
        self._tiles = [
            Tile(id=tile_id, row=tile_id // width, column=tile_id % width)
            for tile_id in range(self.config.tile_count)
        ]
        self._mines = frozenset()
        self._mines_placed = False
        self._revealed = set()
        self._status = GameStatus.PLAYING

    def _place_mines(self, exclude: int) -> None:
        """
        Place mines randomly, keeping one tile mine-free.

        Args:
            exclude: Tile id that must not receive a mine.
        """
        positions = [
            tile_id for tile_id in range(self.config.tile_count)
            if tile_id != exclude
        ]
        self._mines = frozenset(
            self.rng.sample(positions, self.config.num_mines)
        )
        self._mines_placed = True
        logger.debug(
            "Placed %d mines avoiding tile %d", len(self._mines), exclude
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def position(self, tile_id: int) -> Tuple[int, int]:
        """Convert a tile id to (row, column)."""
        return tile_id // self.config.width, tile_id % self.config.width

    def neighbors(self, tile_id: int) -> List[int]:
        """
        Get the ids of the tiles around a tile.

        Args:
            tile_id: Id of the center tile.

        Returns:
            Up to 8 ids; fewer on edges and corners.
        """
        row, col = self.position(tile_id)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append(new_row * self.config.width + new_col)
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _is_valid_id(self, tile_id: int) -> bool:
        return 0 <= tile_id < self.config.tile_count

    def adjacent_mine_count(self, tile_id: int) -> int:
        """Count mines around a tile."""
        return sum(1 for n in self.neighbors(tile_id) if n in self._mines)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def new_game(self, config: Optional[BoardConfig] = None) -> BoardSnapshot:
        """
        Start a new game, optionally with a different configuration.

        Args:
            config: Board configuration; the current one when omitted.

        Returns:
            Snapshot of the untouched board.

        Raises:
            InvalidConfig: If the configuration is not playable.
        """
        if config is not None:
            if not isinstance(config, BoardConfig):
                raise InvalidConfig(f"Expected BoardConfig, got {config!r}")
            self.config = config
        self._init_grid()
        logger.debug(
            "New game %dx%d with %d mines",
            self.config.width, self.config.height, self.config.num_mines,
        )
        return self.snapshot()

    def reset(self) -> BoardSnapshot:
        """Reset board to initial state for new game."""
        return self.new_game()

    def reveal(self, tile_id: int) -> BoardSnapshot:
        """
        Reveal the tile with the given id.

        On the first reveal, places mines avoiding this tile. Blank tiles
        cascade to their neighbours. Revealing a mine loses the game.

        Args:
            tile_id: Id of the tile to reveal.

        Returns:
            Snapshot after the reveal.
        """
        if self._status != GameStatus.PLAYING or not self._is_valid_id(tile_id):
            return self.snapshot()

        if not self._mines_placed:
            self._place_mines(tile_id)

        tile = self._tiles[tile_id]
        if tile.revealed or tile.is_marked:
            return self.snapshot()

        self._reveal_tile(tile_id)
        return self.snapshot()

    def _reveal_tile(self, tile_id: int) -> None:
        """Reveal one tile and handle consequences."""
        if tile_id in self._mines:
            self._explode(tile_id)
            return
        self._flood_reveal(tile_id)
        self._check_win_condition()

    def _explode(self, tile_id: int) -> None:
        """Expose every mine and end the game."""
        for mine_id in self._mines:
            self._tiles[mine_id].expose_mine()
        self._status = GameStatus.LOST
        logger.info("Mine hit at tile %d, game lost", tile_id)

    def _flood_reveal(self, start: int) -> None:
        """Reveal a tile and the blank region connected to it."""
        stack = [start]
        visited = {start}
        while stack:
            tile_id = stack.pop()
            count = self.adjacent_mine_count(tile_id)
            if not self._tiles[tile_id].uncover(str(count) if count else ""):
                continue
            self._revealed.add(tile_id)
            if count:
                continue
            for neighbor in self.neighbors(tile_id):
                if neighbor in visited or neighbor in self._mines:
                    continue
                if self._tiles[neighbor].revealed:
                    continue
                visited.add(neighbor)
                stack.append(neighbor)
        if len(visited) > 1:
            logger.debug("Cascade from tile %d visited %d tiles", start, len(visited))

    def _check_win_condition(self) -> None:
        """Check if all non-mine tiles are revealed."""
        if len(self._revealed) == self.config.safe_tile_count:
            self._status = GameStatus.WON
            logger.info("All %d safe tiles revealed, game won", len(self._revealed))

    def toggle_flag(self, tile_id: int) -> BoardSnapshot:
        """
        Cycle the marker on a tile: none, flagged, questioned.

        Args:
            tile_id: Id of the tile.

        Returns:
            Snapshot after the change.
        """
        if self._status == GameStatus.PLAYING and self._is_valid_id(tile_id):
            tile = self._tiles[tile_id]
            if tile.toggle_flag():
                logger.debug("Tile %d marked %s", tile_id, tile.flag.value)
        return self.snapshot()

    def chord(self, tile_id: int) -> BoardSnapshot:
        """
        Chord action: reveal all unmarked neighbors if flag count matches.

        Args:
            tile_id: Id of a revealed numbered tile.

        Returns:
            Snapshot after the chord.
        """
        if not self._can_chord(tile_id):
            return self.snapshot()

        for neighbor in self.neighbors(tile_id):
            if self._status != GameStatus.PLAYING:
                break
            if self._tiles[neighbor].is_hidden:
                self._reveal_tile(neighbor)

        return self.snapshot()

    def _can_chord(self, tile_id: int) -> bool:
        """Check if chord action is valid."""
        if self._status != GameStatus.PLAYING or not self._is_valid_id(tile_id):
            return False
        tile = self._tiles[tile_id]
        if not tile.revealed or not tile.display_value:
            return False
        return self._count_adjacent_flags(tile_id) == int(tile.display_value)

    def _count_adjacent_flags(self, tile_id: int) -> int:
        """Count flagged tiles adjacent to a tile."""
        return sum(
            1 for n in self.neighbors(tile_id) if self._tiles[n].is_flagged
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameStatus.LOST

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def mine_set(self) -> FrozenSet[int]:
        return self._mines

    @property
    def revealed_ids(self) -> FrozenSet[int]:
        return frozenset(self._revealed)

    def remaining_mine_count(self) -> int:
        """
        Mines left according to the player's flags.

        Goes negative when more tiles are flagged than there are mines.
        """
        flagged = sum(1 for tile in self._tiles if tile.is_flagged)
        return self.config.num_mines - flagged

    def tile(self, tile_id: int) -> Optional[Tile]:
        """Get tile by id, or None if invalid."""
        if not self._is_valid_id(tile_id):
            return None
        return self._tiles[tile_id]

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            tiles=tuple(tile.snapshot() for tile in self._tiles),
            status=self._status,
            remaining_mines=self.remaining_mine_count(),
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                -3 = questioned
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        values = [tile.to_observation() for tile in self._tiles]
        return np.array(values, dtype=np.int8).reshape(
            self.config.height, self.config.width
        )

    def valid_actions(self) -> List[int]:
        """
        Get ids of tiles that a reveal would act on.

        Returns:
            Ids of unrevealed, unmarked tiles.
        """
        return [tile.id for tile in self._tiles if tile.is_hidden]
