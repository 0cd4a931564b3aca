"""
Game session module.

The host side of a game: difficulty selection, the elapsed-time counter
and the best-time record, wrapped around a Minefield engine.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from .best_time import BestTimeStore
from .board import (
    BoardConfig,
    BoardSnapshot,
    Difficulty,
    GameStatus,
    Minefield,
    PRESETS,
    custom_config,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Elapsed Timer
# ============================================================================

@dataclass
class ElapsedTimer:
    """
    Whole-second counter advanced by the host.

    Attributes:
        elapsed: Seconds counted so far.
        paused: Whether ticks are ignored.
    """

    elapsed: int = 0
    paused: bool = False

    def tick(self, seconds: int = 1) -> int:
        """Add time unless paused and return the current count."""
        if not self.paused and seconds > 0:
            self.elapsed += seconds
        return self.elapsed

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def reset(self) -> None:
        """Back to zero and running."""
        self.elapsed = 0
        self.paused = False


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Host wrapper that drives a Minefield from player input.

    Pauses the timer when a game ends and records winning times in the
    best-time store.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        best_times: Optional[BestTimeStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            difficulty: Starting preset.
            best_times: Store for the best winning time (memory only if None).
            rng: Random source for mine placement.
        """
        self.difficulty = difficulty
        self.best_times = best_times or BestTimeStore()
        self.timer = ElapsedTimer()
        self.minefield = Minefield(PRESETS[difficulty], rng or random.Random())
        self.new_record = False
        self._finished = False

    @property
    def config(self) -> BoardConfig:
        return self.minefield.config

    # ========================================================================
    # Difficulty
    # ========================================================================

    def change_difficulty(self, difficulty: Difficulty) -> BoardSnapshot:
        """Switch to a preset, restarting unless nothing would change."""
        preset = PRESETS[difficulty]
        if difficulty == self.difficulty and self.config == preset:
            return self.minefield.snapshot()
        self.difficulty = difficulty
        return self._start(preset)

    def set_custom_difficulty(
        self, difficulty: Difficulty, num_mines: int
    ) -> BoardSnapshot:
        """
        Switch to a preset size with a custom mine count.

        Raises:
            InvalidConfig: If the mine count is not allowed; the current
                game is left as it was.
        """
        if (
            difficulty == self.difficulty
            and num_mines == self.config.num_mines
        ):
            return self.minefield.snapshot()
        config = custom_config(difficulty, num_mines)
        self.difficulty = difficulty
        return self._start(config)

    def restart(self) -> BoardSnapshot:
        """Start over with the current configuration."""
        return self._start(self.config)

    def _start(self, config: BoardConfig) -> BoardSnapshot:
        snapshot = self.minefield.new_game(config)
        self.timer.reset()
        self.new_record = False
        self._finished = False
        logger.debug("Session started on %s", self.difficulty.value)
        return snapshot

    # ========================================================================
    # Player Input
    # ========================================================================

    def reveal(self, tile_id: int) -> BoardSnapshot:
        return self._after_move(self.minefield.reveal(tile_id))

    def chord(self, tile_id: int) -> BoardSnapshot:
        return self._after_move(self.minefield.chord(tile_id))

    def toggle_flag(self, tile_id: int) -> BoardSnapshot:
        return self.minefield.toggle_flag(tile_id)

    def _after_move(self, snapshot: BoardSnapshot) -> BoardSnapshot:
        """Stop the clock on a finished game and keep the best time."""
        if snapshot.status == GameStatus.PLAYING or self._finished:
            return snapshot
        self._finished = True
        self.timer.pause()
        if snapshot.status == GameStatus.WON:
            self.new_record = self.best_times.record(self.timer.elapsed)
        return snapshot

    def tick(self, seconds: int = 1) -> int:
        return self.timer.tick(seconds)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def elapsed(self) -> int:
        return self.timer.elapsed

    @property
    def status(self) -> GameStatus:
        return self.minefield.status()

    @property
    def remaining_mines(self) -> int:
        return self.minefield.remaining_mine_count()

    @property
    def best_time(self) -> Optional[int]:
        return self.best_times.get()

    def snapshot(self) -> BoardSnapshot:
        return self.minefield.snapshot()
