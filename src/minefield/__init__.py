"""
Minesweeper game module.

Provides the minefield engine, tile state, and the host-side pieces
(session timer, best-time store, gymnasium environment).
"""
from .tile import FlagState, Tile, TileSnapshot, MINE_MARKER
from .board import (
    BoardConfig,
    BoardSnapshot,
    Difficulty,
    GameStatus,
    InvalidConfig,
    Minefield,
    PRESETS,
    EASY,
    INTERMEDIATE,
    HARD,
    EXPERT,
    custom_config,
)
from .best_time import BestTimeStore, BestTimeStoreError, BEST_TIME_KEY
from .session import ElapsedTimer, GameSession
from .environment import MinesweeperEnv, format_board

__all__ = [
    "FlagState",
    "Tile",
    "TileSnapshot",
    "MINE_MARKER",
    "BoardConfig",
    "BoardSnapshot",
    "Difficulty",
    "GameStatus",
    "InvalidConfig",
    "Minefield",
    "PRESETS",
    "EASY",
    "INTERMEDIATE",
    "HARD",
    "EXPERT",
    "custom_config",
    "BestTimeStore",
    "BestTimeStoreError",
    "BEST_TIME_KEY",
    "ElapsedTimer",
    "GameSession",
    "MinesweeperEnv",
    "format_board",
]
