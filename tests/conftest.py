"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    BestTimeStore,
    BoardConfig,
    Difficulty,
    GameSession,
    Minefield,
    Tile,
)


class FixedMines:
    """Random source stand-in that always places the given mines."""

    def __init__(self, mine_ids: Iterable[int]) -> None:
        self.mine_ids = list(mine_ids)

    def sample(self, population: Sequence[int], k: int) -> List[int]:
        assert k == len(self.mine_ids)
        assert all(mine_id in population for mine_id in self.mine_ids)
        return list(self.mine_ids)


def fixed_minefield(
    width: int, height: int, mine_ids: Iterable[int]
) -> Minefield:
    """Create a minefield whose mines are known in advance."""
    mine_ids = list(mine_ids)
    return Minefield(BoardConfig(width, height, len(mine_ids)), FixedMines(mine_ids))


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_minefield():
    """Factory for boards with mines at chosen ids."""
    return fixed_minefield


@pytest.fixture
def default_board() -> Minefield:
    """Create a default easy board (10x10, 12 mines)."""
    return Minefield()


@pytest.fixture
def seeded_board() -> Minefield:
    """Create a 9x9 board with 10 mines and a fixed seed."""
    return Minefield(BoardConfig(9, 9, 10), random.Random(1234))


@pytest.fixture
def corner_mine_board() -> Minefield:
    """3x3 board with its only mine in the bottom-right corner."""
    return fixed_minefield(3, 3, [8])


@pytest.fixture
def empty_board() -> Minefield:
    """Create a board with no mines for cascade testing."""
    return Minefield(BoardConfig(5, 5, 0))


@pytest.fixture
def walled_board() -> Minefield:
    """
    5x5 board with a column of mines splitting it in two.

        . . M . .
        . . M . .
        . . M . .
        . . M . .
        . . M . .
    """
    return fixed_minefield(5, 5, [2, 7, 12, 17, 22])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile(id=0)


# ============================================================================
# Host Fixtures
# ============================================================================

@pytest.fixture
def memory_store() -> BestTimeStore:
    """Best-time store with no backing file."""
    return BestTimeStore()


@pytest.fixture
def file_store(tmp_path: Path) -> BestTimeStore:
    """Best-time store backed by a temporary JSON file."""
    return BestTimeStore(tmp_path / "best.json")


@pytest.fixture
def session(memory_store: BestTimeStore) -> GameSession:
    """Easy session with a seeded random source."""
    return GameSession(Difficulty.EASY, memory_store, random.Random(7))
