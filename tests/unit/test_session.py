"""
Unit tests for the host session, elapsed timer and best-time store.
"""
import json
import random

import pytest
from minefield import (
    BEST_TIME_KEY,
    BestTimeStore,
    BestTimeStoreError,
    BoardConfig,
    Difficulty,
    ElapsedTimer,
    GameSession,
    GameStatus,
    InvalidConfig,
    PRESETS,
)


def win(session: GameSession) -> None:
    """Reveal every safe tile of the current game."""
    session.reveal(0)
    for tile_id in range(session.config.tile_count):
        if tile_id not in session.minefield.mine_set:
            session.reveal(tile_id)


def lose(session: GameSession) -> None:
    session.reveal(0)
    session.reveal(min(session.minefield.mine_set))


# ============================================================================
# Elapsed Timer Tests
# ============================================================================

class TestElapsedTimer:
    """Test the host-owned clock."""

    def test_ticks_accumulate(self) -> None:
        timer = ElapsedTimer()
        timer.tick()
        assert timer.tick(4) == 5

    def test_paused_timer_ignores_ticks(self) -> None:
        timer = ElapsedTimer(elapsed=3)
        timer.pause()
        assert timer.tick(10) == 3
        timer.resume()
        assert timer.tick() == 4

    def test_reset_restarts_from_zero(self) -> None:
        timer = ElapsedTimer(elapsed=9, paused=True)
        timer.reset()
        assert (timer.elapsed, timer.paused) == (0, False)


# ============================================================================
# Best Time Store Tests
# ============================================================================

class TestBestTimeStore:
    """Test the single-record store."""

    def test_empty_store_has_no_record(self, memory_store: BestTimeStore) -> None:
        assert memory_store.get() is None

    def test_first_time_is_record(self, memory_store: BestTimeStore) -> None:
        assert memory_store.record(42) is True
        assert memory_store.get() == 42

    def test_only_faster_times_replace_record(
        self, memory_store: BestTimeStore
    ) -> None:
        memory_store.record(42)
        assert memory_store.record(50) is False
        assert memory_store.record(42) is False
        assert memory_store.record(30) is True
        assert memory_store.get() == 30

    def test_file_store_persists_under_fixed_key(
        self, file_store: BestTimeStore
    ) -> None:
        file_store.record(17)
        assert json.loads(file_store.path.read_text()) == {BEST_TIME_KEY: 17}
        assert BestTimeStore(file_store.path).get() == 17

    def test_missing_file_reads_as_no_record(self, tmp_path) -> None:
        assert BestTimeStore(tmp_path / "nope" / "best.json").get() is None

    def test_clear_removes_record(self, file_store: BestTimeStore) -> None:
        file_store.record(5)
        file_store.clear()
        assert file_store.get() is None

    def test_corrupt_file_raises(self, tmp_path) -> None:
        path = tmp_path / "best.json"
        path.write_text("{not json")
        with pytest.raises(BestTimeStoreError):
            BestTimeStore(path).get()


# ============================================================================
# Game Session Tests
# ============================================================================

class TestDifficulty:
    """Test preset and custom difficulty changes."""

    def test_session_starts_on_preset(self, session: GameSession) -> None:
        assert session.config == PRESETS[Difficulty.EASY]
        assert session.remaining_mines == 12

    def test_change_difficulty_restarts(self, session: GameSession) -> None:
        session.reveal(0)
        session.tick(5)
        snapshot = session.change_difficulty(Difficulty.HARD)
        assert len(snapshot) == 24 * 20
        assert session.elapsed == 0
        assert session.minefield.mines_placed is False

    def test_same_difficulty_is_noop(self, session: GameSession) -> None:
        session.reveal(0)
        session.tick(5)
        session.change_difficulty(Difficulty.EASY)
        assert session.elapsed == 5
        assert session.minefield.mines_placed is True

    def test_custom_mines(self, session: GameSession) -> None:
        session.set_custom_difficulty(Difficulty.INTERMEDIATE, 50)
        assert session.difficulty == Difficulty.INTERMEDIATE
        assert session.config == BoardConfig(18, 14, 50)

    def test_preset_after_custom_restarts(self, session: GameSession) -> None:
        session.set_custom_difficulty(Difficulty.EASY, 20)
        session.change_difficulty(Difficulty.EASY)
        assert session.config.num_mines == 12

    def test_rejected_custom_keeps_game(self, session: GameSession) -> None:
        session.reveal(0)
        mines = session.minefield.mine_set
        with pytest.raises(InvalidConfig):
            session.set_custom_difficulty(Difficulty.EASY, 90)
        assert session.difficulty == Difficulty.EASY
        assert session.minefield.mine_set == mines


class TestGameFlow:
    """Test timer handling and best-time recording around the engine."""

    def test_win_pauses_timer_and_records(self, session: GameSession) -> None:
        session.tick(3)
        win(session)
        assert session.status == GameStatus.WON
        assert session.new_record is True
        assert session.best_time == 3
        session.tick(10)
        assert session.elapsed == 3

    def test_slower_win_is_not_record(self, session: GameSession) -> None:
        session.best_times.record(1)
        session.tick(8)
        win(session)
        assert session.new_record is False
        assert session.best_time == 1

    def test_loss_pauses_timer_without_record(
        self, session: GameSession
    ) -> None:
        session.tick(2)
        lose(session)
        assert session.status == GameStatus.LOST
        session.tick()
        assert session.elapsed == 2
        assert session.best_time is None

    def test_restart_resumes_timer(self, session: GameSession) -> None:
        session.tick(2)
        lose(session)
        session.restart()
        assert session.status == GameStatus.PLAYING
        assert session.tick() == 1

    def test_flags_go_through_session(self, session: GameSession) -> None:
        session.toggle_flag(0)
        session.toggle_flag(1)
        assert session.remaining_mines == 10

    def test_session_uses_given_store(self, file_store: BestTimeStore) -> None:
        session = GameSession(Difficulty.EASY, file_store, random.Random(3))
        session.tick(12)
        win(session)
        assert BestTimeStore(file_store.path).get() == 12
