"""
Best-time store for finished games.

A single scalar kept under a fixed key, persisted as a small JSON file.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


BEST_TIME_KEY = "best_minesweeper_time"


class BestTimeStoreError(Exception):
    """Raised when the store file cannot be read."""


class BestTimeStore:
    """
    Key-value store holding the best winning time in seconds.

    With no path the record lives in memory only.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the store.

        Args:
            path: JSON file backing the store, or None for memory only.
        """
        self.path = Path(path) if path is not None else None
        self._memory: Dict[str, Any] = {}

    def _load(self) -> Dict[str, Any]:
        if self.path is None:
            return dict(self._memory)
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BestTimeStoreError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise BestTimeStoreError(f"Unexpected content in {self.path}")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        if self.path is None:
            self._memory = dict(data)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)

    def get(self) -> Optional[int]:
        """Get the stored best time, or None if there is no record."""
        value = self._load().get(BEST_TIME_KEY)
        if value is None:
            return None
        return int(value)

    def record(self, elapsed: int) -> bool:
        """
        Store a winning time if it beats the current record.

        Args:
            elapsed: Winning time in seconds.

        Returns:
            True if the time became the new record.
        """
        data = self._load()
        best = data.get(BEST_TIME_KEY)
        if best is not None and elapsed >= int(best):
            return False
        data[BEST_TIME_KEY] = int(elapsed)
        self._save(data)
        logger.info("New best time: %ds", elapsed)
        return True

    def clear(self) -> None:
        """Remove the stored record."""
        data = self._load()
        data.pop(BEST_TIME_KEY, None)
        self._save(data)
