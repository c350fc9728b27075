"""History of hot reloads per plugin or adapter, for tracking and rollback."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class VersionData:
    """A version that can be rolled back to."""

    version: str
    hash: str | None = None
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class HotReloadEntry:
    """One recorded reload attempt."""

    id: str
    path: Path
    timestamp: datetime
    modified_time: datetime
    success: bool
    hash: str | None = None
    error: str | None = None
    previous_data: VersionData | None = None


@dataclass(frozen=True)
class HotReloadStats:
    """Counts over the whole history."""

    total_items: int
    total_entries: int
    successful_entries: int
    failed_entries: int


def _modified_time(path: Path) -> datetime:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, timezone.utc)
    except OSError:
        return _now()


class HotReloadHistory:
    """Keeps the most recent reload entries for each named item."""

    def __init__(self, max_entries: int = 10) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must not be negative")
        self.max_entries = max_entries
        self._entries: dict[str, deque[HotReloadEntry]] = {}
        self._lock = threading.Lock()

    def record_reload(
        self,
        name: str,
        path: str | Path,
        success: bool,
        error: str | None = None,
        previous_data: VersionData | None = None,
    ) -> HotReloadEntry:
        """Record a reload attempt, dropping the oldest entries beyond the limit."""
        path = Path(path)
        entry = HotReloadEntry(
            id=f"{name}-{time.monotonic_ns()}",
            path=path,
            timestamp=_now(),
            modified_time=_modified_time(path),
            success=success,
            error=error,
            previous_data=previous_data,
        )
        with self._lock:
            history = self._entries.setdefault(name, deque(maxlen=self.max_entries))
            history.append(entry)
        return entry

    def get_last_success(self, name: str) -> HotReloadEntry | None:
        with self._lock:
            history = self._entries.get(name, ())
            return next((e for e in reversed(history) if e.success), None)

    def get_last(self, name: str) -> HotReloadEntry | None:
        with self._lock:
            history = self._entries.get(name)
            return history[-1] if history else None

    def get_history(self, name: str) -> list[HotReloadEntry]:
        with self._lock:
            return list(self._entries.get(name, ()))

    def was_last_success(self, name: str) -> bool:
        """Whether the last reload succeeded; true when nothing is recorded."""
        last = self.get_last(name)
        return True if last is None else last.success

    def get_rollback_data(self, name: str) -> VersionData | None:
        """Previous version data of the last successful reload."""
        last = self.get_last_success(name)
        return last.previous_data if last is not None else None

    def clear(self, name: str) -> None:
        with self._lock:
            self._entries.pop(name, None)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> HotReloadStats:
        with self._lock:
            entries = [e for history in self._entries.values() for e in history]
            items = len(self._entries)
        successful = sum(1 for e in entries if e.success)
        return HotReloadStats(
            total_items=items,
            total_entries=len(entries),
            successful_entries=successful,
            failed_entries=len(entries) - successful,
        )