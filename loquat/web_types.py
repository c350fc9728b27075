"""Response types of the web API and the tracker of system errors."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _to_plain(value: Any) -> Any:
    """Turn dataclasses, datetimes and containers into JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """Envelope around every API answer."""

    success: bool
    data: T | None = None
    error: str | None = None
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def ok(cls, data: T) -> ApiResponse[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> ApiResponse[T]:
        return cls(success=False, error=message)

    def to_dict(self) -> dict[str, Any]:
        """A JSON-ready dictionary of the response."""
        return _to_plain(self)


@dataclass(frozen=True)
class ErrorCounts:
    """Error totals with the times of the latest errors."""

    total: int = 0
    critical: int = 0
    last_error: datetime | None = None
    last_critical: datetime | None = None


@dataclass(frozen=True)
class PluginSubsystemStatus:
    enabled: bool
    total: int = 0
    active: int = 0
    inactive: int = 0
    error: int = 0


@dataclass(frozen=True)
class AdapterSubsystemStatus:
    enabled: bool
    total: int = 0
    active: int = 0
    inactive: int = 0
    error: int = 0


@dataclass(frozen=True)
class WebSubsystemStatus:
    enabled: bool
    running: bool
    host: str
    port: int


@dataclass(frozen=True)
class LoggingSubsystemStatus:
    level: str
    format: str
    output: str


@dataclass(frozen=True)
class SubsystemStatus:
    plugins: PluginSubsystemStatus
    adapters: AdapterSubsystemStatus
    web: WebSubsystemStatus
    logging: LoggingSubsystemStatus


@dataclass(frozen=True)
class HealthResponse:
    """Answer of the health check."""

    status: str
    version: str
    environment: str
    uptime: int
    engine_status: str
    subsystems: SubsystemStatus
    errors: ErrorCounts


@dataclass(frozen=True)
class PluginInfo:
    name: str
    plugin_type: str
    status: str
    version: str | None = None
    author: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class AdapterInfo:
    name: str
    status: str
    version: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ReloadRequest:
    """Which parts to reload; ``None`` means yes."""

    plugins: bool | None = None
    adapters: bool | None = None


@dataclass(frozen=True)
class ReloadResponse:
    message: str
    plugins_reloaded: int
    adapters_reloaded: int


@dataclass(frozen=True)
class ConfigResponse:
    """The configuration as exposed by the API, without secrets."""

    environment: str
    name: str
    log_level: str
    log_format: str
    log_output: str
    plugins_enabled: bool
    adapters_enabled: bool
    web_enabled: bool
    web_host: str
    web_port: int


class ErrorTracker:
    """Thread-safe counter of regular and critical errors."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total = 0
        self._critical = 0
        self._last_error: datetime | None = None
        self._last_critical: datetime | None = None

    def __repr__(self) -> str:
        return f"ErrorTracker(total={self._total}, critical={self._critical})"

    def record_error(self) -> None:
        with self._lock:
            self._total += 1
            self._last_error = _now()

    def record_critical(self) -> None:
        """Record a critical error, which also counts as a regular one."""
        with self._lock:
            now = _now()
            self._critical += 1
            self._total += 1
            self._last_error = now
            self._last_critical = now

    def get_stats(self) -> ErrorCounts:
        with self._lock:
            return ErrorCounts(
                total=self._total,
                critical=self._critical,
                last_error=self._last_error,
                last_critical=self._last_critical,
            )

    def reset(self) -> None:
        with self._lock:
            self._total = 0
            self._critical = 0
            self._last_error = None
            self._last_critical = None