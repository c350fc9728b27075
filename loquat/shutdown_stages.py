"""Shutdown stages, their results and the order they run in."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class ShutdownStage(Enum):
    """Stages of a graceful shutdown, in their default order of execution."""

    STOP_ACCEPTING_REQUESTS = "Stop Accepting Requests"
    WEB_SERVICE = "Web Service"
    ADAPTER_HOT_RELOAD = "Adapter Hot Reload"
    PLUGIN_HOT_RELOAD = "Plugin Hot Reload"
    ADAPTERS = "Adapters"
    PLUGINS = "Plugins"
    WORKERS = "Workers"
    CHANNELS = "Channels"
    ENGINE = "Engine"
    LOGGING = "Logging"

    def __str__(self) -> str:
        return self.value


class StageOutcome(Enum):
    """How a single shutdown stage ended."""

    SUCCESS = "SUCCESS"
    FAILED_CONTINUE = "FAILED_CONTINUE"
    FAILED_ABORT = "FAILED_ABORT"
    TIMEOUT = "TIMEOUT"


_FAILED = (StageOutcome.FAILED_CONTINUE, StageOutcome.FAILED_ABORT)


@dataclass(frozen=True)
class ShutdownStageResult:
    """Result of running one shutdown stage.

    ``duration_ms`` is set for every outcome except a timeout, ``timeout_ms``
    only for a timeout, and ``error`` only for the two failure outcomes.
    """

    stage: ShutdownStage
    outcome: StageOutcome
    duration_ms: int | None = None
    error: str | None = None
    timeout_ms: int | None = None

    def __post_init__(self) -> None:
        if self.outcome is StageOutcome.TIMEOUT:
            if self.timeout_ms is None:
                raise ValueError("a timed out stage needs timeout_ms")
            if self.duration_ms is not None or self.error is not None:
                raise ValueError("a timed out stage has no duration or error")
            return
        if self.duration_ms is None:
            raise ValueError(f"a {self.outcome.value} stage needs duration_ms")
        if self.timeout_ms is not None:
            raise ValueError("only a timed out stage has timeout_ms")
        if self.outcome in _FAILED and self.error is None:
            raise ValueError("a failed stage needs an error message")
        if self.outcome is StageOutcome.SUCCESS and self.error is not None:
            raise ValueError("a successful stage has no error message")

    def is_success(self) -> bool:
        return self.outcome is StageOutcome.SUCCESS

    def is_failure(self) -> bool:
        return self.outcome is not StageOutcome.SUCCESS

    def should_abort(self) -> bool:
        return self.outcome is StageOutcome.FAILED_ABORT

    def __str__(self) -> str:
        label = self.outcome.value
        if self.outcome is StageOutcome.SUCCESS:
            return f"{self.stage}: {label} ({self.duration_ms}ms)"
        if self.outcome is StageOutcome.TIMEOUT:
            return f"{self.stage}: {label} (exceeded {self.timeout_ms}ms)"
        return f"{self.stage}: {label} - {self.error} ({self.duration_ms}ms)"


_DEFAULT_STAGES = tuple(ShutdownStage)
_DEFAULT_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class ShutdownOrder:
    """The stages to run, the time each may take, and whether a failure stops the rest."""

    stages: tuple[ShutdownStage, ...] = field(default=_DEFAULT_STAGES)
    timeout_per_stage: int = _DEFAULT_TIMEOUT_MS
    abort_on_failure: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "stages", tuple(self.stages))

    @classmethod
    def with_timeout(cls, timeout_ms: int) -> ShutdownOrder:
        """The default stages with a custom per-stage timeout."""
        return cls(timeout_per_stage=timeout_ms)

    def with_abort_on_failure(self) -> ShutdownOrder:
        return replace(self, abort_on_failure=True)

    def add_stage(self, stage: ShutdownStage) -> ShutdownOrder:
        return replace(self, stages=self.stages + (stage,))

    def remove_stage(self, stage: ShutdownStage) -> ShutdownOrder:
        return replace(self, stages=tuple(s for s in self.stages if s is not stage))

    def total_timeout(self) -> int:
        """Total time budget for all stages in milliseconds."""
        return len(self.stages) * self.timeout_per_stage