"""Coordinated, stage-by-stage graceful shutdown with per-stage timeouts."""

from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Awaitable, Callable

from loquat.shutdown_stages import (
    ShutdownOrder,
    ShutdownStage,
    ShutdownStageResult,
    StageOutcome,
)

ShutdownHandler = Callable[[], Awaitable[None]]


class ShutdownStatus(Enum):
    """Where a shutdown currently stands."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


_FINISHED = (ShutdownStatus.COMPLETED, ShutdownStatus.FAILED, ShutdownStatus.TIMED_OUT)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class ShutdownCoordinator:
    """Runs registered shutdown handlers stage by stage, each under a timeout.

    A handler is a callable taking no arguments and returning an awaitable.
    A handler that raises counts as a failed stage; one that runs past the
    stage timeout is cancelled and counts as timed out. Stages without a
    handler succeed immediately.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._status = ShutdownStatus.NOT_STARTED
        self._handlers: dict[ShutdownStage, ShutdownHandler] = {}
        self._results: list[ShutdownStageResult] = []
        self._start_time: float | None = None

    def __repr__(self) -> str:
        return f"ShutdownCoordinator(status={self._status.name})"

    @property
    def status(self) -> ShutdownStatus:
        return self._status

    @property
    def results(self) -> list[ShutdownStageResult]:
        """Results recorded by the most recent shutdown."""
        return list(self._results)

    def register_handler(self, stage: ShutdownStage, handler: ShutdownHandler) -> None:
        """Set the handler for a stage, replacing any earlier one."""
        self._handlers[stage] = handler

    def remove_handler(self, stage: ShutdownStage) -> None:
        self._handlers.pop(stage, None)

    async def shutdown(self) -> list[ShutdownStageResult]:
        """Shut down following the default order."""
        return await self.shutdown_with_order(ShutdownOrder())

    async def shutdown_with_order(self, order: ShutdownOrder) -> list[ShutdownStageResult]:
        """Run every stage of ``order`` in turn and return their results."""
        self._status = ShutdownStatus.IN_PROGRESS
        self._start_time = time.monotonic()
        self._results.clear()

        self.logger.info(
            "Starting shutdown (%d stages, total timeout: %dms)",
            len(order.stages),
            order.total_timeout(),
        )

        aborted = False
        results: list[ShutdownStageResult] = []
        for stage in order.stages:
            result = await self._execute_stage(stage, order.timeout_per_stage)
            results.append(result)
            self._results.append(result)
            self.logger.log(
                logging.INFO if result.is_success() else logging.WARNING,
                "Shutdown stage: %s",
                result,
            )
            if result.should_abort() or (result.is_failure() and order.abort_on_failure):
                aborted = True
                self.logger.error("Shutdown aborted due to failure in stage: %s", stage)
                break

        self._status = ShutdownStatus.FAILED if aborted else ShutdownStatus.COMPLETED

        successful = sum(1 for r in results if r.is_success())
        failed = len(results) - successful
        self.logger.log(
            logging.INFO if failed == 0 else logging.WARNING,
            "Shutdown complete: %d successful, %d failed, total duration: %dms",
            successful,
            failed,
            _elapsed_ms(self._start_time),
        )
        return results

    async def _execute_stage(self, stage: ShutdownStage, timeout_ms: int) -> ShutdownStageResult:
        handler = self._handlers.get(stage)
        if handler is None:
            return ShutdownStageResult(stage, StageOutcome.SUCCESS, duration_ms=0)

        start = time.monotonic()
        try:
            await asyncio.wait_for(handler(), timeout_ms / 1000)
        except asyncio.TimeoutError:
            return ShutdownStageResult(stage, StageOutcome.TIMEOUT, timeout_ms=timeout_ms)
        except Exception as exc:  # a failing handler must not stop the shutdown
            return ShutdownStageResult(
                stage,
                StageOutcome.FAILED_CONTINUE,
                duration_ms=_elapsed_ms(start),
                error=str(exc),
            )
        return ShutdownStageResult(stage, StageOutcome.SUCCESS, duration_ms=_elapsed_ms(start))

    def result_for_stage(self, stage: ShutdownStage) -> ShutdownStageResult | None:
        """The first recorded result for a stage, if any."""
        return next((r for r in self._results if r.stage is stage), None)

    def is_shutting_down(self) -> bool:
        return self._status is ShutdownStatus.IN_PROGRESS

    def is_complete(self) -> bool:
        return self._status in _FINISHED

    def duration_ms(self) -> int | None:
        """Milliseconds since the shutdown started, once it has finished."""
        if self._start_time is None or not self.is_complete():
            return None
        return _elapsed_ms(self._start_time)

    def reset(self) -> None:
        """Forget the last shutdown so a new one can run."""
        self._status = ShutdownStatus.NOT_STARTED
        self._start_time = None
        self._results.clear()