"""Helpers for logging, retrying and counting errors in a consistent way."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Awaitable, Callable, NoReturn, TypeVar

T = TypeVar("T")

_COMPONENT = "ErrorHandling"


@dataclass
class ErrorHandlingConfig:
    """How errors are logged, retried and whether execution goes on after one."""

    log_errors: bool = True
    max_retries: int = 3
    retry_delay_ms: int = 100
    continue_on_error: bool = False


def _log_error(logger: logging.Logger, error: object, context: str) -> None:
    logger.error(
        context,
        extra={"component": _COMPONENT, "context": context, "error": str(error)},
    )


def log_and_raise(logger: logging.Logger, error: BaseException, context: str) -> NoReturn:
    """Log an error under ``context`` and raise it."""
    _log_error(logger, error, context)
    raise error


def log_and_continue(logger: logging.Logger, error: object, context: str) -> None:
    """Log an error under ``context`` and let execution go on."""
    _log_error(logger, error, context)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    config: ErrorHandlingConfig,
    logger: logging.Logger | None = None,
    context: str = "",
) -> T:
    """Await ``operation()`` until it succeeds or ``config.max_retries`` attempts have failed.

    The exception of the last attempt is re-raised.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as exc:
            if attempt >= config.max_retries:
                if logger is not None:
                    log_and_continue(
                        logger,
                        f"Operation failed after {attempt} attempts: {exc}",
                        context,
                    )
                raise
            if logger is not None:
                logger.warning(
                    "Retry attempt %d/%d for: %s",
                    attempt,
                    config.max_retries,
                    context,
                    extra={
                        "component": _COMPONENT,
                        "attempt": attempt,
                        "max_retries": config.max_retries,
                        "context": context,
                        "error": str(exc),
                    },
                )
            await asyncio.sleep(config.retry_delay_ms / 1000)


async def execute_with_error_handling(
    operation: Callable[[], Awaitable[None]],
    config: ErrorHandlingConfig,
    logger: logging.Logger,
    context: str,
) -> None:
    """Await ``operation()``; on failure log it, then swallow or re-raise as configured."""
    try:
        await operation()
    except Exception as exc:
        if config.continue_on_error:
            log_and_continue(logger, exc, context)
        else:
            log_and_raise(logger, exc, context)


def _type_name(error: BaseException) -> str:
    cls = type(error)
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass
class ErrorStats:
    """Running counts of recorded errors."""

    total_errors: int = 0
    retryable_errors: int = 0
    fatal_errors: int = 0
    errors_by_type: Counter[str] = field(default_factory=Counter)

    def record_error(self, error: BaseException, retryable: bool) -> None:
        self.total_errors += 1
        if retryable:
            self.retryable_errors += 1
        else:
            self.fatal_errors += 1
        self.errors_by_type[_type_name(error)] += 1

    def error_rate(self, total_operations: int) -> float:
        """Errors as a percentage of ``total_operations``; 0.0 when there were none."""
        if total_operations == 0:
            return 0.0
        return self.total_errors / total_operations * 100.0

    def summary(self) -> str:
        return (
            f"Total Errors: {self.total_errors}, "
            f"Retryable: {self.retryable_errors}, "
            f"Fatal: {self.fatal_errors}, "
            f"Types: {len(self.errors_by_type)}"
        )

    def reset(self) -> None:
        self.total_errors = 0
        self.retryable_errors = 0
        self.fatal_errors = 0
        self.errors_by_type = Counter()