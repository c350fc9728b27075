import logging

import pytest

from loquat.error_handling import (
    ErrorHandlingConfig,
    ErrorStats,
    execute_with_error_handling,
    log_and_continue,
    log_and_raise,
    retry_with_backoff,
)

LOGGER_NAME = "loquat.tests.error_handling"


@pytest.fixture
def logger():
    return logging.getLogger(LOGGER_NAME)


def test_error_handling_config_default():
    config = ErrorHandlingConfig()
    assert config.log_errors is True
    assert config.max_retries == 3
    assert config.retry_delay_ms == 100
    assert config.continue_on_error is False


def test_error_stats_record():
    stats = ErrorStats()
    stats.record_error(RuntimeError("Test error"), True)
    assert stats.total_errors == 1
    assert stats.retryable_errors == 1
    assert stats.fatal_errors == 0


def test_error_stats_rate():
    stats = ErrorStats()
    error = RuntimeError("Test error")
    for _ in range(3):
        stats.record_error(error, False)
    assert stats.error_rate(10) == 30.0


def test_error_stats_rate_without_operations():
    stats = ErrorStats()
    stats.record_error(RuntimeError("Test error"), False)
    assert stats.error_rate(0) == 0.0


def test_error_stats_summary():
    stats = ErrorStats()
    error = RuntimeError("Test error")
    stats.record_error(error, True)
    stats.record_error(error, False)
    summary = stats.summary()
    assert "Total Errors: 2" in summary
    assert "Retryable: 1" in summary
    assert "Fatal: 1" in summary


def test_error_stats_counts_types():
    stats = ErrorStats()
    stats.record_error(RuntimeError("a"), True)
    stats.record_error(ValueError("b"), True)
    stats.record_error(ValueError("c"), False)
    assert len(stats.errors_by_type) == 2
    assert sum(stats.errors_by_type.values()) == stats.total_errors


def test_error_stats_reset():
    stats = ErrorStats()
    stats.record_error(RuntimeError("Test error"), True)
    assert stats.total_errors == 1
    stats.reset()
    assert stats.total_errors == 0
    assert stats.retryable_errors == 0
    assert stats.fatal_errors == 0
    assert not stats.errors_by_type


def test_log_and_continue(logger, caplog):
    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        result = log_and_continue(logger, RuntimeError("Test error"), "Test context")
    assert result is None
    record = caplog.records[-1]
    assert record.getMessage() == "Test context"
    assert record.error == "Test error"
    assert record.component == "ErrorHandling"


def test_log_and_raise(logger, caplog):
    error = RuntimeError("Test error")
    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        with pytest.raises(RuntimeError) as info:
            log_and_raise(logger, error, "Test context")
    assert info.value is error
    assert caplog.records[-1].levelno == logging.ERROR


@pytest.mark.asyncio
async def test_retry_with_backoff_success(logger, caplog):
    config = ErrorHandlingConfig(max_retries=3, retry_delay_ms=10)
    attempts = 0

    async def operation():
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise RuntimeError("Temporary error")
        return 42

    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        result = await retry_with_backoff(operation, config, logger, "Test operation")
    assert result == 42
    assert attempts == 3
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2


@pytest.mark.asyncio
async def test_retry_with_backoff_failure(logger):
    config = ErrorHandlingConfig(max_retries=2, retry_delay_ms=10)
    attempts = 0

    async def operation():
        nonlocal attempts
        attempts += 1
        raise RuntimeError("Persistent error")

    with pytest.raises(RuntimeError, match="Persistent error"):
        await retry_with_backoff(operation, config, logger, "Test operation")
    assert attempts == 2


@pytest.mark.asyncio
async def test_retry_without_logger_returns_first_success():
    config = ErrorHandlingConfig(retry_delay_ms=10)

    async def operation():
        return "done"

    assert await retry_with_backoff(operation, config, None, "ctx") == "done"


@pytest.mark.asyncio
async def test_execute_with_error_handling_continue(logger, caplog):
    config = ErrorHandlingConfig(continue_on_error=True)

    async def operation():
        raise RuntimeError("Test error")

    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        result = await execute_with_error_handling(operation, config, logger, "Test context")
    assert result is None
    assert caplog.records[-1].error == "Test error"


@pytest.mark.asyncio
async def test_execute_with_error_handling_fail(logger):
    config = ErrorHandlingConfig(continue_on_error=False)

    async def operation():
        raise RuntimeError("Test error")

    with pytest.raises(RuntimeError, match="Test error"):
        await execute_with_error_handling(operation, config, logger, "Test context")