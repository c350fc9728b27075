import pytest

from loquat.shutdown_stages import (
    ShutdownOrder,
    ShutdownStage,
    ShutdownStageResult,
    StageOutcome,
)


def test_shutdown_stage_display():
    labels = [str(stage) for stage in ShutdownOrder().stages]
    assert labels == [
        "Stop Accepting Requests",
        "Web Service",
        "Adapter Hot Reload",
        "Plugin Hot Reload",
        "Adapters",
        "Plugins",
        "Workers",
        "Channels",
        "Engine",
        "Logging",
    ]
    assert format(ShutdownStage.WEB_SERVICE) == "Web Service"
    assert format(ShutdownStage.ENGINE) == "Engine"


def test_shutdown_stage_result_success():
    result = ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.SUCCESS, duration_ms=100)
    assert result.is_success()
    assert not result.is_failure()
    assert result.stage is ShutdownStage.ENGINE
    assert result.duration_ms == 100
    assert result.error is None


def test_shutdown_stage_result_failure():
    result = ShutdownStageResult(
        ShutdownStage.ENGINE, StageOutcome.FAILED_CONTINUE, duration_ms=50, error="Test error"
    )
    assert not result.is_success()
    assert result.is_failure()
    assert not result.should_abort()
    assert result.stage is ShutdownStage.ENGINE
    assert result.duration_ms == 50
    assert result.error == "Test error"


def test_shutdown_stage_result_abort():
    result = ShutdownStageResult(
        ShutdownStage.ENGINE, StageOutcome.FAILED_ABORT, duration_ms=30, error="Critical error"
    )
    assert not result.is_success()
    assert result.is_failure()
    assert result.should_abort()
    assert result.stage is ShutdownStage.ENGINE


def test_shutdown_stage_result_timeout():
    result = ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.TIMEOUT, timeout_ms=5000)
    assert not result.is_success()
    assert result.is_failure()
    assert not result.should_abort()
    assert result.stage is ShutdownStage.ENGINE
    assert result.duration_ms is None
    assert result.error is None


@pytest.mark.parametrize(
    "result, text",
    [
        (
            ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.SUCCESS, duration_ms=12),
            "Engine: SUCCESS (12ms)",
        ),
        (
            ShutdownStageResult(
                ShutdownStage.WEB_SERVICE, StageOutcome.FAILED_CONTINUE, duration_ms=3, error="boom"
            ),
            "Web Service: FAILED_CONTINUE - boom (3ms)",
        ),
        (
            ShutdownStageResult(
                ShutdownStage.PLUGINS, StageOutcome.FAILED_ABORT, duration_ms=7, error="bad"
            ),
            "Plugins: FAILED_ABORT - bad (7ms)",
        ),
        (
            ShutdownStageResult(ShutdownStage.LOGGING, StageOutcome.TIMEOUT, timeout_ms=100),
            "Logging: TIMEOUT (exceeded 100ms)",
        ),
    ],
)
def test_shutdown_stage_result_str(result, text):
    assert str(result) == text


def test_invalid_results_rejected():
    with pytest.raises(ValueError):
        ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.TIMEOUT)
    with pytest.raises(ValueError):
        ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.FAILED_CONTINUE, duration_ms=1)
    with pytest.raises(ValueError):
        ShutdownStageResult(ShutdownStage.ENGINE, StageOutcome.SUCCESS)


def test_shutdown_order_default():
    order = ShutdownOrder()
    assert len(order.stages) == 10
    assert order.timeout_per_stage == 5000
    assert not order.abort_on_failure
    assert order.stages[0] is ShutdownStage.STOP_ACCEPTING_REQUESTS
    assert order.stages[-1] is ShutdownStage.LOGGING


def test_shutdown_order_custom_timeout():
    order = ShutdownOrder.with_timeout(10000)
    assert order.timeout_per_stage == 10000
    assert order.total_timeout() == 100000


def test_shutdown_order_add_remove_stage():
    order = (
        ShutdownOrder()
        .add_stage(ShutdownStage.WEB_SERVICE)
        .remove_stage(ShutdownStage.PLUGIN_HOT_RELOAD)
    )
    assert len(order.stages) == 10
    assert ShutdownStage.WEB_SERVICE in order.stages
    assert ShutdownStage.PLUGIN_HOT_RELOAD not in order.stages


def test_shutdown_order_abort_on_failure():
    order = ShutdownOrder().with_abort_on_failure()
    assert order.abort_on_failure


def test_shutdown_order_builders_leave_original_unchanged():
    order = ShutdownOrder()
    order.remove_stage(ShutdownStage.ENGINE)
    assert ShutdownStage.ENGINE in order.stages
    assert order.with_abort_on_failure().abort_on_failure is True
    assert order.abort_on_failure is False