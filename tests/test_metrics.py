"""
Tests for the metric registry
"""
import math

import pytest

from scoreboard.core.metrics import (
    METRICS,
    DEFAULT_METRIC,
    accuracy,
    build_metric_registry,
    get_metric,
    mean_absolute_error,
    mean_squared_percentage_error,
    root_mean_squared_error,
)
from scoreboard.errors import UnknownMetricError


def test_registry_order_and_direction():
    """Four metrics in display order, only accuracy ranks descending"""
    assert list(METRICS) == ["accuracy", "mae", "rmse", "mspe"]
    assert METRICS["accuracy"].higher_is_better is True
    assert not any(METRICS[m].higher_is_better for m in ("mae", "rmse", "mspe"))
    assert DEFAULT_METRIC == "rmse"


def test_perfect_predictions_format():
    """Exact match: 100% accuracy and zero errors"""
    gt = [1.0, 2.0, 3.0]
    formatted = {
        metric_id: metric.format(metric.calculate(gt, gt))
        for metric_id, metric in METRICS.items()
    }
    assert formatted == {
        "accuracy": "100.00%",
        "mae": "0.0000",
        "rmse": "0.0000",
        "mspe": "0.00%",
    }


def test_accuracy_tolerance_is_strict():
    """A difference equal to the tolerance does not count"""
    assert accuracy([1.005, 2.5], [1.0, 2.0]) == 0.5
    assert accuracy([1.5], [1.0], tolerance=0.5) == 0.0
    assert accuracy([1.4], [1.0], tolerance=0.5) == 1.0


def test_configured_tolerance():
    """Registry built with a wider tolerance"""
    registry = build_metric_registry(tolerance=0.5)
    assert registry["accuracy"].calculate([1.2, 3.0], [1.0, 2.0]) == 0.5


def test_mae_and_rmse_values():
    """Known values for a simple error vector"""
    preds = [1.0, 2.0, 5.0]
    targets = [2.0, 2.0, 3.0]
    assert mean_absolute_error(preds, targets) == pytest.approx(1.0)
    assert root_mean_squared_error(preds, targets) == pytest.approx(math.sqrt(5 / 3))


def test_mspe_value():
    """Squared relative error averaged over rows"""
    assert mean_squared_percentage_error([1.5, 4.0], [1.0, 4.0]) == pytest.approx(0.125)
    assert METRICS["mspe"].format(0.125) == "12.50%"


def test_mspe_zero_target_is_infinite():
    """Zero target with a non-zero error gives inf, no exception"""
    assert math.isinf(mean_squared_percentage_error([1.0, 2.0], [0.0, 2.0]))


def test_mspe_zero_target_zero_prediction_is_nan():
    """0/0 contributes nan"""
    assert math.isnan(mean_squared_percentage_error([0.0, 2.0], [0.0, 2.0]))


@pytest.mark.parametrize("preds,targets", [
    ([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]),
    ([0.0, 0.0, 10.0], [1.0, 1.0, 1.0]),
    ([-3.5, 2.25], [1.0, -1.0]),
    ([100.0], [99.0]),
])
def test_mae_never_exceeds_rmse(preds, targets):
    """MAE <= RMSE for any pair"""
    mae = mean_absolute_error(preds, targets)
    rmse = root_mean_squared_error(preds, targets)
    assert rmse >= 0
    assert mae <= rmse + 1e-12


def test_rmse_zero_only_for_identical():
    """RMSE is zero exactly when predictions equal targets"""
    assert root_mean_squared_error([1.0, 2.0], [1.0, 2.0]) == 0.0
    assert root_mean_squared_error([1.0, 2.0001], [1.0, 2.0]) > 0.0


def test_length_mismatch_rejected():
    """Direct calls with mismatched or empty inputs raise ValueError"""
    with pytest.raises(ValueError):
        mean_absolute_error([1.0], [1.0, 2.0])
    with pytest.raises(ValueError):
        root_mean_squared_error([], [])


def test_get_metric_unknown():
    """Unregistered ids raise UnknownMetricError"""
    assert get_metric("mae").name == "MAE"
    with pytest.raises(UnknownMetricError):
        get_metric("r2")
