"""
Metric registry

Four metrics are computed for every submission:
  - accuracy: share of predictions within ±tolerance of the target (higher is better)
  - mae:      mean absolute error (lower is better)
  - rmse:     root mean squared error (lower is better)
  - mspe:     mean squared percentage error (lower is better)

MSPE divides by the target. A zero target contributes inf (or nan when the
prediction is also zero) and the mean follows; this is not guarded.
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from scoreboard.errors import UnknownMetricError


ACCURACY_TOLERANCE = 0.01
DEFAULT_METRIC = "rmse"


@dataclass(frozen=True)
class MetricDefinition:
    id: str
    name: str
    calculate: Callable[[Sequence[float], Sequence[float]], float]
    higher_is_better: bool
    format: Callable[[float], str]


def _check_pair(predictions: Sequence[float], targets: Sequence[float]) -> None:
    if len(predictions) != len(targets):
        raise ValueError(
            f"predictions and targets differ in length: {len(predictions)} != {len(targets)}"
        )
    if not predictions:
        raise ValueError("cannot score an empty prediction set")


def _divide(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 is ±inf, 0/0 is nan"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def accuracy(predictions: Sequence[float], targets: Sequence[float],
             tolerance: float = ACCURACY_TOLERANCE) -> float:
    _check_pair(predictions, targets)
    correct = sum(1 for p, t in zip(predictions, targets) if abs(p - t) < tolerance)
    return correct / len(predictions)


def mean_absolute_error(predictions: Sequence[float], targets: Sequence[float]) -> float:
    _check_pair(predictions, targets)
    return sum(abs(p - t) for p, t in zip(predictions, targets)) / len(predictions)


def root_mean_squared_error(predictions: Sequence[float], targets: Sequence[float]) -> float:
    _check_pair(predictions, targets)
    mse = sum((p - t) ** 2 for p, t in zip(predictions, targets)) / len(predictions)
    return math.sqrt(mse)


def mean_squared_percentage_error(predictions: Sequence[float], targets: Sequence[float]) -> float:
    _check_pair(predictions, targets)
    total = sum(_divide(t - p, t) ** 2 for p, t in zip(predictions, targets))
    return total / len(predictions)


def format_percent(value: float) -> str:
    return f"{value * 100:.2f}%"


def format_fixed(value: float) -> str:
    return f"{value:.4f}"


def build_metric_registry(tolerance: float = ACCURACY_TOLERANCE) -> Dict[str, MetricDefinition]:
    """
    Build the ordered metric registry

    Args:
        tolerance: Absolute tolerance under which a prediction counts as
                   correct for the accuracy metric

    Returns:
        Mapping of metric id to MetricDefinition, in display order
    """
    return {
        "accuracy": MetricDefinition(
            id="accuracy",
            name="Accuracy",
            calculate=lambda p, t: accuracy(p, t, tolerance),
            higher_is_better=True,
            format=format_percent,
        ),
        "mae": MetricDefinition(
            id="mae",
            name="MAE",
            calculate=mean_absolute_error,
            higher_is_better=False,
            format=format_fixed,
        ),
        "rmse": MetricDefinition(
            id="rmse",
            name="RMSE",
            calculate=root_mean_squared_error,
            higher_is_better=False,
            format=format_fixed,
        ),
        "mspe": MetricDefinition(
            id="mspe",
            name="MSPE",
            calculate=mean_squared_percentage_error,
            higher_is_better=False,
            format=format_percent,
        ),
    }


METRICS = build_metric_registry()


def get_metric(metric_id: str, metrics: Dict[str, MetricDefinition] = METRICS) -> MetricDefinition:
    try:
        return metrics[metric_id]
    except KeyError:
        raise UnknownMetricError(metric_id) from None
