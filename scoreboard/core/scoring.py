"""
Submission scoring

Scoring is a pure transform: raw CSV text + filename + ground truth in,
a scored Submission out. Storing and ranking happen in the caller.
"""
from datetime import datetime
from typing import Dict, Optional, Sequence

from scoreboard.core.metrics import METRICS, MetricDefinition
from scoreboard.core.parser import parse_numeric_column
from scoreboard.errors import LengthMismatchError, NoGroundTruthError
from scoreboard.models import Submission


SUBMIT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def team_name_from_filename(filename: str) -> str:
    """
    Team identity is the filename up to the first '.'

    Example:
        >>> team_name_from_filename("TeamA.v2.csv")
        'TeamA'
    """
    return filename.split(".", 1)[0]


def calculate_scores(
    predictions: Sequence[float],
    targets: Sequence[float],
    metrics: Dict[str, MetricDefinition] = METRICS
) -> Dict[str, float]:
    """Compute every registered metric for one prediction set"""
    return {
        metric_id: metric.calculate(predictions, targets)
        for metric_id, metric in metrics.items()
    }


def score_submission(
    csv_text: str,
    filename: str,
    ground_truth: Optional[Sequence[float]],
    metrics: Dict[str, MetricDefinition] = METRICS,
    now: Optional[datetime] = None
) -> Submission:
    """
    Main scoring entry point

    Args:
        csv_text: Decoded submission file
        filename: Uploaded filename (team name source)
        ground_truth: Target values, or None when not configured yet
        metrics: Metric registry
        now: Submission timestamp (defaults to current local time)

    Returns:
        Scored Submission without a rank

    Raises:
        NoGroundTruthError: If ground truth is not set
        InvalidNumericDataError: If the file does not parse
        LengthMismatchError: If row count differs from ground truth
    """
    if ground_truth is None:
        raise NoGroundTruthError()

    predictions = parse_numeric_column(csv_text, source="submission")

    if len(predictions) != len(ground_truth):
        raise LengthMismatchError(len(predictions), len(ground_truth))

    scores = calculate_scores(predictions, ground_truth, metrics)
    submitted_at = now or datetime.now()

    return Submission(
        team_name=team_name_from_filename(filename),
        predictions=predictions,
        scores=scores,
        submit_time=submitted_at.strftime(SUBMIT_TIME_FORMAT),
        predictions_count=len(predictions),
    )
