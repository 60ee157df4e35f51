"""
Ranking of submissions under one metric
"""
import math
from typing import Iterable, List

from scoreboard.core.metrics import MetricDefinition
from scoreboard.models import Submission


def rank_submissions(submissions: Iterable[Submission], metric: MetricDefinition) -> List[Submission]:
    """
    Sort submissions by one metric and assign ranks 1..K

    Sorting is stable, so exact ties keep their insertion order. NaN scores
    go last in either direction.

    Returns:
        New Submission objects in rank order
    """
    def sort_key(sub: Submission):
        value = sub.scores[metric.id]
        if math.isnan(value):
            return (1, 0.0)
        return (0, -value if metric.higher_is_better else value)

    ordered = sorted(submissions, key=sort_key)

    return [
        sub.model_copy(update={"rank": idx + 1})
        for idx, sub in enumerate(ordered)
    ]
