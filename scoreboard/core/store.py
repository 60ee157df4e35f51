"""
In-memory submission store

Holds ground truth, the per-team submissions (kept in rank order) and the
selected metric. Every mutation re-ranks and returns the ranked view; no
I/O happens here, persistence is the caller's final step.
"""
from typing import Dict, List, Optional, Sequence

from scoreboard.core.metrics import DEFAULT_METRIC, METRICS, MetricDefinition, get_metric
from scoreboard.core.ranking import rank_submissions
from scoreboard.models import Submission


class SubmissionStore:
    def __init__(
        self,
        metrics: Dict[str, MetricDefinition] = METRICS,
        default_metric: str = DEFAULT_METRIC
    ):
        self.metrics = metrics
        self.default_metric = get_metric(default_metric, metrics).id
        self.ground_truth: Optional[List[float]] = None
        self.submissions: List[Submission] = []
        self.selected_metric: str = self.default_metric

    @property
    def metric(self) -> MetricDefinition:
        return self.metrics[self.selected_metric]

    def ranked(self) -> List[Submission]:
        return list(self.submissions)

    def get(self, team_name: str) -> Optional[Submission]:
        for sub in self.submissions:
            if sub.team_name == team_name:
                return sub
        return None

    def set_ground_truth(self, values: Sequence[float]) -> List[Submission]:
        """Replace ground truth; existing submissions lose their basis and are dropped"""
        self.ground_truth = list(values)
        self.submissions = []
        return self.ranked()

    def upsert(self, submission: Submission) -> List[Submission]:
        """Insert or replace the team's submission, then re-rank"""
        remaining = [s for s in self.submissions if s.team_name != submission.team_name]
        remaining.append(submission)
        self.submissions = rank_submissions(remaining, self.metric)
        return self.ranked()

    def switch_metric(self, metric_id: str) -> List[Submission]:
        """Select another metric and re-rank from cached scores"""
        self.selected_metric = get_metric(metric_id, self.metrics).id
        self.submissions = rank_submissions(self.submissions, self.metric)
        return self.ranked()

    def restore(
        self,
        ground_truth: Optional[Sequence[float]] = None,
        submissions: Optional[Sequence[Submission]] = None,
        selected_metric: Optional[str] = None
    ) -> List[Submission]:
        """Hydrate from persisted values; None leaves the current value"""
        if ground_truth is not None:
            self.ground_truth = list(ground_truth)
        if selected_metric is not None:
            self.selected_metric = get_metric(selected_metric, self.metrics).id
        if submissions is not None:
            self.submissions = list(submissions)
        self.submissions = rank_submissions(self.submissions, self.metric)
        return self.ranked()
