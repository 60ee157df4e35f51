"""
Leaderboard errors

Every error here is recoverable: the failed operation leaves the stored
ground truth, submissions and metric selection exactly as they were.
"""


class LeaderboardError(Exception):
    """Base class for user-visible ingestion errors"""


class NoGroundTruthError(LeaderboardError):
    def __init__(self):
        super().__init__("Ground truth is not set. Ask the administrator to upload it first.")


class InvalidNumericDataError(LeaderboardError, ValueError):
    """A row's value column could not be read as a number"""


class LengthMismatchError(LeaderboardError):
    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Prediction count ({actual}) does not match ground truth count ({expected})"
        )


class UnknownMetricError(LeaderboardError):
    def __init__(self, metric_id: str):
        self.metric_id = metric_id
        super().__init__(f"Unknown metric: {metric_id}")
