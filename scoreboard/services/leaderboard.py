"""
Leaderboard service - the API the presentation layer calls into

Each operation runs in two phases: the pure part (parse, score, rank) on
the in-memory store, then the write-back through the persistence bridge.
A failing operation raises a LeaderboardError before any mutation and
leaves the table unchanged.
"""
import logging
import math
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel

from scoreboard.core.metrics import build_metric_registry
from scoreboard.core.parser import parse_numeric_column
from scoreboard.core.scoring import score_submission
from scoreboard.core.store import SubmissionStore
from scoreboard.errors import LeaderboardError
from scoreboard.models import CsvUpload, Settings, Submission
from scoreboard.services.persistence import (
    FileKeyValueStore, KeyValueStore, MemoryKeyValueStore, PersistenceBridge
)


logger = logging.getLogger(__name__)


class BatchResult(BaseModel):
    """Outcome of one file in a multi-file upload"""
    filename: str
    success: bool
    team_name: Optional[str] = None
    rank: Optional[int] = None
    error: Optional[str] = None


class Leaderboard:
    def __init__(
        self,
        store: SubmissionStore,
        bridge: PersistenceBridge,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.bridge = bridge
        self.clock = clock
        self.last_error: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings, kv: Optional[KeyValueStore] = None) -> "Leaderboard":
        """Wire store, registry and storage from settings, then hydrate"""
        if kv is None:
            if settings.storage == "file":
                kv = FileKeyValueStore(settings.data_dir)
            else:
                kv = MemoryKeyValueStore()

        store = SubmissionStore(
            metrics=build_metric_registry(settings.accuracy_tolerance),
            default_metric=settings.default_metric,
        )
        bridge = PersistenceBridge(kv)
        bridge.hydrate(store)
        return cls(store, bridge)

    @property
    def metrics(self):
        return self.store.metrics

    @property
    def ground_truth(self) -> Optional[List[float]]:
        return self.store.ground_truth

    def _fail(self, message: str) -> None:
        self.last_error = message
        logger.warning(f"❌ {message}")

    def set_ground_truth(self, csv_text: str) -> int:
        """
        Replace ground truth from CSV text

        All stored submissions are dropped, since they were scored against
        the old targets.

        Returns:
            Number of ground truth rows
        """
        try:
            values = parse_numeric_column(csv_text, source="ground truth")
        except LeaderboardError as e:
            self._fail(f"Ground truth upload failed: {e}")
            raise

        dropped = len(self.store.submissions)
        self.store.set_ground_truth(values)

        self.bridge.save_ground_truth(values)
        self.bridge.save_submissions(self.store.submissions)
        self.last_error = None

        logger.info(f"✅ Ground truth set: {len(values)} rows ({dropped} submissions cleared)")
        return len(values)

    def submit(self, csv_text: str, filename: str) -> Submission:
        """
        Score a submission file and upsert it by team name

        Returns:
            The team's stored submission, with its rank
        """
        try:
            submission = score_submission(
                csv_text,
                filename,
                self.store.ground_truth,
                metrics=self.store.metrics,
                now=self.clock(),
            )
        except LeaderboardError as e:
            self._fail(f"Submission {filename!r} rejected: {e}")
            raise

        self.store.upsert(submission)
        self.bridge.save_submissions(self.store.submissions)
        self.last_error = None

        stored = self.store.get(submission.team_name)
        metric = self.store.metric
        logger.info(
            f"✅ Team {stored.team_name} | {metric.name}: "
            f"{metric.format(stored.scores[metric.id])} | Rank {stored.rank}/{len(self.store.submissions)}"
        )
        return stored

    def submit_batch(self, files: Iterable[CsvUpload]) -> List[BatchResult]:
        """
        Submit several files one after another

        Each file is an independent upsert: a failure does not undo the
        files processed before it.
        """
        results = []
        for upload in files:
            try:
                stored = self.submit(upload.csv, upload.filename)
            except LeaderboardError as e:
                results.append(BatchResult(filename=upload.filename, success=False, error=str(e)))
                continue
            results.append(BatchResult(
                filename=upload.filename,
                success=True,
                team_name=stored.team_name,
                rank=stored.rank,
            ))

        # ranks move as later files land; report the final ones
        for result in results:
            if result.success:
                result.rank = self.store.get(result.team_name).rank
        return results

    def select_metric(self, metric_id: str) -> List[Submission]:
        """Switch the ranking metric; scores are reused, not recomputed"""
        try:
            ranked = self.store.switch_metric(metric_id)
        except LeaderboardError as e:
            self._fail(str(e))
            raise

        self.bridge.save_selected_metric(self.store.selected_metric)
        self.bridge.save_submissions(ranked)
        self.last_error = None

        logger.info(f"🔀 Ranking by {self.store.metric.name}")
        return ranked

    def get_ranked(self) -> List[Submission]:
        return self.store.ranked()

    def describe(self, sub: Submission) -> Dict:
        """
        Display view of one submission

        Non-finite scores (MSPE against a zero target) become None in the
        numeric fields, since JSON has no inf/nan; the formatted strings keep them.
        """
        metric = self.store.metric
        value = sub.scores[metric.id]
        return {
            "rank": sub.rank,
            "team_name": sub.team_name,
            "score": value if math.isfinite(value) else None,
            "formatted_score": metric.format(value),
            "scores": {k: v if math.isfinite(v) else None for k, v in sub.scores.items()},
            "formatted_scores": {
                k: self.store.metrics[k].format(v) for k, v in sub.scores.items()
            },
            "submit_time": sub.submit_time,
            "predictions_count": sub.predictions_count,
        }

    def table(self) -> List[Dict]:
        """Ranked rows for the selected metric"""
        return [self.describe(sub) for sub in self.store.ranked()]
