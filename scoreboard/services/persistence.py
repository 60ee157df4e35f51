"""
Persistence bridge between the submission store and a key-value store

State is kept under three independent keys (ground truth, submissions,
selected metric). Writes are synchronous and happen right after the
in-memory mutation they mirror.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from scoreboard.core.store import SubmissionStore
from scoreboard.models import Submission


logger = logging.getLogger(__name__)

GROUND_TRUTH_KEY = "groundTruth"
SUBMISSIONS_KEY = "submissions"
SELECTED_METRIC_KEY = "selectedMetric"


class KeyValueStore(ABC):
    """Durable string store: load / save / clear by key"""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value

    def clear(self, key: str) -> None:
        self.data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """One UTF-8 file per key, <data_dir>/<key>.json"""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def save(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self._path(key), 'w', encoding='utf-8') as f:
            f.write(value)

    def clear(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def dump_submissions(submissions: Sequence[Submission]) -> str:
    # json (not pydantic's serializer) so inf/nan scores survive as Infinity/NaN
    return json.dumps([s.model_dump(by_alias=True) for s in submissions], ensure_ascii=False)


def load_submissions(raw: str) -> List[Submission]:
    return [Submission.model_validate(item) for item in json.loads(raw)]


class PersistenceBridge:
    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def hydrate(self, store: SubmissionStore) -> SubmissionStore:
        """
        Load persisted state into the store

        Missing keys leave the store defaults. Corrupted values are not
        guarded and raise.
        """
        raw_gt = self.kv.load(GROUND_TRUTH_KEY)
        raw_subs = self.kv.load(SUBMISSIONS_KEY)
        raw_metric = self.kv.load(SELECTED_METRIC_KEY)

        ground_truth = [float(v) for v in json.loads(raw_gt)] if raw_gt is not None else None
        submissions = load_submissions(raw_subs) if raw_subs is not None else None

        selected_metric = raw_metric
        if raw_metric is not None and raw_metric not in store.metrics:
            logger.warning(
                f"⚠️ Stored metric {raw_metric!r} is not registered, using {store.default_metric!r}"
            )
            selected_metric = None

        store.restore(ground_truth, submissions, selected_metric)

        logger.info(
            f"✅ Restored state: ground truth={len(store.ground_truth) if store.ground_truth else 0} rows, "
            f"{len(store.submissions)} submissions, metric={store.selected_metric}"
        )
        return store

    def save_ground_truth(self, values: Sequence[float]) -> None:
        self.kv.save(GROUND_TRUTH_KEY, json.dumps(list(values)))

    def save_submissions(self, submissions: Sequence[Submission]) -> None:
        self.kv.save(SUBMISSIONS_KEY, dump_submissions(submissions))

    def save_selected_metric(self, metric_id: str) -> None:
        self.kv.save(SELECTED_METRIC_KEY, metric_id)
