"""
Tests for the persistence bridge and key-value stores
"""
import json
import math

import pytest

from scoreboard.core.store import SubmissionStore
from scoreboard.models import Submission
from scoreboard.services.persistence import (
    GROUND_TRUTH_KEY,
    SELECTED_METRIC_KEY,
    SUBMISSIONS_KEY,
    FileKeyValueStore,
    MemoryKeyValueStore,
    PersistenceBridge,
    dump_submissions,
    load_submissions,
)


def make_sub(team, **scores):
    base = {"accuracy": 0.0, "mae": 0.0, "rmse": 0.0, "mspe": 0.0}
    base.update(scores)
    return Submission(
        team_name=team,
        predictions=[1.0, 2.0],
        scores=base,
        submit_time="2024-01-01 10:00:00",
        predictions_count=2,
        rank=1,
    )


def test_hydrate_empty_store_keeps_defaults():
    """Nothing persisted: no ground truth, no submissions, default metric"""
    store = PersistenceBridge(MemoryKeyValueStore()).hydrate(SubmissionStore())
    assert store.ground_truth is None
    assert store.submissions == []
    assert store.selected_metric == "rmse"


def test_hydrate_keys_independently():
    """Only the selected metric persisted"""
    kv = MemoryKeyValueStore({SELECTED_METRIC_KEY: "mae"})
    store = PersistenceBridge(kv).hydrate(SubmissionStore())
    assert store.ground_truth is None
    assert store.selected_metric == "mae"


def test_submission_records_use_camel_case():
    """Stored records carry teamName/submitTime/predictionsCount keys"""
    raw = dump_submissions([make_sub("TeamA")])
    record = json.loads(raw)[0]
    assert set(record) == {"teamName", "predictions", "scores", "submitTime", "predictionsCount", "rank"}
    assert load_submissions(raw)[0].team_name == "TeamA"


def test_non_finite_scores_round_trip():
    """inf and nan MSPE survive save and load"""
    raw = dump_submissions([make_sub("A", mspe=math.inf), make_sub("B", mspe=math.nan)])
    loaded = load_submissions(raw)
    assert math.isinf(loaded[0].scores["mspe"])
    assert math.isnan(loaded[1].scores["mspe"])


def test_round_trip_reproduces_scores_and_rank():
    """Save, reload into a fresh store, same scores and ranks"""
    kv = MemoryKeyValueStore()
    bridge = PersistenceBridge(kv)

    store = SubmissionStore()
    store.set_ground_truth([1.0, 2.0])
    store.upsert(make_sub("A", rmse=0.2))
    store.upsert(make_sub("B", rmse=0.1))
    bridge.save_ground_truth(store.ground_truth)
    bridge.save_submissions(store.submissions)
    bridge.save_selected_metric(store.selected_metric)

    restored = PersistenceBridge(kv).hydrate(SubmissionStore())
    assert restored.ground_truth == [1.0, 2.0]
    assert [(s.team_name, s.rank, s.scores) for s in restored.ranked()] == \
        [(s.team_name, s.rank, s.scores) for s in store.ranked()]


def test_hydrate_reranks_stale_cached_ranks():
    """Persisted rank is a cache; ordering comes from the live comparator"""
    stale = [make_sub("Worse", rmse=0.9), make_sub("Better", rmse=0.1)]
    kv = MemoryKeyValueStore({SUBMISSIONS_KEY: dump_submissions(stale)})
    store = PersistenceBridge(kv).hydrate(SubmissionStore())
    assert [(s.team_name, s.rank) for s in store.ranked()] == [("Better", 1), ("Worse", 2)]


def test_hydrate_unknown_metric_falls_back():
    """Unregistered stored metric id is ignored with a warning"""
    kv = MemoryKeyValueStore({SELECTED_METRIC_KEY: "r2"})
    store = PersistenceBridge(kv).hydrate(SubmissionStore())
    assert store.selected_metric == "rmse"


def test_hydrate_corrupted_data_raises():
    """Malformed stored JSON is fatal"""
    kv = MemoryKeyValueStore({GROUND_TRUTH_KEY: "[1.0, 2.0"})
    with pytest.raises(ValueError):
        PersistenceBridge(kv).hydrate(SubmissionStore())


def test_file_store_save_load_clear(tmp_path):
    """One file per key under the data directory"""
    kv = FileKeyValueStore(str(tmp_path / "state"))
    assert kv.load("groundTruth") is None

    kv.save("groundTruth", "[1.0]")
    assert (tmp_path / "state" / "groundTruth.json").exists()
    assert kv.load("groundTruth") == "[1.0]"

    kv.clear("groundTruth")
    kv.clear("groundTruth")
    assert kv.load("groundTruth") is None
