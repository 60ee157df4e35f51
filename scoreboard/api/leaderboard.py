"""
Leaderboard and metric selection endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from scoreboard.api.deps import get_leaderboard
from scoreboard.errors import UnknownMetricError
from scoreboard.models import MetricSelection
from scoreboard.services.leaderboard import Leaderboard


router = APIRouter(prefix="/api", tags=["leaderboard"])


def _metric_list(leaderboard: Leaderboard):
    selected = leaderboard.store.selected_metric
    return [
        {
            "id": metric.id,
            "name": metric.name,
            "higher_is_better": metric.higher_is_better,
            "selected": metric.id == selected
        }
        for metric in leaderboard.metrics.values()
    ]


@router.get("/leaderboard")
async def get_leaderboard_data(leaderboard: Leaderboard = Depends(get_leaderboard)):
    """
    Ranked table under the selected metric

    Returns:
        - metric: id, name and direction of the ranking metric
        - teams: rows in rank order with raw and formatted scores
        - last_error: message from the most recent failed operation, if any
    """
    metric = leaderboard.store.metric
    teams = leaderboard.table()

    return {
        "metric": {
            "id": metric.id,
            "name": metric.name,
            "higher_is_better": metric.higher_is_better
        },
        "ground_truth_rows": len(leaderboard.ground_truth) if leaderboard.ground_truth else None,
        "teams": teams,
        "total_teams": len(teams),
        "last_error": leaderboard.last_error
    }


@router.get("/metrics")
async def list_metrics(leaderboard: Leaderboard = Depends(get_leaderboard)):
    """List registered metrics in display order"""
    return {"metrics": _metric_list(leaderboard)}


@router.post("/metric")
async def select_metric(
    payload: MetricSelection,
    leaderboard: Leaderboard = Depends(get_leaderboard)
):
    """
    Rank by another metric (no rescoring)

    Request:
        {"metric": "accuracy"}
    """
    try:
        leaderboard.select_metric(payload.metric)
    except UnknownMetricError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "success": True,
        "metric": payload.metric,
        "teams": leaderboard.table()
    }
