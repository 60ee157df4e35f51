"""
Configuration endpoints
"""
from fastapi import APIRouter, Depends, Request

from scoreboard.api.deps import get_leaderboard
from scoreboard.services.leaderboard import Leaderboard


router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config(request: Request, leaderboard: Leaderboard = Depends(get_leaderboard)):
    """Get non-secret server configuration and the metric registry"""
    settings = request.app.state.settings

    return {
        "default_metric": settings.default_metric,
        "selected_metric": leaderboard.store.selected_metric,
        "accuracy_tolerance": settings.accuracy_tolerance,
        "storage": settings.storage,
        "metrics": {
            metric_id: {
                "name": metric.name,
                "higher_is_better": metric.higher_is_better
            }
            for metric_id, metric in leaderboard.metrics.items()
        }
    }
