"""
Health check and system status endpoints
"""
from fastapi import APIRouter, Depends

from scoreboard.api.deps import get_leaderboard
from scoreboard.services.leaderboard import Leaderboard


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(leaderboard: Leaderboard = Depends(get_leaderboard)):
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Competition Leaderboard Server",
        "version": "1.0.0",
        "ground_truth_rows": len(leaderboard.ground_truth) if leaderboard.ground_truth else 0,
        "total_submissions": len(leaderboard.get_ranked())
    }
