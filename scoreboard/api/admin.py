"""
Admin endpoints: ground truth and bulk submission upload
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from scoreboard.api.deps import get_leaderboard
from scoreboard.errors import LeaderboardError
from scoreboard.models import BatchUpload, GroundTruthUpload
from scoreboard.services.auth import require_admin
from scoreboard.services.leaderboard import Leaderboard


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/login")
async def login(username: str = Depends(require_admin)):
    """Admin: verify credentials"""
    return {"success": True, "username": username}


@router.post("/ground-truth")
async def upload_ground_truth(
    payload: GroundTruthUpload,
    leaderboard: Leaderboard = Depends(get_leaderboard)
):
    """
    Admin: Replace ground truth (clears every submission)

    Request:
        {"csv": "id,value\\n0,1.0\\n1,2.0"}
    """
    try:
        count = leaderboard.set_ground_truth(payload.csv)
    except LeaderboardError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "count": count,
        "message": f"Ground truth set ({count} rows). Previous submissions cleared."
    }


@router.post("/submissions")
async def upload_submissions(
    payload: BatchUpload,
    leaderboard: Leaderboard = Depends(get_leaderboard)
):
    """
    Admin: Upload several team files at once

    Request:
        {"files": [{"filename": "TeamA.csv", "csv": "..."}, ...]}

    Files are processed in order; a rejected file does not affect the others.
    """
    results = leaderboard.submit_batch(payload.files)
    accepted = sum(1 for r in results if r.success)
    logger.info(f"📦 Batch upload: {accepted}/{len(results)} files accepted")

    return {
        "success": accepted == len(results),
        "accepted": accepted,
        "rejected": len(results) - accepted,
        "results": [r.model_dump() for r in results]
    }
