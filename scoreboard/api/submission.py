"""
Submission endpoint for team prediction files
"""
from fastapi import APIRouter, Depends, HTTPException

from scoreboard.api.deps import get_leaderboard
from scoreboard.errors import LeaderboardError
from scoreboard.models import CsvUpload
from scoreboard.services.leaderboard import Leaderboard


router = APIRouter(tags=["submission"])


@router.post("/submit")
async def submit_predictions(
    payload: CsvUpload,
    leaderboard: Leaderboard = Depends(get_leaderboard)
):
    """
    Submit a team's prediction file

    The team name is the filename up to the first '.'; a new upload for the
    same team replaces its previous entry.

    Request:
        {"filename": "TeamA.csv", "csv": "id,value\\n0,1.02\\n1,1.97"}

    Response:
        {
            "success": true,
            "submission": {"rank": 1, "team_name": "TeamA", "score": 0.025, ...},
            "total_teams": 4
        }
    """
    try:
        stored = leaderboard.submit(payload.csv, payload.filename)
    except LeaderboardError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "submission": leaderboard.describe(stored),
        "total_teams": len(leaderboard.get_ranked())
    }
