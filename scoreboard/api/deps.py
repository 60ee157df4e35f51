"""Shared router dependencies"""
from fastapi import Request

from scoreboard.services.leaderboard import Leaderboard


def get_leaderboard(request: Request) -> Leaderboard:
    """The process-wide Leaderboard built at startup"""
    return request.app.state.leaderboard
