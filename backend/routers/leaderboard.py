"""
Leaderboard endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_leaderboard_screen
from backend.responses import to_schema
from backend.schemas import ScreenResponseSchema
from familyhub.screens import LeaderboardScreen

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/", response_model=ScreenResponseSchema)
def get_standings(
    period: Optional[str] = Query(None, description="week, month or all"),
    screen: LeaderboardScreen = Depends(get_leaderboard_screen),
):
    """Ranked standings with podium, tiers and family total."""
    context = {"period": period} if period else {}
    return to_schema(screen.process("standings", context))


@router.get("/progress/{user_id}", response_model=ScreenResponseSchema)
def get_progress(user_id: str, screen: LeaderboardScreen = Depends(get_leaderboard_screen)):
    """Points remaining until the member's next rank."""
    return to_schema(screen.process("progress", {"user_id": user_id}), failure_status=404)
