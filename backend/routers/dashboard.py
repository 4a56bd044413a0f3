"""
TV dashboard endpoints.

Read-only apart from task completion. The snapshot is whatever the last
refresh fetched; the server's refresh loop (or POST /dashboard/tv/refresh)
keeps it current.
"""

from fastapi import APIRouter, Depends, HTTPException

from backend.dependencies import get_tv_dashboard
from backend.schemas import MemberSelection
from familyhub.dashboard import TVDashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/tv")
def get_tv(tv: TVDashboard = Depends(get_tv_dashboard)):
    """
    The kiosk view: pending tasks, today's events and meals, leaderboard,
    stats, badges, weather and news.
    """
    if tv.data.generated_at is None:
        tv.refresh()
    return tv.view()


@router.post("/tv/refresh")
def refresh_tv(tv: TVDashboard = Depends(get_tv_dashboard)):
    tv.refresh()
    return tv.view()


@router.post("/tv/select")
def select_member(body: MemberSelection, tv: TVDashboard = Depends(get_tv_dashboard)):
    """Filter tasks by member (null for everyone) and load their stats."""
    tv.select_member(body.member_id)
    return tv.view()


@router.post("/tv/tasks/{task_id}/complete")
def complete_task(task_id: str, tv: TVDashboard = Depends(get_tv_dashboard)):
    if not tv.complete_task(task_id):
        raise HTTPException(status_code=400, detail=f"Could not complete task {task_id}")
    return tv.view()
