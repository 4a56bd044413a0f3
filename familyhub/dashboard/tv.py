"""
TV dashboard aggregation for Family Hub.

Collects everything the kitchen-screen view shows (pending tasks, today's
events and meals, the leaderboard, weather and news) into one TVData
snapshot, and keeps it fresh on a timer.

The TV view does its own per-type filtering rather than going through the
calendar view model: it only ever looks at today.
"""

import logging
import threading
import time as time_module
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..core.config import Config
from ..core.errors import ApiError
from ..core.models import (
    Event,
    FamilyMember,
    LeaderboardEntry,
    Meal,
    NewsItem,
    Task,
    UserStats,
    Weather,
    to_dict,
)
from ..core.resource import fetch_all

logger = logging.getLogger("familyhub.tv")

CELEBRATION_SECONDS = 2.0
STREAK_BADGE_DAYS = 7
UNKNOWN_MEMBER = FamilyMember(id=None, name="Unknown", color="#666666")
TV_MEAL_TYPES = ["breakfast", "lunch", "dinner"]


@dataclass
class Badge:
    """Achievement shown in the gamification panel."""
    key: str
    icon: str
    name: str
    earned: bool


@dataclass
class TVData:
    """Complete TV dashboard snapshot."""
    generated_at: Optional[datetime] = None
    today: Optional[str] = None
    members: List[FamilyMember] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    meals: List[Meal] = field(default_factory=list)
    leaderboard: List[LeaderboardEntry] = field(default_factory=list)
    weather: Optional[Weather] = None
    news: List[NewsItem] = field(default_factory=list)
    stats: Optional[UserStats] = None


def greeting_for(now: datetime) -> str:
    """Greeting based on time of day."""
    if now.hour < 12:
        return "Good Morning"
    elif now.hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def build_badges(stats: Optional[UserStats]) -> List[Badge]:
    """
    Achievements for the gamification panel.

    Only the streak badge is derived from stats; the others are fixed until
    the API reports them.
    """
    streak = stats.current_streak if stats else 0
    return [
        Badge("early_bird", "🌅", "Early Bird", True),
        Badge("task_master", "🏆", "Task Master", True),
        Badge("streak_7", "🔥", "7-Day Streak", streak >= STREAK_BADGE_DAYS),
        Badge("homework_hero", "📚", "Homework Hero", False),
        Badge("meal_planner", "🍳", "Meal Planner", False),
    ]


class TVDashboard:
    """
    Aggregator and refresh loop for the TV dashboard.

    Usage:
        tv = TVDashboard(client, config)
        tv.refresh()
        tv.select_member(2)
        tv.complete_task(17)
        tv.start_auto_refresh()
    """

    def __init__(self, client, config: Optional[Config] = None):
        """
        Args:
            client: ApiClient (the TV endpoints need no token)
            config: Configuration (creates default if not provided)
        """
        self.client = client
        self.config = config if config else Config()
        self.data = TVData()
        self.loading = True
        self.error: Optional[str] = None
        self.selected_member: Optional[Any] = None
        self.celebrations: List[float] = []

        self._selection_generation = 0
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # =========================================================================
    # Fetching
    # =========================================================================

    def refresh(self, today: Optional[date] = None) -> TVData:
        """
        Fetch the whole dashboard in one batch.

        A failure anywhere in the batch is logged and the previous snapshot is
        kept; there is no retry until the next refresh.
        """
        day = (today or date.today()).isoformat()
        try:
            members, tasks, events, meals, leaderboard, weather, news = fetch_all([
                lambda: self.client.family_members.get_all(),
                lambda: self.client.tasks.get_all(completed=False),
                lambda: self.client.events.get_all(start=day, end=day),
                lambda: self.client.meals.get_by_date(day),
                lambda: self.client.dashboard.get_leaderboard(),
                lambda: self.client.dashboard.get_weather(),
                lambda: self.client.dashboard.get_news(),
            ])
        except ApiError as e:
            logger.error(f"Error fetching dashboard data: {e}")
            with self._lock:
                self.error = str(e)
                self.loading = False
            return self.data

        snapshot = TVData(
            generated_at=datetime.now(),
            today=day,
            members=[FamilyMember.from_dict(m) for m in members],
            tasks=[Task.from_dict(t) for t in tasks],
            events=[Event.from_dict(e) for e in events],
            meals=[Meal.from_dict(m) for m in meals],
            leaderboard=[LeaderboardEntry.from_dict(e) for e in leaderboard],
            weather=Weather.from_dict(weather) if weather else None,
            news=[NewsItem.from_dict(n) for n in news],
            stats=self.data.stats,
        )
        with self._lock:
            self.data = snapshot
            self.error = None
            self.loading = False

        self.load_stats()
        return self.data

    def stats_user_id(self) -> Optional[Any]:
        """Selected member, else the leaderboard leader."""
        if self.selected_member is not None:
            return self.selected_member
        if self.data.leaderboard:
            return self.data.leaderboard[0].user_id
        return None

    def load_stats(self) -> Optional[UserStats]:
        """
        Fetch stats for the current selection.

        The result is applied only if the selection has not changed while the
        request was in flight.
        """
        with self._lock:
            generation = self._selection_generation
            user_id = self.stats_user_id()
        if user_id is None:
            return None

        try:
            stats = UserStats.from_dict(self.client.dashboard.get_user_stats(user_id))
        except ApiError as e:
            logger.info(f"Could not fetch user stats: {e}")
            return None

        with self._lock:
            if generation != self._selection_generation:
                logger.debug(f"Discarding stats for {user_id}; selection changed")
                return None
            self.data.stats = stats
        return stats

    def select_member(self, member_id: Optional[Any]) -> Optional[UserStats]:
        """Filter the task panel by member (None for everyone) and reload stats."""
        with self._lock:
            self.selected_member = member_id
            self._selection_generation += 1
        return self.load_stats()

    # =========================================================================
    # Filtering
    # =========================================================================

    def pending_tasks(self) -> List[Task]:
        """Incomplete tasks, limited to the selected member when one is chosen."""
        tasks = [t for t in self.data.tasks if not t.completed]
        if self.selected_member is not None:
            tasks = [t for t in tasks if str(t.family_member_id) == str(self.selected_member)]
        return tasks

    def members_with_tasks(self) -> List[FamilyMember]:
        """Members owning at least one incomplete task."""
        owners = {str(t.family_member_id) for t in self.data.tasks if not t.completed}
        return [m for m in self.data.members if str(m.id) in owners]

    def todays_events(self) -> List[Event]:
        day = self.data.today
        return [e for e in self.data.events if e.start_time and str(e.start_time)[:10] == day]

    def todays_meals(self) -> Dict[str, Optional[Meal]]:
        """One slot per TV meal type."""
        slots: Dict[str, Optional[Meal]] = {}
        for meal_type in TV_MEAL_TYPES:
            slots[meal_type] = next((m for m in self.data.meals if m.meal_type == meal_type), None)
        return slots

    def member(self, member_id: Any) -> FamilyMember:
        for member in self.data.members:
            if str(member.id) == str(member_id):
                return member
        return UNKNOWN_MEMBER

    def total_points(self) -> int:
        return sum(entry.points for entry in self.data.leaderboard)

    def badges(self) -> List[Badge]:
        return build_badges(self.data.stats)

    # =========================================================================
    # Task completion
    # =========================================================================

    def complete_task(self, task_id: Any) -> bool:
        """
        Mark a task done on screen immediately, then tell the server.

        The local patch is undone if the toggle fails. A task already done
        is left alone, since the server toggle would reopen it. Returns True
        on success.
        """
        with self._lock:
            task = next((t for t in self.data.tasks if str(t.id) == str(task_id)), None)
            if task is None:
                return False
            if task.completed:
                return True
            task.completed = True
            self.celebrations.append(time_module.monotonic())

        try:
            self.client.tasks.toggle(task_id)
        except ApiError as e:
            logger.error(f"Error completing task: {e}")
            with self._lock:
                task.completed = False
            return False
        return True

    def active_celebrations(self, now: Optional[float] = None) -> int:
        """Number of celebrations still playing; expired ones are dropped."""
        now = time_module.monotonic() if now is None else now
        with self._lock:
            self.celebrations = [t for t in self.celebrations if now - t < CELEBRATION_SECONDS]
            return len(self.celebrations)

    # =========================================================================
    # Refresh loop
    # =========================================================================

    @property
    def refresh_seconds(self) -> float:
        return float(self.config.get("tv_refresh_seconds", default=300) or 300)

    def start_auto_refresh(self) -> None:
        """Refresh now and then every ``tv_refresh_seconds`` on a daemon thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="tv-refresh", daemon=True)
        self._thread.start()

    def stop_auto_refresh(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh()
            except Exception as e:
                # AuthenticationError included: keep the kiosk alive
                logger.error(f"TV refresh failed: {e}", exc_info=True)
            self._stop.wait(self.refresh_seconds)

    # =========================================================================
    # Serialization
    # =========================================================================

    def view(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """The dashboard as a JSON-ready dict."""
        now = now or datetime.now()
        data = self.data
        meals = self.todays_meals()
        return {
            "greeting": greeting_for(now),
            "date": now.strftime("%A, %B %d, %Y"),
            "loading": self.loading,
            "error": self.error,
            "selected_member": self.selected_member,
            "weather": to_dict(data.weather) if data.weather else None,
            "tasks": [to_dict(t) for t in self.pending_tasks()],
            "members_with_tasks": [to_dict(m) for m in self.members_with_tasks()],
            "events": [to_dict(e) for e in self.todays_events()],
            "meals": {k: (to_dict(m) if m else None) for k, m in meals.items()},
            "leaderboard": [to_dict(e) for e in data.leaderboard],
            "total_points": self.total_points(),
            "stats": to_dict(data.stats) if data.stats else None,
            "badges": [to_dict(b) for b in self.badges()],
            "news": [to_dict(n) for n in data.news],
            "members": [to_dict(m) for m in data.members],
            "celebrations": self.active_celebrations(),
        }
