"""
Leaderboard screen for Family Hub.

Points standings with rank tiers. A member's tier is the highest one whose
threshold their points reach.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base_screen import BaseScreen, ScreenResponse
from ..core.errors import ValidationError
from ..core.models import LeaderboardEntry, to_dict
from ..core.resource import LoadState, Resource

PERIODS = ["week", "month", "all"]
PODIUM_SIZE = 3


@dataclass(frozen=True)
class Rank:
    name: str
    min_points: int
    icon: str


RANKS = [
    Rank("Bronze", 0, "🥉"),
    Rank("Silver", 500, "🥈"),
    Rank("Gold", 1500, "🥇"),
    Rank("Platinum", 3000, "💎"),
    Rank("Diamond", 5000, "💠"),
]


def rank_for(points: int) -> Rank:
    """Highest tier reached by ``points``."""
    reached = RANKS[0]
    for rank in RANKS:
        if points >= rank.min_points:
            reached = rank
    return reached


def next_rank(points: int) -> Optional[Rank]:
    """The tier after the current one, or None at the top."""
    for rank in RANKS:
        if rank.min_points > points:
            return rank
    return None


def points_to_next_rank(points: int) -> int:
    upcoming = next_rank(points)
    return upcoming.min_points - points if upcoming else 0


def standings(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Entries ordered by points, highest first (stable for ties)."""
    return sorted(entries, key=lambda e: e.points, reverse=True)


class LeaderboardScreen(BaseScreen):
    """
    Handles intents:
    - standings: ranked entries, podium and tiers (period: week|month|all)
    - progress: points to the next tier for one member (user_id)
    """

    def __init__(self, client, config):
        super().__init__(client, config, "leaderboard")
        self.period = self.get_config_value("leaderboard_period", default="week")
        self.entries: Resource[List[LeaderboardEntry]] = Resource(
            self._fetch, name="leaderboard", initial=[]
        )

    def get_handlers(self):
        return {
            "standings": self._handle_standings,
            "progress": self._handle_progress,
        }

    def _fetch(self) -> List[LeaderboardEntry]:
        rows = self.client.dashboard.get_leaderboard(period=self.period)
        return standings([LeaderboardEntry.from_dict(row) for row in rows])

    def _entry_view(self, position: int, entry: LeaderboardEntry) -> Dict[str, Any]:
        rank = rank_for(entry.points)
        view = to_dict(entry)
        view.update({
            "position": position,
            "rank": rank.name,
            "rank_icon": rank.icon,
            "points_to_next_rank": points_to_next_rank(entry.points),
        })
        return view

    def _handle_standings(self, context: Dict[str, Any]) -> ScreenResponse:
        period = context.get("period") or self.period
        if period not in PERIODS:
            raise ValidationError(
                f"Invalid period '{period}'. Choose from: {', '.join(PERIODS)}", field="period"
            )
        self.period = period

        self.entries.load()
        if self.entries.state is LoadState.ERROR:
            return ScreenResponse.error(f"Failed to load leaderboard: {self.entries.error}")

        ranked = [self._entry_view(i, e) for i, e in enumerate(self.entries.data or [], start=1)]
        return ScreenResponse.ok(
            message=f"{len(ranked)} member(s) this {period}" if period != "all" else f"{len(ranked)} member(s)",
            data={
                "period": period,
                "entries": ranked,
                "podium": ranked[:PODIUM_SIZE],
                "total_points": sum(e.points for e in self.entries.data or []),
            },
        )

    def _handle_progress(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["user_id"])
        if self.entries.state is not LoadState.READY:
            self.entries.load()

        for entry in self.entries.data or []:
            if str(entry.user_id) == str(context["user_id"]):
                upcoming = next_rank(entry.points)
                if upcoming is None:
                    return ScreenResponse.ok(
                        message=f"{entry.name} has reached {RANKS[-1].name}",
                        data={"rank": RANKS[-1].name, "next_rank": None, "points_to_next_rank": 0},
                    )
                remaining = upcoming.min_points - entry.points
                return ScreenResponse.ok(
                    message=f"{upcoming.name} rank - {remaining} points away!",
                    data={
                        "rank": rank_for(entry.points).name,
                        "next_rank": upcoming.name,
                        "points": entry.points,
                        "points_to_next_rank": remaining,
                    },
                )
        return ScreenResponse.error(f"No leaderboard entry for user {context['user_id']}")
