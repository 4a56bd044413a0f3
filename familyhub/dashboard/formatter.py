"""
Rich formatter for the Family Hub TV dashboard and calendar.

Renders the kiosk view as a three-column layout (tasks | today | ranking)
and the calendar month grid as a table of day cells with colored dots.
"""

from datetime import datetime
from typing import List, Optional

from rich import box
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..calendar.grid import MonthGrid
from ..core.models import Event
from .tv import TVDashboard, greeting_for

MEAL_ICONS = {
    "breakfast": "🥞",
    "lunch": "🍕",
    "dinner": "🍝",
    "snack": "🍎",
}

PODIUM_MEDALS = ["🥇", "🥈", "🥉"]

DOT = "●"


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


class TVFormatter:
    """
    Rich-based formatter for the TV dashboard.

    Each format_* method returns a renderable; render_dashboard prints the
    whole screen.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
        """
        self.console = console or Console()

    def _format_event_time(self, event: Event) -> str:
        if event.all_day:
            return "[cyan]All day[/cyan]"
        if not event.start_time:
            return "[dim]---[/dim]"
        try:
            start = datetime.fromisoformat(str(event.start_time).replace("Z", "+00:00"))
        except ValueError:
            return f"[cyan]{event.start_time}[/cyan]"
        return f"[cyan]{start.strftime('%I:%M%p').lstrip('0').lower()}[/cyan]"

    def format_header(self, tv: TVDashboard, now: Optional[datetime] = None) -> Panel:
        now = now or datetime.now()
        content = Text()
        content.append(f"{greeting_for(now)} 👋\n", style="bold")
        content.append(now.strftime("%A, %B %d, %Y"), style="dim")

        weather = tv.data.weather
        if weather:
            content.append(
                f"\n{weather.icon} {round(weather.temp)}° {weather.condition} "
                f"(feels {round(weather.feels_like)}°, {weather.humidity}% humidity)"
            )

        return Panel(
            content,
            title="[bold]🏠 Family Hub[/bold]",
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_tasks(self, tv: TVDashboard, max_items: int = 10) -> Panel:
        tasks = tv.pending_tasks()
        if not tasks:
            body = Text("All done! 🎉", justify="center", style="green")
        else:
            table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
            table.add_column("Dot", width=2)
            table.add_column("ID", width=4)
            table.add_column("Title", ratio=1)
            table.add_column("Who", width=10, justify="right")
            for task in tasks[:max_items]:
                member = tv.member(task.family_member_id)
                table.add_row(
                    f"[{member.color}]{DOT}[/]",
                    f"[dim]#{task.id}[/dim]",
                    _truncate(task.title, 30),
                    f"[dim]{member.name}[/dim]",
                )
            if len(tasks) > max_items:
                table.add_row("", "", f"[dim]+ {len(tasks) - max_items} more...[/dim]", "")
            body = table

        return Panel(body, title=f"[bold]Tasks ({len(tasks)})[/bold]", border_style="green", padding=(0, 1))

    def format_events(self, tv: TVDashboard) -> Panel:
        events = tv.todays_events()
        if not events:
            body = Text("No events today", justify="center", style="dim")
        else:
            table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
            table.add_column("Time", width=10, no_wrap=True)
            table.add_column("Title", ratio=1)
            table.add_column("Who", width=10, justify="right")
            for event in events:
                member = tv.member(event.family_member_id)
                table.add_row(
                    self._format_event_time(event),
                    _truncate(event.title, 30),
                    f"[{member.color}]{member.name}[/]",
                )
            body = table
        return Panel(body, title="[bold]Today's Events[/bold]", border_style="cyan", padding=(0, 1))

    def format_meals(self, tv: TVDashboard) -> Panel:
        lines = []
        for meal_type, meal in tv.todays_meals().items():
            icon = MEAL_ICONS.get(meal_type, "🍽")
            name = meal.name if meal else "[dim]Not planned[/dim]"
            lines.append(f"{icon} {meal_type.capitalize():<10} {name}")
        return Panel("\n".join(lines), title="[bold]Meals[/bold]", border_style="magenta", padding=(0, 1))

    def format_news(self, tv: TVDashboard, max_items: int = 5) -> Optional[Panel]:
        if not tv.data.news:
            return None
        lines = [
            f"• {_truncate(item.headline, 60)} [dim]({item.source})[/dim]"
            for item in tv.data.news[:max_items]
        ]
        return Panel("\n".join(lines), title="[bold]News[/bold]", border_style="white", padding=(0, 1))

    def format_ranking(self, tv: TVDashboard) -> Panel:
        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("Place", width=3)
        table.add_column("Name", ratio=1)
        table.add_column("Points", width=6, justify="right")
        for position, entry in enumerate(tv.data.leaderboard):
            medal = PODIUM_MEDALS[position] if position < len(PODIUM_MEDALS) else f"{position + 1}."
            table.add_row(medal, entry.name, f"[yellow bold]{entry.points}[/yellow bold]")

        badges = Text()
        for badge in tv.badges():
            style = "bold" if badge.earned else "dim"
            badges.append(f"{badge.icon if badge.earned else '❓'} {badge.name}  ", style=style)

        footer = Text(f"\nFamily total: {tv.total_points()} points", style="bold")
        stats = tv.data.stats
        if stats:
            footer.append(f"\n+{stats.points_this_week} this week", style="green")
            footer.append(f"  🔥 {stats.current_streak} day streak", style="yellow")

        return Panel(
            Group(table, Text(""), badges, footer),
            title="[bold]Family Ranking[/bold]",
            border_style="yellow",
            padding=(0, 1),
        )

    def format_footer(self, tv: TVDashboard) -> str:
        parts = ["[bold]All[/bold]" if tv.selected_member is None else "[dim]All[/dim]"]
        for member in tv.data.members:
            label = f"[{member.color}]{DOT}[/] {member.name}"
            if str(member.id) == str(tv.selected_member):
                label = f"[bold underline]{label}[/bold underline]"
            parts.append(label)
        return " │ ".join(parts)

    def render_dashboard(self, tv: TVDashboard, now: Optional[datetime] = None) -> None:
        """
        Render the complete TV dashboard to console.

        Args:
            tv: Refreshed TVDashboard
            now: Clock used for the greeting (defaults to now)
        """
        if tv.active_celebrations():
            self.console.print("[bold yellow]🎉 ✨ 🎊  Task complete!  🎊 ✨ 🎉[/bold yellow]", justify="center")

        self.console.print(self.format_header(tv, now))

        if tv.loading:
            self.console.print("[dim]Loading...[/dim]", justify="center")
            return
        if tv.error:
            self.console.print(f"[red]⚠ {tv.error}[/red]")

        middle = [self.format_events(tv), self.format_meals(tv)]
        news = self.format_news(tv)
        if news:
            middle.append(news)

        self.console.print(Columns(
            [self.format_tasks(tv), Group(*middle), self.format_ranking(tv)],
            equal=True,
            expand=True,
        ))
        self.console.print("─" * 60)
        self.console.print(self.format_footer(tv), justify="center")
        self.console.print("─" * 60)


class CalendarFormatter:
    """Month grid as a Rich table; each cell shows the day and up to three dots."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def format_month(self, grid: MonthGrid) -> Table:
        table = Table(title=grid.title, box=box.SIMPLE_HEAVY, show_lines=True, expand=True)
        for header in grid.weekday_headers:
            table.add_column(header, justify="center", min_width=6)

        for week in grid.weeks():
            row: List[str] = []
            for cell in week:
                if cell is None:
                    row.append("")
                    continue
                number = f"[reverse]{cell.day.day:>2}[/reverse]" if cell.is_today else f"{cell.day.day:>2}"
                dots = " ".join(f"[{color}]{DOT}[/]" for color in cell.dots)
                row.append(f"{number}\n{dots}" if dots else number)
            table.add_row(*row)
        return table

    def render_month(self, grid: MonthGrid) -> None:
        self.console.print(self.format_month(grid))
