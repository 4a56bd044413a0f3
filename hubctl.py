#!/usr/bin/env python3
"""
Family Hub - Command Line Interface
Terminal front end for the household dashboard: calendar, tasks, homework,
meals, leaderboard, team kanban and the TV kiosk view.
"""

import sys
import time
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table
from typing import Any, Dict, Optional

from familyhub.core import ApiClient, AuthenticationError, Config, Session
from familyhub.core.session import LOGIN_PATH
from familyhub.calendar import build_month_grid
from familyhub.dashboard import CalendarFormatter, TVDashboard, TVFormatter
from familyhub.screens import (
    AuthScreen,
    BaseScreen,
    CalendarScreen,
    HomeworkScreen,
    KanbanScreen,
    LeaderboardScreen,
    MealsScreen,
    ScreenResponse,
    TasksScreen,
)

# Initialize CLI app and console
app = typer.Typer(help="Family Hub - household calendar, chores and meals")
tasks_app = typer.Typer(help="Household tasks")
homework_app = typer.Typer(help="Homework tracker")
app.add_typer(tasks_app, name="tasks")
app.add_typer(homework_app, name="homework")

console = Console()
config = Config()

# Lazy-loaded session and client (initialized on first use)
_session: Optional[Session] = None
_client: Optional[ApiClient] = None


def get_client() -> ApiClient:
    """
    Get or initialize the ApiClient, restoring any saved session token.

    Deferred so that `--help` works without touching the token file.
    """
    global _session, _client
    if _client is None:
        _session = Session(config.get_token_path()).load()
        _client = ApiClient(config, _session)
    return _client


def run_intent(screen: BaseScreen, intent: str, context: Optional[Dict[str, Any]] = None) -> ScreenResponse:
    """
    Run a screen intent, leaving the CLI on auth failure or an unsuccessful response.
    """
    try:
        response = screen.process(intent, context)
    except AuthenticationError:
        console.print("[red]Session expired.[/red] Run [bold]hubctl login[/bold] first.")
        raise typer.Exit(1)

    if response.confirmation_required:
        if not typer.confirm(response.message):
            console.print("[dim]Cancelled[/dim]")
            raise typer.Exit(0)
        return run_intent(screen, intent, {**(context or {}), "confirmed": True})

    if not response.success:
        console.print(f"[red]✗[/red] {response.message}")
        raise typer.Exit(1)
    return response


def _completion_icon(item: Dict[str, Any]) -> str:
    return "[green]✓[/green]" if item.get("completed") else "[dim]○[/dim]"


# =============================================================================
# Session
# =============================================================================

@app.command()
def login(
    username: str = typer.Argument(..., help="Account name"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Log in and save the session token."""
    client = get_client()
    response = run_intent(AuthScreen(client, config, client.session), "login",
                          {"username": username, "password": password})
    console.print(f"[green]✓[/green] {response.message}")


@app.command()
def logout():
    """Forget the saved session token."""
    client = get_client()
    run_intent(AuthScreen(client, config, client.session), "logout")
    console.print("[green]✓[/green] Logged out")


@app.command()
def whoami():
    """Show the logged-in user."""
    client = get_client()
    screen = AuthScreen(client, config, client.session)
    if screen.landing_path() == LOGIN_PATH:
        console.print("[yellow]Not logged in.[/yellow] Run: hubctl login")
        raise typer.Exit(1)
    response = run_intent(screen, "me")
    user = response.data["user"] or {}
    console.print(f"{user.get('username')} [dim]({user.get('role')})[/dim]")


# =============================================================================
# Calendar
# =============================================================================

@app.command()
def calendar(
    year: Optional[int] = typer.Option(None, "--year", "-y"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12),
):
    """
    Show a month with a dot per item (up to three per day).

    Example:
      hubctl calendar --month 6 --year 2025
    """
    screen = CalendarScreen(get_client(), config)
    context = {k: v for k, v in {"year": year, "month": month}.items() if v}
    run_intent(screen, "month", context)

    grid = build_month_grid(
        screen.year,
        screen.month,
        screen.unified_items(),
        screen.members,
        week_start=config.get("week_start", "preferences", "sunday"),
        default_member_color=config.get("default_member_color", "preferences", "#6366f1"),
    )
    CalendarFormatter(console).render_month(grid)


@app.command()
def day(date: str = typer.Argument(..., help="Day as yyyy-mm-dd")):
    """List everything on one day."""
    response = run_intent(CalendarScreen(get_client(), config), "day", {"day": date})
    console.print(f"[bold]{response.message}[/bold]")
    for item in response.data["items"]:
        when = ""
        if item["type"] == "event" and not item.get("all_day") and item.get("start_time"):
            when = f"[dim]{str(item['start_time'])[11:16]}[/dim] "
        console.print(f"  [{item['color']}]●[/] {when}{item['title']} [dim]({item['type']})[/dim]")


# =============================================================================
# Tasks
# =============================================================================

@tasks_app.command("list")
def tasks_list(
    filter: str = typer.Option("pending", "--filter", "-f", help="all, pending or completed"),
    member: Optional[str] = typer.Option(None, "--member", help="Family member id"),
):
    """List household tasks."""
    context = {"filter": filter}
    if member:
        context["family_member_id"] = member
    response = run_intent(TasksScreen(get_client(), config), "list", context)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("#", style="dim", width=4)
    table.add_column("Task", min_width=30)
    table.add_column("Priority", width=8)
    table.add_column("Due", width=12)
    for task in response.data["tasks"]:
        table.add_row(
            _completion_icon(task),
            str(task["id"]),
            task["title"],
            task["priority"],
            task.get("due_date") or "-",
        )
    console.print(table)
    console.print(f"[dim]{response.message}[/dim]")


@tasks_app.command("add")
def tasks_add(
    title: str = typer.Argument(..., help="Task title"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (defaults to today)"),
    priority: str = typer.Option("medium", "--priority", "-p", help="low, medium or high"),
    member: Optional[str] = typer.Option(None, "--member", help="Family member id"),
):
    """Add a household task."""
    context = {"title": title, "priority": priority}
    if due:
        context["due_date"] = due
    if member:
        context["family_member_id"] = member
    response = run_intent(TasksScreen(get_client(), config), "create", context)
    console.print(f"[green]✓[/green] {response.message}: {title}")


@tasks_app.command("toggle")
def tasks_toggle(task_id: str = typer.Argument(..., help="Task id")):
    """Mark a task done (or pending again)."""
    response = run_intent(TasksScreen(get_client(), config), "toggle", {"id": task_id})
    console.print(f"[green]✓[/green] {response.message}")


@tasks_app.command("delete")
def tasks_delete(
    task_id: str = typer.Argument(..., help="Task id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a task."""
    response = run_intent(TasksScreen(get_client(), config), "delete", {"id": task_id, "confirmed": yes})
    console.print(f"[green]✓[/green] {response.message}")


# =============================================================================
# Homework
# =============================================================================

@homework_app.command("list")
def homework_list(
    filter: str = typer.Option("pending", "--filter", "-f", help="all, pending or completed"),
):
    """List homework."""
    response = run_intent(HomeworkScreen(get_client(), config), "list", {"filter": filter})
    for item in response.data["homework_items"]:
        console.print(
            f"{_completion_icon(item)} [dim]#{item['id']}[/dim] "
            f"[bold]{item['subject']}[/bold] {item.get('description') or ''} "
            f"[dim]due {item.get('due_date') or '-'}[/dim]"
        )
    console.print(f"[dim]{response.message}[/dim]")


@homework_app.command("add")
def homework_add(
    subject: str = typer.Argument(..., help="Subject"),
    due: str = typer.Option(..., "--due", "-d", help="Due date"),
    description: Optional[str] = typer.Option(None, "--desc", help="What to do"),
    member: Optional[str] = typer.Option(None, "--member", help="Family member id"),
):
    """Add a homework assignment."""
    context = {"subject": subject, "due_date": due}
    if description:
        context["description"] = description
    if member:
        context["family_member_id"] = member
    response = run_intent(HomeworkScreen(get_client(), config), "create", context)
    console.print(f"[green]✓[/green] {response.message}")


@homework_app.command("toggle")
def homework_toggle(homework_id: str = typer.Argument(..., help="Homework id")):
    """Mark homework done (or pending again)."""
    response = run_intent(HomeworkScreen(get_client(), config), "toggle", {"id": homework_id})
    console.print(f"[green]✓[/green] {response.message}")


# =============================================================================
# Meals, leaderboard, kanban
# =============================================================================

@app.command()
def meals(date: Optional[str] = typer.Option(None, "--date", help="Centre of the week (yyyy-mm-dd)")):
    """Show the meal plan for the week around a day."""
    response = run_intent(MealsScreen(get_client(), config), "list", {"date": date} if date else {})

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Day", width=12)
    for meal_type in ("breakfast", "lunch", "dinner", "snack"):
        table.add_column(meal_type.capitalize())
    for day_view in response.data["days"]:
        label = day_view["date"]
        if label == response.data["selected_date"]:
            label = f"[bold]{label}[/bold]"
        table.add_row(label, *[
            (slot["name"] if slot else "[dim]-[/dim]") for slot in day_view["slots"].values()
        ])
    console.print(table)


@app.command()
def leaderboard(period: Optional[str] = typer.Option(None, "--period", "-p", help="week, month or all")):
    """Show the family points ranking."""
    response = run_intent(LeaderboardScreen(get_client(), config), "standings",
                          {"period": period} if period else {})

    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("#", width=3)
    table.add_column("Name", min_width=12)
    table.add_column("Points", justify="right")
    table.add_column("Streak", justify="right")
    table.add_column("Rank")
    for entry in response.data["entries"]:
        table.add_row(
            str(entry["position"]),
            entry["name"],
            str(entry["points"]),
            f"🔥 {entry['streak']}",
            f"{entry['rank_icon']} {entry['rank']}",
        )
    console.print(table)
    console.print(f"[dim]Family total: {response.data['total_points']} points[/dim]")


@app.command()
def kanban(
    view: str = typer.Option("team", "--view", help="team or mine"),
    assignee: Optional[str] = typer.Option(None, "--assignee"),
    project: Optional[str] = typer.Option(None, "--project"),
):
    """Show the team kanban board."""
    context = {"view": view}
    if assignee:
        context["assignee"] = assignee
    if project:
        context["project"] = project
    response = run_intent(KanbanScreen(get_client(), config), "board", context)

    table = Table(show_header=True, header_style="bold")
    columns = response.data["columns"]
    for column in columns:
        table.add_column(f"{column['label']} ({column['count']})")
    depth = max((column["count"] for column in columns), default=0)
    for row in range(depth):
        table.add_row(*[
            (f"{c['tasks'][row]['title']}\n[dim]{c['tasks'][row]['assignee']}[/dim]"
             if row < c["count"] else "")
            for c in columns
        ])
    console.print(table)


# =============================================================================
# TV kiosk
# =============================================================================

@app.command()
def tv(
    member: Optional[str] = typer.Option(None, "--member", help="Show one member's tasks and stats"),
    watch: bool = typer.Option(False, "--watch", "-w", help="Keep refreshing until Ctrl-C"),
):
    """
    Show the TV dashboard

    Displays the household at a glance:
    - Pending tasks per member
    - Today's events and meals
    - Leaderboard, badges and weather
    """
    # Public endpoints: the kiosk never needs a token
    dashboard = TVDashboard(ApiClient(config, Session()), config)
    formatter = TVFormatter(console)

    dashboard.refresh()
    if member:
        dashboard.select_member(member)
    formatter.render_dashboard(dashboard)

    if not watch:
        return

    dashboard.start_auto_refresh()
    try:
        while True:
            time.sleep(dashboard.refresh_seconds)
            console.clear()
            formatter.render_dashboard(dashboard)
    except KeyboardInterrupt:
        console.print("[dim]Stopped[/dim]")
    finally:
        dashboard.stop_auto_refresh(timeout=5)


if __name__ == "__main__":
    app()
