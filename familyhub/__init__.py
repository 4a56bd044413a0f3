"""
Family Hub: household dashboard client.

Talks to the household REST API and shapes what it returns into screens:
calendar, tasks, homework, meals, classes, family, leaderboard, team kanban
and the TV dashboard.
"""

__version__ = "1.0.0"
