"""API routers for league views, week data and refresh operations."""

from . import dashboard, refresh, standings, teams, weeks

__all__ = ["dashboard", "refresh", "standings", "teams", "weeks"]
