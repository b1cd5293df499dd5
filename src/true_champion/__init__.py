"""
True Champion

All-play "true record" analytics for fantasy football leagues. Each week
every team is compared against every other team's score, so a season's
record reflects how well a team scored rather than who it happened to play.

Key Features:
- Sort-based weekly comparator and season aggregator
- Rankings, consistency, luck and head-to-head statistics
- ESPN fantasy API handler with pydantic-validated payloads
- Redis (or in-memory) cache for weekly scores and true records
- FastAPI service and argparse CLI

Usage:
    from true_champion import aggregate_season, rank_teams, WeekScores

    weeks = [WeekScores(week=1, scores={"1": 120.5, "2": 98.2, "3": 110.0})]
    records = aggregate_season(weeks)
    standings = rank_teams(records)
"""

from .core import (
    ActualStanding,
    Settings,
    TeamMetadata,
    TrueRecord,
    WeeklyRecord,
    WeekScores,
    get_settings,
)
from .records import (
    DuplicateWeekError,
    aggregate_season,
    compare_week,
    rank_teams,
    season_statistics,
)

__version__ = "1.0.0"

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Models
    "ActualStanding",
    "TeamMetadata",
    "TrueRecord",
    "WeeklyRecord",
    "WeekScores",
    # Engine
    "DuplicateWeekError",
    "aggregate_season",
    "compare_week",
    "rank_teams",
    "season_statistics",
]
