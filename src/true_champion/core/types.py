"""
Core types and constants for True Champion.

This module provides:
- Type aliases shared by the record engine and the data handlers
- Season layout constants
- The cache key layout used by LeagueRepository

All keys are colon-delimited so a whole season can be scanned by prefix.
"""

from typing import Mapping, Optional

# team_id -> points for a single week. None marks a team with no score.
WeeklyScoreMap = Mapping[str, Optional[float]]

MIN_WEEK = 1
MAX_WEEK = 18  # NFL regular season plus fantasy playoffs


# =============================================================================
# CACHE KEY LAYOUT
# =============================================================================

WEEKLY_SCORES_PREFIX = "weekly_scores"
TRUE_RECORDS_PREFIX = "true_records"
ACTUAL_STANDINGS_PREFIX = "actual_standings"
TEAM_METADATA_PREFIX = "teams"
LAST_UPDATE_PREFIX = "last_update"


def weekly_scores_key(season: int | str, week: int) -> str:
    return f"{WEEKLY_SCORES_PREFIX}:{season}:{week}"


def true_record_key(season: int | str, team_id: str) -> str:
    return f"{TRUE_RECORDS_PREFIX}:{season}:{team_id}"


def actual_standings_key(season: int | str) -> str:
    return f"{ACTUAL_STANDINGS_PREFIX}:{season}"


def team_metadata_key(league_id: str) -> str:
    return f"{TEAM_METADATA_PREFIX}:{league_id}"


def last_update_key(league_id: str) -> str:
    return f"{LAST_UPDATE_PREFIX}:{league_id}"


def season_patterns(season: int | str) -> list[str]:
    """Glob patterns covering every key written for a season."""
    return [
        f"{WEEKLY_SCORES_PREFIX}:{season}:*",
        f"{TRUE_RECORDS_PREFIX}:{season}:*",
        actual_standings_key(season),
    ]
