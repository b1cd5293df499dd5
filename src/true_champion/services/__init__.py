"""
Services: orchestration and response building on top of the repository.

- updater.py: pull a season (or one week) from the provider into the cache
- league.py: standings, dashboard, team and week payloads from cached data
"""

from .league import (
    analyze_week,
    build_dashboard,
    build_standings,
    build_status,
    build_team_detail,
    build_weekly_analysis,
)
from .updater import (
    RefreshResult,
    UpdateOptions,
    UpdateResult,
    rebuild_true_records,
    refresh_week,
    resolve_max_week,
    update_all_data,
)

__all__ = [
    "analyze_week",
    "build_dashboard",
    "build_standings",
    "build_status",
    "build_team_detail",
    "build_weekly_analysis",
    "RefreshResult",
    "UpdateOptions",
    "UpdateResult",
    "rebuild_true_records",
    "refresh_week",
    "resolve_max_week",
    "update_all_data",
]
