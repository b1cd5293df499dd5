"""
True-record engine.

- comparator.py: one week's scores -> all-play WeeklyRecord per team
- aggregator.py: all weeks -> season TrueRecord per team
- statistics.py: rankings, averages, consistency, luck and head-to-head

Everything here is pure and synchronous; fetching and caching live in
handlers/ and repositories/.
"""

from .aggregator import DuplicateWeekError, aggregate_season
from .comparator import compare_week, present_scores, weekly_rank
from .statistics import (
    HeadToHead,
    RankedTeam,
    SeasonStatistics,
    TeamStat,
    average_points,
    consistency,
    find_highest_scoring,
    find_luckiest,
    find_most_consistent,
    find_unluckiest,
    head_to_head,
    index_standings,
    luck_differentials,
    rank_teams,
    season_statistics,
    team_scores,
    total_points,
    win_percentage,
)

__all__ = [
    "DuplicateWeekError",
    "aggregate_season",
    "compare_week",
    "present_scores",
    "weekly_rank",
    "HeadToHead",
    "RankedTeam",
    "SeasonStatistics",
    "TeamStat",
    "average_points",
    "consistency",
    "find_highest_scoring",
    "find_luckiest",
    "find_most_consistent",
    "find_unluckiest",
    "head_to_head",
    "index_standings",
    "luck_differentials",
    "rank_teams",
    "season_statistics",
    "team_scores",
    "total_points",
    "win_percentage",
]
