"""
Season aggregation of weekly all-play records.

The aggregate is always rebuilt from every available week; callers never
patch a stored aggregate, so totals cannot drift from the weekly breakdown
after retried or out-of-order fetches.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.models import TrueRecord, WeekScores
from .comparator import compare_week

logger = logging.getLogger(__name__)


class DuplicateWeekError(ValueError):
    """The same week number was supplied more than once."""

    def __init__(self, week: int):
        super().__init__(f"Week {week} supplied more than once; deduplicate before aggregating")
        self.week = week


def aggregate_season(weeks: Iterable[WeekScores]) -> dict[str, TrueRecord]:
    """
    Fold per-week all-play tallies into season TrueRecords.

    Args:
        weeks: WeekScores in any order, each week number at most once

    Returns:
        team_id -> TrueRecord. Teams absent from every week are not present,
        and weeks a team missed are absent from its weekly_records.

    Raises:
        DuplicateWeekError: If a week number repeats
    """
    season: dict[str, TrueRecord] = {}
    seen: set[int] = set()

    for entry in weeks:
        if entry.week in seen:
            raise DuplicateWeekError(entry.week)
        seen.add(entry.week)

        for team_id, record in compare_week(entry.scores).items():
            if team_id not in season:
                season[team_id] = TrueRecord(team_id=team_id)
            season[team_id].add_week(entry.week, record)

    logger.debug("Aggregated %d weeks for %d teams", len(seen), len(season))
    return season
