"""
Data updater: pull a season from the league provider into the cache.

Shared by the cron endpoint, the refresh endpoint and the CLI:

1. Resolve the max week (explicit, else provider current week, else default)
2. Fetch each week's scores sequentially, persisting as it goes
3. Fetch the real league standings
4. Rebuild every true record from the cached weeks
5. Stamp the last update time

A failing week is logged, recorded in the result and skipped. The aggregate
is built from whatever weeks succeeded.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ..core.http import ExternalAPIError
from ..core.models import WeekScores
from ..core.types import MAX_WEEK, MIN_WEEK
from ..handlers.base import LeagueDataProvider
from ..handlers.parsers import (
    parse_actual_standings,
    parse_team_metadata,
    parse_weekly_scores,
)
from ..records import DuplicateWeekError, aggregate_season
from ..repositories.league import LeagueRepository

logger = logging.getLogger(__name__)

# Provider failures that skip a step instead of aborting the run
FETCH_ERRORS = (ExternalAPIError, ValueError)


@dataclass
class UpdateOptions:
    """Knobs for a full season update."""
    max_week: Optional[int] = None
    default_max_week: int = MAX_WEEK
    request_delay: float = 0.5
    on_progress: Optional[Callable[[str], None]] = None


@dataclass
class UpdateResult:
    """Outcome of a full season update."""
    success: bool = True
    weeks_processed: int = 0
    teams_updated: int = 0
    errors: list[str] = field(default_factory=list)
    duration: float = 0.0
    last_update: Optional[str] = None
    fatal: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "weeks_processed": self.weeks_processed,
            "teams_updated": self.teams_updated,
            "errors": self.errors,
            "duration": round(self.duration, 3),
            "last_update": self.last_update,
        }


@dataclass
class RefreshResult:
    """Outcome of a single-week refresh."""
    week: int
    scores: dict[str, Optional[float]]
    refreshed: bool
    teams_updated: int = 0
    timestamp: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": "Data refreshed successfully" if self.refreshed else "Data already up to date",
            "week": self.week,
            "scores": self.scores,
            "refreshed": self.refreshed,
            "teams_updated": self.teams_updated,
            "timestamp": self.timestamp,
        }


async def resolve_max_week(
    handler: LeagueDataProvider,
    default: int = MAX_WEEK,
) -> tuple[int, Optional[str]]:
    """
    Current week from the provider, clamped to the season.

    Returns (week, error). On failure the default is used and the error
    message is returned for the caller to record.
    """
    try:
        week = await handler.get_current_week()
    except FETCH_ERRORS as e:
        message = f"Failed to detect current week: {e}"
        logger.warning("%s; defaulting to week %d", message, default)
        return default, message
    return max(MIN_WEEK, min(week, MAX_WEEK)), None


def rebuild_true_records(repository: LeagueRepository, max_week: int = MAX_WEEK) -> int:
    """Recompute the season aggregate from cached weeks and replace stored records."""
    weeks = repository.get_all_weekly_scores(max_week)
    records = aggregate_season(weeks)
    repository.replace_true_records(records)
    return len(records)


async def update_all_data(
    handler: LeagueDataProvider,
    repository: LeagueRepository,
    options: Optional[UpdateOptions] = None,
) -> UpdateResult:
    """Fetch every week up to the max week and rebuild the season."""
    options = options or UpdateOptions()
    started = time.perf_counter()
    result = UpdateResult()

    def log(message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        if options.on_progress:
            options.on_progress(message)

    def fail(message: str) -> None:
        result.errors.append(message)
        log(message, logging.ERROR)

    try:
        max_week = options.max_week
        if not max_week:
            log("Detecting current week from provider...")
            max_week, error = await resolve_max_week(handler, options.default_max_week)
            if error:
                result.errors.append(error)
            log(f"Fetching weeks 1-{max_week}")

        # Step 1: weekly scores
        weeks: list[WeekScores] = []
        for week in range(MIN_WEEK, max_week + 1):
            try:
                response = await handler.fetch_weekly_data(week)
                scores = parse_weekly_scores(response)
            except FETCH_ERRORS as e:
                fail(f"Error fetching week {week}: {e}")
                continue

            repository.set_weekly_scores(week, scores)
            weeks.append(WeekScores(week=week, scores=scores))
            result.weeks_processed += 1
            log(f"Week {week}: {len(scores)} teams stored")

            if not result.teams_updated and response.teams:
                teams = parse_team_metadata(response)
                repository.set_team_metadata(teams)
                result.teams_updated = len(teams)
                log(f"Team metadata stored for {len(teams)} teams")

            if options.request_delay and week < max_week:
                await asyncio.sleep(options.request_delay)

        # Step 2: real standings (the league view also carries the richest team metadata)
        try:
            league = await handler.fetch_league_data()
            standings = parse_actual_standings(league)
            repository.set_actual_standings(standings)
            if league.teams:
                teams = parse_team_metadata(league)
                repository.set_team_metadata(teams)
                result.teams_updated = len(teams)
            log(f"Stored actual standings for {len(standings)} teams")
        except FETCH_ERRORS as e:
            fail(f"Error fetching actual standings: {e}")

        # Step 3: true records
        if weeks:
            try:
                records = aggregate_season(weeks)
            except DuplicateWeekError as e:
                fail(f"Error calculating true records: {e}")
            else:
                repository.replace_true_records(records)
                log(f"Stored true records for {len(records)} teams")
        else:
            fail("No weekly data available to calculate true records")

        # Step 4: timestamp
        result.last_update = repository.set_last_update()

    except Exception as e:
        logger.exception("Fatal error during update")
        result.errors.append(f"Fatal error during update: {e}")
        result.fatal = True
        result.last_update = datetime.now(tz=timezone.utc).isoformat()

    result.success = not result.errors
    result.duration = time.perf_counter() - started
    log(
        f"Update {'complete' if result.success else 'completed with errors'} "
        f"in {result.duration:.2f}s ({len(result.errors)} error(s))",
        logging.INFO if result.success else logging.WARNING,
    )
    return result


async def refresh_week(
    handler: LeagueDataProvider,
    repository: LeagueRepository,
    week: Optional[int] = None,
    force_refresh: bool = False,
) -> RefreshResult:
    """
    Fetch a single week (current week when not given) unless already cached.

    After storing new scores the season aggregate is rebuilt from every
    cached week so true records never lag behind the weekly data.
    """
    if week is None:
        week = max(MIN_WEEK, min(await handler.get_current_week(), MAX_WEEK))

    if not force_refresh:
        cached = repository.get_weekly_scores(week)
        if cached:
            return RefreshResult(week=week, scores=cached, refreshed=False)

    scores = await handler.get_weekly_scores(week)
    repository.set_weekly_scores(week, scores)
    teams_updated = rebuild_true_records(repository)
    timestamp = repository.set_last_update()
    logger.info("Refreshed week %d (%d teams)", week, len(scores))
    return RefreshResult(
        week=week,
        scores=scores,
        refreshed=True,
        teams_updated=teams_updated,
        timestamp=timestamp,
    )
