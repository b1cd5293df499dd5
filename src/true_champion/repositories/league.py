"""
League repository: typed access to league data in the key/value cache.

Owns the key layout from core.types and converts between cached JSON and
the core models. One instance is built per process and injected into the
updater, the API and the CLI.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from ..core.models import ActualStanding, TeamMetadata, TrueRecord, WeekScores
from ..core.types import (
    MAX_WEEK,
    TRUE_RECORDS_PREFIX,
    WEEKLY_SCORES_PREFIX,
    actual_standings_key,
    last_update_key,
    season_patterns,
    team_metadata_key,
    true_record_key,
    weekly_scores_key,
)
from .cache import CacheBackend

logger = logging.getLogger(__name__)


class LeagueRepository:
    """Reads and writes one league season's data."""

    def __init__(
        self,
        backend: CacheBackend,
        season: int,
        league_id: str,
        ttl: Optional[int] = None,
    ):
        self.backend = backend
        self.season = season
        self.league_id = league_id
        self.ttl = ttl

    # =========================================================================
    # Weekly scores
    # =========================================================================

    def set_weekly_scores(self, week: int, scores: Mapping[str, Optional[float]]) -> None:
        self.backend.set(weekly_scores_key(self.season, week), dict(scores), self.ttl)

    def get_weekly_scores(self, week: int) -> Optional[dict[str, Optional[float]]]:
        data = self.backend.get(weekly_scores_key(self.season, week))
        return data if isinstance(data, dict) else None

    def set_all_weekly_scores(self, weeks: Iterable[WeekScores]) -> None:
        for entry in weeks:
            self.set_weekly_scores(entry.week, entry.scores)

    def get_all_weekly_scores(self, max_week: int = MAX_WEEK) -> list[WeekScores]:
        """
        Cached weeks 1..max_week in week order, batched into one read.

        Weeks that were never fetched are skipped.
        """
        weeks = list(range(1, max_week + 1))
        values = self.backend.get_many(weekly_scores_key(self.season, w) for w in weeks)
        return [
            WeekScores(week=week, scores=scores)
            for week, scores in zip(weeks, values)
            if isinstance(scores, dict)
        ]

    def cached_weeks(self) -> list[int]:
        """Week numbers with cached scores, ascending."""
        weeks = []
        for key in self.backend.scan(f"{WEEKLY_SCORES_PREFIX}:{self.season}:*"):
            suffix = key.rsplit(":", 1)[-1]
            if suffix.isdigit():
                weeks.append(int(suffix))
        return sorted(weeks)

    # =========================================================================
    # True records
    # =========================================================================

    def set_true_record(self, record: TrueRecord) -> None:
        self.backend.set(
            true_record_key(self.season, record.team_id),
            record.model_dump(mode="json"),
            self.ttl,
        )

    def get_true_record(self, team_id: str) -> Optional[TrueRecord]:
        return self._load_record(self.backend.get(true_record_key(self.season, team_id)))

    def get_all_true_records(self) -> dict[str, TrueRecord]:
        """Scan the season's record keys, then fetch them in one batch."""
        keys = self.backend.scan(f"{TRUE_RECORDS_PREFIX}:{self.season}:*")
        records: dict[str, TrueRecord] = {}
        for key, data in zip(keys, self.backend.get_many(keys)):
            record = self._load_record(data)
            if record is not None:
                records[key.rsplit(":", 1)[-1]] = record
        return records

    def replace_true_records(self, records: Mapping[str, TrueRecord]) -> None:
        """Write a freshly aggregated season and drop teams no longer in it."""
        for record in records.values():
            self.set_true_record(record)
        for key in self.backend.scan(f"{TRUE_RECORDS_PREFIX}:{self.season}:*"):
            if key.rsplit(":", 1)[-1] not in records:
                self.backend.delete(key)

    @staticmethod
    def _load_record(data) -> Optional[TrueRecord]:
        if data is None:
            return None
        try:
            return TrueRecord.model_validate(data)
        except ValidationError as e:
            logger.warning("Discarding malformed cached true record: %s", e)
            return None

    # =========================================================================
    # Actual standings and team metadata
    # =========================================================================

    def set_actual_standings(self, standings: Iterable[ActualStanding]) -> None:
        self.backend.set(
            actual_standings_key(self.season),
            [s.model_dump(mode="json") for s in standings],
            self.ttl,
        )

    def get_actual_standings(self) -> Optional[list[ActualStanding]]:
        data = self.backend.get(actual_standings_key(self.season))
        if not isinstance(data, list):
            return None
        return [ActualStanding.model_validate(item) for item in data]

    def set_team_metadata(self, teams: Mapping[str, TeamMetadata]) -> None:
        self.backend.set(
            team_metadata_key(self.league_id),
            {team_id: meta.model_dump() for team_id, meta in teams.items()},
            self.ttl,
        )

    def get_team_metadata(self) -> dict[str, TeamMetadata]:
        data = self.backend.get(team_metadata_key(self.league_id))
        if not isinstance(data, dict):
            return {}
        return {team_id: TeamMetadata.model_validate(meta) for team_id, meta in data.items()}

    # =========================================================================
    # Last update
    # =========================================================================

    def set_last_update(self, timestamp: Optional[datetime | str] = None) -> str:
        value = timestamp or datetime.now(tz=timezone.utc)
        iso = value if isinstance(value, str) else value.isoformat()
        self.backend.set(last_update_key(self.league_id), iso, self.ttl)
        return iso

    def get_last_update(self) -> Optional[str]:
        return self.backend.get(last_update_key(self.league_id))

    # =========================================================================
    # Maintenance
    # =========================================================================

    def clear_season_data(self) -> int:
        """Delete weekly scores, true records and standings for the season."""
        removed = 0
        for pattern in season_patterns(self.season):
            for key in self.backend.scan(pattern):
                self.backend.delete(key)
                removed += 1
        logger.info("Cleared %d cache entries for season %s", removed, self.season)
        return removed
