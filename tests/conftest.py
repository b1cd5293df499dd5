"""
Pytest configuration for true-champion tests.

Everything runs against the in-memory cache backend and the generated mock
league, so no Redis server or ESPN credentials are needed.
"""

import pytest

from true_champion.core.config import Settings
from true_champion.core.models import ActualStanding, TeamMetadata, WeekScores
from true_champion.handlers.mock import MockLeagueHandler
from true_champion.repositories.cache import InMemoryBackend
from true_champion.repositories.league import LeagueRepository

SEASON = 2025
LEAGUE_ID = "1044648461"


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        espn_league_id=LEAGUE_ID,
        espn_season=SEASON,
        espn_request_delay=0,
        cron_secret=None,
    )


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def repository(backend):
    return LeagueRepository(backend, season=SEASON, league_id=LEAGUE_ID)


@pytest.fixture
def sample_weeks():
    """Three weeks for a four-team league; team 4 skipped week 3."""
    return [
        WeekScores(week=1, scores={"1": 120.0, "2": 110.0, "3": 130.0, "4": 105.0}),
        WeekScores(week=2, scores={"1": 95.5, "2": 101.25, "3": 88.0, "4": 140.0}),
        WeekScores(week=3, scores={"1": 112.0, "2": 112.0, "3": 99.0}),
    ]


@pytest.fixture
def sample_metadata():
    return {
        "1": TeamMetadata(name="Retro Rockets", owner="Alex Smith", abbrev="RR"),
        "2": TeamMetadata(name="Pixel Pirates", owner="Jordan Lee", abbrev="PP"),
        "3": TeamMetadata(name="Arcade Aces", owner="Sam Park", abbrev="AA"),
        "4": TeamMetadata(name="Vintage Vipers", owner="Riley Chen", abbrev="VV"),
    }


@pytest.fixture
def sample_standings():
    return [
        ActualStanding(team_id="1", wins=2, losses=1, points=327.5, points_against=300.0),
        ActualStanding(team_id="2", wins=1, losses=2, points=323.25, points_against=330.0),
        ActualStanding(team_id="3", wins=0, losses=3, points=317.0, points_against=340.0),
        ActualStanding(team_id="4", wins=2, losses=0, points=245.0, points_against=200.0),
    ]


@pytest.fixture
def populated_repository(repository, sample_weeks, sample_metadata, sample_standings):
    """Repository holding the sample season, as an update would leave it."""
    from true_champion.records import aggregate_season

    repository.set_all_weekly_scores(sample_weeks)
    repository.replace_true_records(aggregate_season(sample_weeks))
    repository.set_team_metadata(sample_metadata)
    repository.set_actual_standings(sample_standings)
    repository.set_last_update("2025-11-04T10:00:00+00:00")
    return repository


@pytest.fixture
def mock_league():
    return MockLeagueHandler(season=SEASON, current_week=5, seed=7)
