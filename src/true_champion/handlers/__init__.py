"""
League data handlers: fetch from the fantasy provider and normalize.

Each handler implements LeagueDataProvider. Raw JSON is validated against
the ESPN schemas at this boundary and parsed into the core models before
anything downstream sees it.
"""

from ..core.config import Settings
from .base import LeagueDataProvider
from .espn import ESPNHandler
from .mock import MockLeagueHandler
from .parsers import (
    parse_actual_standings,
    parse_team_metadata,
    parse_weekly_scores,
    validate_league_response,
)


def create_provider(settings: Settings, *, mock: bool | None = None) -> LeagueDataProvider:
    """Build the provider for this process: mock league or live ESPN."""
    if mock is None:
        mock = settings.use_mock_data
    if mock:
        return MockLeagueHandler(season=settings.espn_season)
    return ESPNHandler.from_settings(settings)


__all__ = [
    "LeagueDataProvider",
    "ESPNHandler",
    "MockLeagueHandler",
    "create_provider",
    "parse_actual_standings",
    "parse_team_metadata",
    "parse_weekly_scores",
    "validate_league_response",
]
