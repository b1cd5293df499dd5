"""
Base league data provider interface.

The updater and the API only talk to this interface, so the live ESPN
handler and the offline mock league are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.models import ActualStanding, TeamMetadata
from .parsers import parse_actual_standings, parse_team_metadata, parse_weekly_scores
from .schemas import ESPNLeagueResponse


class LeagueDataProvider(ABC):
    """
    Abstract source of league data.

    Implementations are responsible for fetching and validating raw payloads.
    Parsing into the app's models is shared and lives on this base class.
    """

    provider_name: str = ""

    @abstractmethod
    async def fetch_weekly_data(self, week: int) -> ESPNLeagueResponse:
        """Fetch the scoreboard for one scoring period."""
        ...

    @abstractmethod
    async def fetch_league_data(self) -> ESPNLeagueResponse:
        """Fetch league-level data (teams, members, status)."""
        ...

    async def close(self) -> None:
        """Release any held resources."""

    async def get_current_week(self) -> int:
        league = await self.fetch_league_data()
        return league.status.current_matchup_period

    async def get_weekly_scores(self, week: int) -> dict[str, float]:
        return parse_weekly_scores(await self.fetch_weekly_data(week))

    async def get_actual_standings(self) -> list[ActualStanding]:
        return parse_actual_standings(await self.fetch_league_data())

    async def get_team_metadata(self) -> dict[str, TeamMetadata]:
        return parse_team_metadata(await self.fetch_league_data())
