"""
ESPN handler: fetches fantasy football league data from the ESPN v3 API.

Extends BaseApiClient for HTTP infrastructure. Every response is validated
against the schemas in schemas.py before it leaves this module, so the
record engine only ever sees typed data.

Private leagues need the ``swid`` and ``espn_s2`` browser cookies; public
leagues work without them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import Settings
from ..core.http import BaseApiClient
from .base import LeagueDataProvider
from .parsers import validate_league_response
from .schemas import ESPNLeagueResponse

logger = logging.getLogger(__name__)

SCOREBOARD_VIEWS = ["mMatchupScore", "mScoreboard"]
LEAGUE_VIEWS = ["mTeam", "mSettings"]


class ESPNHandler(BaseApiClient, LeagueDataProvider):
    """Fetches league scoreboards, standings and team info from ESPN."""

    BASE_URL = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl"
    provider_name = "espn"

    def __init__(
        self,
        league_id: str,
        season: int,
        *,
        swid: str | None = None,
        espn_s2: str | None = None,
        base_url: str | None = None,
        requests_per_minute: int = 120,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not league_id or not season:
            raise ValueError("ESPN league id and season must be provided")

        headers = {"Accept": "application/json"}
        if swid and espn_s2:
            headers["Cookie"] = f"swid={swid}; espn_s2={espn_s2}"

        super().__init__(
            base_url=base_url,
            headers=headers,
            requests_per_minute=requests_per_minute,
            timeout=timeout,
            transport=transport,
        )
        self.league_id = league_id
        self.season = season

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "ESPNHandler":
        return cls(
            league_id=settings.espn_league_id,
            season=settings.espn_season,
            swid=settings.espn_swid,
            espn_s2=settings.espn_s2,
            base_url=settings.espn_base_url,
            requests_per_minute=settings.espn_requests_per_minute,
            timeout=settings.espn_timeout,
            **kwargs,
        )

    @property
    def league_path(self) -> str:
        return f"/seasons/{self.season}/segments/0/leagues/{self.league_id}"

    # =========================================================================
    # Fetching
    # =========================================================================

    async def fetch_weekly_data(self, week: int) -> ESPNLeagueResponse:
        """Scoreboard for one scoring period."""
        payload = await self._get(
            self.league_path,
            {"view": SCOREBOARD_VIEWS, "scoringPeriodId": week},
        )
        response = validate_league_response(payload)
        logger.debug(
            "Fetched ESPN week %d: %d matchups", week, len(response.schedule)
        )
        return response

    async def fetch_league_data(self) -> ESPNLeagueResponse:
        """Teams, members, records and the league status block."""
        payload = await self._get(self.league_path, {"view": LEAGUE_VIEWS})
        return validate_league_response(payload)
