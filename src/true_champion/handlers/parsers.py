"""
Turn validated ESPN league responses into the app's league models.

These are pure functions so they can be tested against captured payloads
without any HTTP.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..core.http import InvalidResponseError
from ..core.models import ActualStanding, TeamMetadata
from .schemas import ESPNLeagueResponse

logger = logging.getLogger(__name__)


def validate_league_response(payload: Any) -> ESPNLeagueResponse:
    """
    Validate a raw ESPN JSON body.

    Raises:
        InvalidResponseError: If the payload does not match the expected shape
    """
    try:
        return ESPNLeagueResponse.model_validate(payload)
    except ValidationError as e:
        logger.error("ESPN API response validation failed: %s", e.errors()[:5])
        raise InvalidResponseError(
            "Invalid ESPN API response format",
            errors=e.errors(include_url=False),
        ) from e


def parse_weekly_scores(response: ESPNLeagueResponse) -> dict[str, float]:
    """
    Extract team_id -> total points for the response's scoring period.

    Only matchups for that period are read; a bye (no away side) contributes
    just the home team.
    """
    scores: dict[str, float] = {}
    for matchup in response.schedule:
        if matchup.matchup_period_id != response.scoring_period_id:
            continue
        scores[str(matchup.home.team_id)] = matchup.home.total_points
        if matchup.away is not None:
            scores[str(matchup.away.team_id)] = matchup.away.total_points
    return scores


def parse_team_metadata(response: ESPNLeagueResponse) -> dict[str, TeamMetadata]:
    """team_id -> display name, owner name and abbreviation."""
    members = {member.id: member.full_name() for member in response.members}

    metadata: dict[str, TeamMetadata] = {}
    for team in response.teams:
        owner_id = team.owners[0] if team.owners else None
        if owner_id:
            owner = members.get(owner_id, f"Owner {owner_id}")
        else:
            owner = f"Owner {team.id}"
        metadata[str(team.id)] = TeamMetadata(
            name=team.display_name(),
            owner=owner,
            abbrev=team.abbrev or f"T{team.id}",
        )
    return metadata


def parse_actual_standings(response: ESPNLeagueResponse) -> list[ActualStanding]:
    """Real league records; missing fields default to zero."""
    standings = []
    for team in response.teams:
        record = team.record
        standings.append(
            ActualStanding(
                team_id=str(team.id),
                wins=record.wins if record else 0,
                losses=record.losses if record else 0,
                ties=record.ties if record else 0,
                points=team.points or 0.0,
                points_against=team.points_against or 0.0,
            )
        )
    return standings
