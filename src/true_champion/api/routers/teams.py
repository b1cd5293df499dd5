"""Team API endpoints."""

from typing import Any

from fastapi import APIRouter

from ...services.league import build_team_detail
from ..dependencies import RepositoryDependency
from ..errors import NotFoundError

router = APIRouter()


@router.get("/{team_id}")
async def get_team(team_id: str, repository: RepositoryDependency) -> dict[str, Any]:
    """
    Get a team's true record, real record and season breakdown.

    Includes week-by-week performance and the all-play head-to-head record
    against every other team.

    Args:
        team_id: League team ID
        repository: League repository (injected)

    Raises:
        NotFoundError: 404 if the team has no true record this season
    """
    detail = build_team_detail(repository, team_id)
    if detail is None:
        raise NotFoundError("Team", team_id, f"season {repository.season}")
    return detail
