"""True standings endpoint."""

from typing import Any

from fastapi import APIRouter

from ...services.league import build_standings
from ..dependencies import RepositoryDependency
from ..errors import NoDataError

router = APIRouter()


@router.get("")
async def get_standings(repository: RepositoryDependency) -> dict[str, Any]:
    """
    Ranked true standings for the configured season.

    Sorted by all-play win percentage, then wins, then average points.

    Raises:
        NoDataError: 404 if no true records have been cached yet
    """
    standings = build_standings(repository)
    if standings is None:
        raise NoDataError("No standings data available")
    return standings
