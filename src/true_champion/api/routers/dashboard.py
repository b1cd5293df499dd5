"""Dashboard endpoint: standings, real standings and league leaders."""

from typing import Any

from fastapi import APIRouter

from ...services.league import build_dashboard
from ..dependencies import RepositoryDependency
from ..errors import NoDataError

router = APIRouter()


@router.get("")
async def get_dashboard(repository: RepositoryDependency) -> dict[str, Any]:
    dashboard = build_dashboard(repository)
    if dashboard is None:
        raise NoDataError("No standings data available")
    return dashboard
