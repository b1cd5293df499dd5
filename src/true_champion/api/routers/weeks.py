"""Weekly scores and weekly analysis endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Path

from ...core.http import ExternalAPIError
from ...core.types import MAX_WEEK, MIN_WEEK
from ...services.league import build_weekly_analysis
from ..dependencies import ProviderDependency, RepositoryDependency
from ..errors import ExternalServiceError, NoDataError

logger = logging.getLogger(__name__)

router = APIRouter()

WeekPath = Annotated[int, Path(ge=MIN_WEEK, le=MAX_WEEK, description="Week number (1-18)")]


@router.get("/{week}/scores")
async def get_weekly_scores(
    week: WeekPath,
    repository: RepositoryDependency,
    provider: ProviderDependency,
) -> dict[str, Any]:
    """
    Scores for one week, read through the cache.

    ``source`` is "cache" when served from the cache and "espn" when the
    week had to be fetched (and was then cached).
    """
    cached = repository.get_weekly_scores(week)
    if cached:
        return {"week": week, "scores": cached, "source": "cache"}

    try:
        scores = await provider.get_weekly_scores(week)
    except ExternalAPIError as e:
        logger.error("Failed to fetch week %d: %s", week, e)
        raise ExternalServiceError("ESPN", f"Failed to fetch week {week} scores") from e

    repository.set_weekly_scores(week, scores)
    return {"week": week, "scores": scores, "source": "espn"}


@router.get("/{week}/analysis")
async def get_weekly_analysis(week: WeekPath, repository: RepositoryDependency) -> dict[str, Any]:
    analysis = build_weekly_analysis(repository, week)
    if analysis is None:
        raise NoDataError(f"No data available for week {week}")
    return analysis
