"""
Refresh endpoints: current week, manual week refresh and the cron update.

These are the only routes that call the league provider on purpose.
"""

import logging
import secrets
from typing import Any, Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...core.http import ExternalAPIError
from ...core.types import MAX_WEEK, MIN_WEEK
from ...services.updater import UpdateOptions, refresh_week, update_all_data
from ..dependencies import ProviderDependency, RepositoryDependency, SettingsDependency
from ..errors import ExternalServiceError, UnauthorizedError

logger = logging.getLogger(__name__)

router = APIRouter()


class RefreshRequest(BaseModel):
    week: Optional[int] = Field(default=None, ge=MIN_WEEK, le=MAX_WEEK)
    force_refresh: bool = False


@router.get("/current-week")
async def get_current_week(provider: ProviderDependency, settings: SettingsDependency) -> dict[str, Any]:
    """
    Current matchup period and the last completed week.

    Falls back to showing every week when the provider cannot be reached.
    """
    try:
        current = await provider.get_current_week()
    except ExternalAPIError as e:
        logger.warning("Current week lookup failed: %s", e)
        return {
            "current_week": 1,
            "last_completed_week": 0,
            "max_week": settings.total_weeks,
            "total_weeks": settings.total_weeks,
            "error": "Failed to fetch current week, showing all weeks",
        }

    last_completed = current - 1
    return {
        "current_week": current,
        "last_completed_week": last_completed,
        "max_week": max(1, last_completed),
        "total_weeks": settings.total_weeks,
    }


@router.post("/refresh")
async def post_refresh(
    request: RefreshRequest,
    repository: RepositoryDependency,
    provider: ProviderDependency,
) -> dict[str, Any]:
    """Refresh one week (current week by default) unless it is already cached."""
    try:
        result = await refresh_week(provider, repository, request.week, request.force_refresh)
    except ExternalAPIError as e:
        logger.error("Refresh failed: %s", e)
        raise ExternalServiceError("ESPN", "Failed to refresh league data") from e
    return result.to_dict()


@router.get("/refresh")
async def get_refresh_info(
    repository: RepositoryDependency,
    provider: ProviderDependency,
) -> dict[str, Any]:
    """Last update time and the provider's current week."""
    try:
        current = await provider.get_current_week()
    except ExternalAPIError as e:
        logger.warning("Current week lookup failed: %s", e)
        current = None
    return {
        "last_update": repository.get_last_update(),
        "current_week": current,
        "season": repository.season,
        "league_id": repository.league_id,
    }


@router.get("/cron/update")
async def cron_update(
    repository: RepositoryDependency,
    provider: ProviderDependency,
    settings: SettingsDependency,
    authorization: Optional[str] = Header(default=None),
):
    """
    Full season update for a scheduler.

    Returns 200 when every step succeeded, 207 when some weeks or steps
    failed, and 500 on a fatal error. When CRON_SECRET is configured the
    request must carry ``Authorization: Bearer <secret>``.
    """
    if settings.cron_secret:
        expected = f"Bearer {settings.cron_secret}"
        if not authorization or not secrets.compare_digest(authorization, expected):
            logger.error("Unauthorized cron request attempt")
            raise UnauthorizedError()

    logger.info("Cron update triggered")
    result = await update_all_data(
        provider,
        repository,
        UpdateOptions(
            default_max_week=settings.default_max_week,
            request_delay=settings.espn_request_delay,
        ),
    )

    if result.fatal:
        status_code = 500
    elif result.success:
        status_code = 200
    else:
        status_code = 207

    return JSONResponse(
        status_code=status_code,
        content={
            "success": result.success,
            "message": (
                "Data update completed successfully"
                if result.success
                else "Data update completed with errors"
            ),
            "data": result.to_dict(),
        },
    )
