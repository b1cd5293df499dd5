"""
Dependency injection for API endpoints.

The repository and league provider are built once in the app lifespan
(or handed to create_app by tests) and kept on ``app.state``. Routes pull
them from there through these dependencies; there are no module globals.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..core.config import Settings
from ..handlers.base import LeagueDataProvider
from ..repositories.league import LeagueRepository
from .errors import ServiceUnavailableError


def get_repository(request: Request) -> LeagueRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise ServiceUnavailableError("cache")
    return repository


def get_provider(request: Request) -> LeagueDataProvider:
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        raise ServiceUnavailableError("league provider")
    return provider


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


RepositoryDependency = Annotated[LeagueRepository, Depends(get_repository)]
ProviderDependency = Annotated[LeagueDataProvider, Depends(get_provider)]
SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
