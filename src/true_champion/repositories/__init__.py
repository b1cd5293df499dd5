"""
Persistence for league data.

The key/value cache (Redis or in-memory) is the only store; LeagueRepository
layers the league key layout and model conversion on top of it.
"""

from ..core.config import Settings
from .cache import CacheBackend, InMemoryBackend, RedisBackend, create_cache_backend
from .league import LeagueRepository


def create_repository(settings: Settings, backend: CacheBackend | None = None) -> LeagueRepository:
    """Build the league repository for the configured season and league."""
    return LeagueRepository(
        backend or create_cache_backend(settings),
        season=settings.espn_season,
        league_id=settings.espn_league_id,
        ttl=settings.cache_ttl,
    )


__all__ = [
    "CacheBackend",
    "InMemoryBackend",
    "RedisBackend",
    "create_cache_backend",
    "LeagueRepository",
    "create_repository",
]
