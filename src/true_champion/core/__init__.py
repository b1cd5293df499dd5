"""
Core module for True Champion.

This module provides the foundational components:
- Configuration management (config.py)
- League data models (models.py)
- Type aliases and the cache key layout (types.py)
- Shared HTTP client infrastructure (http.py)

Usage:
    from true_champion.core import Settings, get_settings
    from true_champion.core import TrueRecord, WeeklyRecord, WeekScores
    from true_champion.core.http import BaseApiClient, ExternalAPIError
"""

from .config import Settings, get_settings
from .models import (
    ActualStanding,
    TeamMetadata,
    TrueRecord,
    WeeklyRecord,
    WeekScores,
)
from .types import MAX_WEEK, MIN_WEEK, WeeklyScoreMap

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "WeeklyScoreMap",
    "MIN_WEEK",
    "MAX_WEEK",
    # Models
    "ActualStanding",
    "TeamMetadata",
    "TrueRecord",
    "WeeklyRecord",
    "WeekScores",
]
