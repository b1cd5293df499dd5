"""
Weekly all-play comparison.

Every team is compared against every other team's score for the week.
Instead of the O(n^2) pairwise loop, scores are sorted once and each team's
tally is read off with two binary searches:

- wins   = number of scores strictly lower
- losses = number of scores strictly higher
- ties   = everyone else except the team itself

The result is identical to the pairwise comparison.
"""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from typing import Optional

from ..core.models import WeeklyRecord
from ..core.types import WeeklyScoreMap


def present_scores(scores: WeeklyScoreMap) -> dict[str, float]:
    """Drop teams without a usable score (None or NaN). Absent is not zero."""
    return {
        str(team_id): float(score)
        for team_id, score in scores.items()
        if _is_present(score)
    }


def _is_present(score: Optional[float]) -> bool:
    return score is not None and not math.isnan(score)


def compare_week(scores: WeeklyScoreMap) -> dict[str, WeeklyRecord]:
    """
    Compute each team's all-play record for one week.

    Args:
        scores: team_id -> points for the week

    Returns:
        team_id -> WeeklyRecord for every team with a present score.
        An empty map yields an empty result.
    """
    valid = present_scores(scores)
    ordered = sorted(valid.values())
    opponents = len(ordered) - 1

    records: dict[str, WeeklyRecord] = {}
    for team_id, score in valid.items():
        wins = bisect_left(ordered, score)
        losses = len(ordered) - bisect_right(ordered, score)
        records[team_id] = WeeklyRecord(
            wins=wins,
            losses=losses,
            ties=opponents - wins - losses,
        )
    return records


def weekly_rank(scores: WeeklyScoreMap, team_id: str) -> Optional[int]:
    """1-based rank of a team's score for the week (1 + teams that scored higher)."""
    valid = present_scores(scores)
    score = valid.get(team_id)
    if score is None:
        return None
    return 1 + sum(1 for other in valid.values() if other > score)
