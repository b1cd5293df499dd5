"""
Derived statistics over true records and weekly score history.

All functions are pure reducers. Tie-break rules are deterministic:

- Rankings: win pct desc, wins desc, average points desc, team id asc
- Luckiest / unluckiest / most consistent / highest scoring: on equal
  values the alphabetically first team id wins
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from ..core.models import ActualStanding, TrueRecord, WeekScores
from .comparator import present_scores


def win_percentage(wins: int, losses: int) -> float:
    """wins / (wins + losses); 0.0 when no games were decided."""
    total = wins + losses
    return wins / total if total > 0 else 0.0


# =============================================================================
# Per-team score reducers
# =============================================================================


def team_scores(weeks: Iterable[WeekScores], team_id: str) -> list[float]:
    """A team's present scores in week order. Missing weeks are skipped."""
    scores = []
    for entry in sorted(weeks, key=lambda w: w.week):
        score = present_scores(entry.scores).get(team_id)
        if score is not None:
            scores.append(score)
    return scores


def average_points(weeks: Iterable[WeekScores], team_id: str) -> float:
    """Mean weekly score, 0.0 if the team has no scored weeks."""
    scores = team_scores(weeks, team_id)
    return float(np.mean(scores)) if scores else 0.0


def total_points(weeks: Iterable[WeekScores], team_id: str) -> float:
    return float(sum(team_scores(weeks, team_id)))


def consistency(weeks: Iterable[WeekScores], team_id: str) -> float:
    """
    Population standard deviation of weekly scores. Lower is more consistent.

    Returns 0.0 for a team with no scored weeks.
    """
    scores = team_scores(weeks, team_id)
    return float(np.std(scores, ddof=0)) if scores else 0.0


# =============================================================================
# Rankings
# =============================================================================


@dataclass
class RankedTeam:
    """A team's position in the true standings."""

    rank: int
    team_id: str
    record: TrueRecord
    win_percentage: float
    average_points: float = 0.0


def rank_teams(
    true_records: Mapping[str, TrueRecord],
    average_points_by_team: Optional[Mapping[str, float]] = None,
) -> list[RankedTeam]:
    """
    Rank teams by true record.

    Sorted by win percentage desc, then total wins desc, then average points
    desc (when supplied), then team id asc. Ranks are 1-based and distinct.
    """
    averages = average_points_by_team or {}

    def sort_key(item: tuple[str, TrueRecord]):
        team_id, record = item
        return (
            -win_percentage(record.wins, record.losses),
            -record.wins,
            -averages.get(team_id, 0.0),
            team_id,
        )

    ordered = sorted(true_records.items(), key=sort_key)
    return [
        RankedTeam(
            rank=index,
            team_id=team_id,
            record=record,
            win_percentage=win_percentage(record.wins, record.losses),
            average_points=averages.get(team_id, 0.0),
        )
        for index, (team_id, record) in enumerate(ordered, start=1)
    ]


# =============================================================================
# League leaders
# =============================================================================


@dataclass(frozen=True)
class TeamStat:
    """A single team singled out by a league-wide statistic."""

    team_id: str
    value: float


def _pick_max(values: Mapping[str, float]) -> Optional[TeamStat]:
    if not values:
        return None
    team_id, value = min(values.items(), key=lambda kv: (-kv[1], kv[0]))
    return TeamStat(team_id=team_id, value=value)


def _pick_min(values: Mapping[str, float]) -> Optional[TeamStat]:
    if not values:
        return None
    team_id, value = min(values.items(), key=lambda kv: (kv[1], kv[0]))
    return TeamStat(team_id=team_id, value=value)


def index_standings(standings: Iterable[ActualStanding]) -> dict[str, ActualStanding]:
    return {standing.team_id: standing for standing in standings}


def luck_differentials(
    actual: Mapping[str, ActualStanding],
    true_records: Mapping[str, TrueRecord],
) -> dict[str, float]:
    """
    actual win pct - true win pct for every team present on both sides.

    Both sides use wins / (wins + losses); real ties are left out. Positive
    means the team won more real games than its scoring deserved.
    """
    return {
        team_id: win_percentage(actual[team_id].wins, actual[team_id].losses)
        - record.win_percentage
        for team_id, record in true_records.items()
        if team_id in actual
    }


def find_luckiest(
    actual: Mapping[str, ActualStanding],
    true_records: Mapping[str, TrueRecord],
) -> Optional[TeamStat]:
    return _pick_max(luck_differentials(actual, true_records))


def find_unluckiest(
    actual: Mapping[str, ActualStanding],
    true_records: Mapping[str, TrueRecord],
) -> Optional[TeamStat]:
    return _pick_min(luck_differentials(actual, true_records))


def find_most_consistent(
    weeks: Sequence[WeekScores],
    true_records: Mapping[str, TrueRecord],
) -> Optional[TeamStat]:
    return _pick_min({team_id: consistency(weeks, team_id) for team_id in true_records})


def find_highest_scoring(
    weeks: Sequence[WeekScores],
    true_records: Mapping[str, TrueRecord],
) -> Optional[TeamStat]:
    return _pick_max({team_id: average_points(weeks, team_id) for team_id in true_records})


# =============================================================================
# Head-to-head
# =============================================================================


@dataclass
class HeadToHead:
    """A team's all-play results against one opponent across the season."""

    opponent_id: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    score_differential: float = 0.0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        # ties count as games played here, unlike the true record
        return self.wins / self.games if self.games else 0.0

    @property
    def average_score_differential(self) -> float:
        return self.score_differential / self.games if self.games else 0.0


def head_to_head(
    weeks: Iterable[WeekScores],
    team_id: str,
    opponent_ids: Iterable[str],
) -> list[HeadToHead]:
    """
    Compare a team against each opponent in every week both have a score.

    Returned sorted by win percentage desc, then opponent id asc.
    """
    records = {opp: HeadToHead(opponent_id=opp) for opp in opponent_ids if opp != team_id}

    for entry in weeks:
        valid = present_scores(entry.scores)
        score = valid.get(team_id)
        if score is None:
            continue
        for opp, h2h in records.items():
            other = valid.get(opp)
            if other is None:
                continue
            if score > other:
                h2h.wins += 1
            elif score < other:
                h2h.losses += 1
            else:
                h2h.ties += 1
            h2h.score_differential += score - other

    return sorted(records.values(), key=lambda r: (-r.win_percentage, r.opponent_id))


# =============================================================================
# Season bundle
# =============================================================================


@dataclass
class SeasonStatistics:
    rankings: list[RankedTeam]
    most_consistent: Optional[TeamStat]
    highest_scoring: Optional[TeamStat]
    luckiest: Optional[TeamStat] = None
    unluckiest: Optional[TeamStat] = None
    luck: dict[str, float] = field(default_factory=dict)


def season_statistics(
    weeks: Sequence[WeekScores],
    true_records: Mapping[str, TrueRecord],
    actual: Optional[Mapping[str, ActualStanding]] = None,
) -> SeasonStatistics:
    """Rankings and league leaders; luck figures only when actual standings exist."""
    averages = {team_id: average_points(weeks, team_id) for team_id in true_records}
    stats = SeasonStatistics(
        rankings=rank_teams(true_records, averages),
        most_consistent=find_most_consistent(weeks, true_records),
        highest_scoring=_pick_max(averages),
    )
    if actual:
        stats.luck = luck_differentials(actual, true_records)
        stats.luckiest = _pick_max(stats.luck)
        stats.unluckiest = _pick_min(stats.luck)
    return stats
