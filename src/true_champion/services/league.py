"""
League service: response payloads built from cached league data.

Routers and CLI call this instead of touching the repository directly.
Every builder returns None when the data it needs has not been cached
yet; callers turn that into a 404 or an empty-state message.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from ..core.models import ActualStanding, TeamMetadata, TrueRecord, WeekScores
from ..records import (
    average_points,
    consistency,
    head_to_head,
    index_standings,
    present_scores,
    rank_teams,
    season_statistics,
    total_points,
    weekly_rank,
)
from ..records.statistics import TeamStat
from ..repositories.league import LeagueRepository

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================


def team_info(metadata: Mapping[str, TeamMetadata], team_id: str) -> dict[str, str]:
    """Display fields for a team, with placeholders when metadata is missing."""
    meta = metadata.get(team_id) or TeamMetadata.placeholder(team_id)
    return {"team_id": team_id, "team_name": meta.name, "owner": meta.owner, "abbrev": meta.abbrev}


def latest_week(true_records: Mapping[str, TrueRecord]) -> int:
    """Highest week present in any team's weekly records, 1 when empty."""
    weeks = [week for record in true_records.values() for week in record.weekly_records]
    return max(weeks) if weeks else 1


def _weekly_records(record: TrueRecord) -> dict[str, dict[str, int]]:
    return {str(week): wr.model_dump() for week, wr in sorted(record.weekly_records.items())}


def _stat_entry(
    stat: Optional[TeamStat],
    metadata: Mapping[str, TeamMetadata],
    value_key: str,
) -> Optional[dict[str, Any]]:
    if stat is None:
        return None
    return {**team_info(metadata, stat.team_id), value_key: stat.value}


def standings_rows(
    true_records: Mapping[str, TrueRecord],
    weeks: Sequence[WeekScores],
    metadata: Mapping[str, TeamMetadata],
) -> list[dict[str, Any]]:
    """Ranked true standings with per-team scoring statistics."""
    averages = {team_id: average_points(weeks, team_id) for team_id in true_records}
    rows = []
    for ranked in rank_teams(true_records, averages):
        record = ranked.record
        rows.append(
            {
                "rank": ranked.rank,
                **team_info(metadata, ranked.team_id),
                "wins": record.wins,
                "losses": record.losses,
                "ties": record.ties,
                "win_percentage": ranked.win_percentage,
                "average_points": ranked.average_points,
                "consistency": consistency(weeks, ranked.team_id),
                "total_points": total_points(weeks, ranked.team_id),
                "weekly_records": _weekly_records(record),
            }
        )
    return rows


def actual_standings_rows(
    standings: Sequence[ActualStanding],
    metadata: Mapping[str, TeamMetadata],
) -> list[dict[str, Any]]:
    return [
        {
            **team_info(metadata, standing.team_id),
            "wins": standing.wins,
            "losses": standing.losses,
            "ties": standing.ties,
            "win_percentage": standing.win_percentage,
            "points": standing.points,
            "points_against": standing.points_against,
        }
        for standing in sorted(standings, key=lambda s: (-s.win_percentage, -s.points, s.team_id))
    ]


# =============================================================================
# Builders
# =============================================================================


def build_standings(repository: LeagueRepository) -> Optional[dict[str, Any]]:
    """True standings for the season, or None when nothing is cached."""
    true_records = repository.get_all_true_records()
    if not true_records:
        return None

    weeks = repository.get_all_weekly_scores(latest_week(true_records))
    return {
        "season": repository.season,
        "standings": standings_rows(true_records, weeks, repository.get_team_metadata()),
        "last_update": repository.get_last_update(),
    }


def build_dashboard(repository: LeagueRepository) -> Optional[dict[str, Any]]:
    """
    Standings, real standings and league leaders in one payload.

    Luck figures are only present once actual standings have been cached.
    """
    true_records = repository.get_all_true_records()
    if not true_records:
        return None

    current_week = latest_week(true_records)
    weeks = repository.get_all_weekly_scores(current_week)
    metadata = repository.get_team_metadata()
    actual = repository.get_actual_standings()

    stats = season_statistics(weeks, true_records, index_standings(actual) if actual else None)

    return {
        "season": repository.season,
        "standings": standings_rows(true_records, weeks, metadata),
        "actual_standings": actual_standings_rows(actual, metadata) if actual else None,
        "stats": {
            "luckiest": _stat_entry(stats.luckiest, metadata, "differential"),
            "unluckiest": _stat_entry(stats.unluckiest, metadata, "differential"),
            "most_consistent": _stat_entry(stats.most_consistent, metadata, "consistency"),
            "highest_scoring": _stat_entry(stats.highest_scoring, metadata, "average_points"),
        },
        "last_update": repository.get_last_update(),
        "current_week": current_week,
    }


def build_team_detail(repository: LeagueRepository, team_id: str) -> Optional[dict[str, Any]]:
    """Everything about one team, or None when the team has no true record."""
    true_records = repository.get_all_true_records()
    record = true_records.get(team_id)
    if record is None:
        return None

    current_week = max(record.weekly_records) if record.weekly_records else 1
    weeks = repository.get_all_weekly_scores(current_week)
    metadata = repository.get_team_metadata()

    weekly_performance = []
    for entry in weeks:
        valid = present_scores(entry.scores)
        if team_id not in valid:
            continue
        week_record = record.weekly_records.get(entry.week)
        weekly_performance.append(
            {
                "week": entry.week,
                "score": valid[team_id],
                "wins": week_record.wins if week_record else 0,
                "losses": week_record.losses if week_record else 0,
                "ties": week_record.ties if week_record else 0,
                "rank": weekly_rank(valid, team_id),
                "total_teams": len(valid),
            }
        )

    h2h = [
        {
            "opponent_id": matchup.opponent_id,
            "opponent_name": team_info(metadata, matchup.opponent_id)["team_name"],
            "opponent_owner": team_info(metadata, matchup.opponent_id)["owner"],
            "wins": matchup.wins,
            "losses": matchup.losses,
            "ties": matchup.ties,
            "win_percentage": matchup.win_percentage,
            "average_score_differential": round(matchup.average_score_differential, 2),
        }
        for matchup in head_to_head(weeks, team_id, true_records)
    ]

    actual_record = None
    record_differential = None
    actual = index_standings(repository.get_actual_standings() or []).get(team_id)
    if actual is not None:
        actual_record = {
            "wins": actual.wins,
            "losses": actual.losses,
            "ties": actual.ties,
            "win_percentage": actual.win_percentage,
        }
        record_differential = {
            "wins": actual.wins - record.wins,
            "losses": actual.losses - record.losses,
            "win_percentage": actual.win_percentage - record.win_percentage,
        }

    return {
        **team_info(metadata, team_id),
        "true_record": {
            "wins": record.wins,
            "losses": record.losses,
            "ties": record.ties,
            "win_percentage": record.win_percentage,
            "total_games": record.wins + record.losses + record.ties,
        },
        "actual_record": actual_record,
        "record_differential": record_differential,
        "statistics": {
            "average_points": average_points(weeks, team_id),
            "consistency": consistency(weeks, team_id),
            "total_points": total_points(weeks, team_id),
            "weeks_played": len(weekly_performance),
        },
        "weekly_performance": weekly_performance,
        "head_to_head": h2h,
        "season": repository.season,
        "current_week": current_week,
    }


def analyze_week(
    week: int,
    scores: Mapping[str, Optional[float]],
    metadata: Mapping[str, TeamMetadata],
) -> Optional[dict[str, Any]]:
    """
    Rankings, summary figures and the all-pairs matchup matrix for one week.

    Teams without a score are left out. None when no team scored.
    """
    valid = present_scores(scores)
    if not valid:
        return None

    ranked = sorted(valid.items(), key=lambda kv: (-kv[1], kv[0]))
    values = np.array(list(valid.values()), dtype=float)

    matrix = []
    team_ids = sorted(valid)
    for i, team1 in enumerate(team_ids):
        for team2 in team_ids[i + 1:]:
            s1, s2 = valid[team1], valid[team2]
            matrix.append(
                {
                    "team1_id": team1,
                    "team2_id": team2,
                    "team1_score": s1,
                    "team2_score": s2,
                    "winner": team1 if s1 > s2 else team2 if s2 > s1 else "tie",
                }
            )

    top_id, top_score = ranked[0]
    low_id, low_score = ranked[-1]
    return {
        "week": week,
        "scores": [
            {"rank": rank, **team_info(metadata, team_id), "score": score}
            for rank, (team_id, score) in enumerate(ranked, start=1)
        ],
        "highest_score": {**team_info(metadata, top_id), "score": top_score},
        "lowest_score": {**team_info(metadata, low_id), "score": low_score},
        "average_score": round(float(np.mean(values)), 2),
        "median_score": round(float(np.median(values)), 2),
        "matchup_matrix": matrix,
        "total_teams": len(valid),
    }


def build_weekly_analysis(repository: LeagueRepository, week: int) -> Optional[dict[str, Any]]:
    scores = repository.get_weekly_scores(week)
    if not scores:
        return None
    analysis = analyze_week(week, scores, repository.get_team_metadata())
    if analysis is not None:
        analysis["season"] = repository.season
    return analysis


def build_status(repository: LeagueRepository) -> dict[str, Any]:
    """Cache summary for the CLI status command and the refresh info endpoint."""
    weeks = repository.cached_weeks()
    return {
        "season": repository.season,
        "league_id": repository.league_id,
        "cached_weeks": weeks,
        "teams": len(repository.get_all_true_records()),
        "has_actual_standings": repository.get_actual_standings() is not None,
        "last_update": repository.get_last_update(),
    }
