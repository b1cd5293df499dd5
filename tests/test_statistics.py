"""Tests for rankings, scoring reducers, luck and head-to-head."""

import pytest

from true_champion.core.models import ActualStanding, TrueRecord, WeekScores
from true_champion.records import (
    aggregate_season,
    average_points,
    consistency,
    find_highest_scoring,
    find_luckiest,
    find_most_consistent,
    find_unluckiest,
    head_to_head,
    index_standings,
    luck_differentials,
    rank_teams,
    season_statistics,
    team_scores,
    total_points,
    win_percentage,
)


def record(team_id, wins, losses, ties=0):
    return TrueRecord(team_id=team_id, wins=wins, losses=losses, ties=ties)


# =========================================================================
# Win percentage and score reducers
# =========================================================================


class TestWinPercentage:
    def test_basic(self):
        assert win_percentage(3, 1) == 0.75

    def test_no_games_is_zero(self):
        assert win_percentage(0, 0) == 0.0

    def test_true_record_excludes_ties(self):
        assert record("A", 1, 1, ties=6).win_percentage == 0.5

    def test_actual_standing_includes_ties(self):
        standing = ActualStanding(team_id="A", wins=1, losses=1, ties=2)
        assert standing.win_percentage == 0.25

    def test_actual_standing_no_games(self):
        assert ActualStanding(team_id="A").win_percentage == 0.0

    def test_luck_ignores_real_ties(self):
        actual = index_standings([ActualStanding(team_id="A", wins=6, losses=6, ties=2)])
        assert actual["A"].win_percentage == pytest.approx(6 / 14)
        assert luck_differentials(actual, {"A": record("A", 6, 6)})["A"] == pytest.approx(0.0)


class TestScoreReducers:
    def test_team_scores_in_week_order(self, sample_weeks):
        assert team_scores(reversed(sample_weeks), "1") == [120.0, 95.5, 112.0]

    def test_team_scores_skip_missing_weeks(self, sample_weeks):
        assert team_scores(sample_weeks, "4") == [105.0, 140.0]

    def test_average_points(self, sample_weeks):
        assert average_points(sample_weeks, "4") == pytest.approx(122.5)

    def test_average_points_no_weeks(self):
        assert average_points([], "1") == 0.0

    def test_total_points(self, sample_weeks):
        assert total_points(sample_weeks, "1") == pytest.approx(327.5)

    def test_consistency_is_population_std(self, sample_weeks):
        # 105 and 140: mean 122.5, deviations of 17.5
        assert consistency(sample_weeks, "4") == pytest.approx(17.5)

    def test_consistency_single_week_is_zero(self):
        weeks = [WeekScores(week=1, scores={"A": 100.0})]
        assert consistency(weeks, "A") == 0.0

    def test_consistency_identical_scores_is_zero(self):
        weeks = [WeekScores(week=w, scores={"A": 88.8}) for w in range(1, 6)]
        assert consistency(weeks, "A") == pytest.approx(0.0)

    def test_consistency_no_weeks(self):
        assert consistency([], "A") == 0.0

    def test_none_scores_ignored(self):
        weeks = [
            WeekScores(week=1, scores={"A": 100.0}),
            WeekScores(week=2, scores={"A": None}),
        ]
        assert average_points(weeks, "A") == 100.0


# =========================================================================
# Rankings
# =========================================================================


class TestRankTeams:
    def test_sorted_by_win_percentage(self):
        records = {"A": record("A", 2, 6), "B": record("B", 6, 2), "C": record("C", 4, 4)}
        ranked = rank_teams(records)
        assert [r.team_id for r in ranked] == ["B", "C", "A"]
        assert [r.rank for r in ranked] == [1, 2, 3]

    def test_wins_break_percentage_tie(self):
        records = {"A": record("A", 2, 2), "B": record("B", 4, 4)}
        assert [r.team_id for r in rank_teams(records)] == ["B", "A"]

    def test_average_points_break_wins_tie(self):
        records = {"A": record("A", 4, 4), "B": record("B", 4, 4)}
        ranked = rank_teams(records, {"A": 99.0, "B": 101.0})
        assert [r.team_id for r in ranked] == ["B", "A"]
        assert ranked[0].average_points == 101.0

    def test_full_tie_falls_back_to_team_id(self):
        records = {"B": record("B", 4, 4), "A": record("A", 4, 4)}
        ranked = rank_teams(records)
        assert [r.team_id for r in ranked] == ["A", "B"]
        assert [r.rank for r in ranked] == [1, 2]

    def test_deterministic(self, sample_weeks):
        records = aggregate_season(sample_weeks)
        first = [r.team_id for r in rank_teams(records)]
        second = [r.team_id for r in rank_teams(dict(reversed(list(records.items()))))]
        assert first == second

    def test_sample_season(self, sample_weeks):
        records = aggregate_season(sample_weeks)
        averages = {t: average_points(sample_weeks, t) for t in records}
        ranked = rank_teams(records, averages)
        assert [r.team_id for r in ranked] == ["1", "2", "4", "3"]
        assert ranked[0].win_percentage == pytest.approx(4 / 7)

    def test_empty(self):
        assert rank_teams({}) == []


# =========================================================================
# Luck and league leaders
# =========================================================================


class TestLuck:
    def test_luck_differential(self):
        actual = index_standings([ActualStanding(team_id="A", wins=10, losses=3)])
        diffs = luck_differentials(actual, {"A": record("A", 6, 7)})
        assert diffs["A"] == pytest.approx(10 / 13 - 6 / 13)
        assert diffs["A"] == pytest.approx(0.3077, abs=1e-4)

    def test_luckiest_and_unluckiest(self):
        actual = index_standings(
            [
                ActualStanding(team_id="A", wins=10, losses=3),
                ActualStanding(team_id="B", wins=3, losses=10),
                ActualStanding(team_id="C", wins=6, losses=7),
            ]
        )
        records = {"A": record("A", 6, 7), "B": record("B", 9, 4), "C": record("C", 6, 7)}
        assert find_luckiest(actual, records).team_id == "A"
        assert find_unluckiest(actual, records).team_id == "B"

    def test_teams_missing_either_side_excluded(self):
        actual = index_standings([ActualStanding(team_id="A", wins=1, losses=0)])
        records = {"B": record("B", 1, 0)}
        assert luck_differentials(actual, records) == {}
        assert find_luckiest(actual, records) is None
        assert find_unluckiest(actual, records) is None

    def test_real_ties_do_not_flip_luckiest(self):
        actual = index_standings(
            [
                ActualStanding(team_id="A", wins=5, losses=3, ties=4),
                ActualStanding(team_id="B", wins=6, losses=6),
            ]
        )
        records = {"A": record("A", 6, 6), "B": record("B", 6, 6)}
        assert find_luckiest(actual, records).team_id == "A"
        assert find_luckiest(actual, records).value == pytest.approx(5 / 8 - 0.5)
        assert find_unluckiest(actual, records).team_id == "B"

    def test_tie_broken_alphabetically(self):
        actual = index_standings(
            [
                ActualStanding(team_id="Z", wins=5, losses=5),
                ActualStanding(team_id="M", wins=5, losses=5),
            ]
        )
        records = {"Z": record("Z", 3, 7), "M": record("M", 3, 7)}
        assert find_luckiest(actual, records).team_id == "M"
        assert find_unluckiest(actual, records).team_id == "M"

    def test_sample_season(self, sample_weeks, sample_standings):
        records = aggregate_season(sample_weeks)
        actual = index_standings(sample_standings)
        assert find_luckiest(actual, records).team_id == "4"
        assert find_luckiest(actual, records).value == pytest.approx(0.5)
        assert find_unluckiest(actual, records).team_id == "3"


class TestLeaders:
    def test_most_consistent(self, sample_weeks):
        records = aggregate_season(sample_weeks)
        assert find_most_consistent(sample_weeks, records).team_id == "2"

    def test_highest_scoring(self, sample_weeks):
        records = aggregate_season(sample_weeks)
        leader = find_highest_scoring(sample_weeks, records)
        assert leader.team_id == "4"
        assert leader.value == pytest.approx(122.5)

    def test_empty_league(self):
        assert find_most_consistent([], {}) is None
        assert find_highest_scoring([], {}) is None


# =========================================================================
# Head-to-head and season bundle
# =========================================================================


class TestHeadToHead:
    def test_against_each_opponent(self, sample_weeks):
        results = {h.opponent_id: h for h in head_to_head(sample_weeks, "1", ["1", "2", "3", "4"])}
        assert set(results) == {"2", "3", "4"}
        assert (results["2"].wins, results["2"].losses, results["2"].ties) == (1, 1, 1)
        assert (results["3"].wins, results["3"].losses) == (2, 1)
        assert (results["4"].wins, results["4"].losses) == (1, 1)
        assert results["4"].games == 2
        assert results["2"].average_score_differential == pytest.approx(4.25 / 3)

    def test_sorted_by_win_percentage(self, sample_weeks):
        ordered = [h.opponent_id for h in head_to_head(sample_weeks, "1", ["2", "3", "4"])]
        assert ordered == ["3", "4", "2"]

    def test_no_shared_weeks(self):
        weeks = [WeekScores(week=1, scores={"A": 1.0}), WeekScores(week=2, scores={"B": 2.0})]
        (h2h,) = head_to_head(weeks, "A", ["B"])
        assert h2h.games == 0
        assert h2h.win_percentage == 0.0
        assert h2h.average_score_differential == 0.0


class TestSeasonStatistics:
    def test_without_actual_standings(self, sample_weeks):
        stats = season_statistics(sample_weeks, aggregate_season(sample_weeks))
        assert [r.team_id for r in stats.rankings] == ["1", "2", "4", "3"]
        assert stats.most_consistent.team_id == "2"
        assert stats.highest_scoring.team_id == "4"
        assert stats.luckiest is None
        assert stats.luck == {}

    def test_with_actual_standings(self, sample_weeks, sample_standings):
        stats = season_statistics(
            sample_weeks,
            aggregate_season(sample_weeks),
            index_standings(sample_standings),
        )
        assert stats.luckiest.team_id == "4"
        assert stats.unluckiest.team_id == "3"
        assert set(stats.luck) == {"1", "2", "3", "4"}
