"""Tests for the read-path payload builders."""

import pytest

from true_champion.services.league import (
    analyze_week,
    build_dashboard,
    build_standings,
    build_status,
    build_team_detail,
    build_weekly_analysis,
    latest_week,
    team_info,
)


class TestStandings:
    def test_empty_cache(self, repository):
        assert build_standings(repository) is None

    def test_ranked_rows(self, populated_repository):
        payload = build_standings(populated_repository)
        rows = payload["standings"]

        assert payload["season"] == 2025
        assert payload["last_update"] == "2025-11-04T10:00:00+00:00"
        assert [r["team_id"] for r in rows] == ["1", "2", "4", "3"]
        assert [r["rank"] for r in rows] == [1, 2, 3, 4]

        top = rows[0]
        assert top["team_name"] == "Retro Rockets"
        assert (top["wins"], top["losses"], top["ties"]) == (4, 3, 1)
        assert top["average_points"] == pytest.approx(327.5 / 3)
        assert top["total_points"] == pytest.approx(327.5)
        assert top["weekly_records"]["3"] == {"wins": 1, "losses": 0, "ties": 1}

    def test_missing_metadata_uses_placeholders(self, populated_repository):
        populated_repository.set_team_metadata({})
        rows = build_standings(populated_repository)["standings"]
        assert rows[0]["team_name"] == "Team 1"
        assert rows[0]["owner"] == "Owner 1"
        assert rows[0]["abbrev"] == "T1"


class TestDashboard:
    def test_empty_cache(self, repository):
        assert build_dashboard(repository) is None

    def test_key_stats(self, populated_repository):
        payload = build_dashboard(populated_repository)
        stats = payload["stats"]

        assert payload["current_week"] == 3
        assert stats["luckiest"]["team_id"] == "4"
        assert stats["luckiest"]["differential"] == pytest.approx(0.5)
        assert stats["unluckiest"]["team_id"] == "3"
        assert stats["most_consistent"]["team_id"] == "2"
        assert stats["highest_scoring"]["team_id"] == "4"
        assert stats["highest_scoring"]["average_points"] == pytest.approx(122.5)

    def test_actual_standings_formatted(self, populated_repository):
        actual = build_dashboard(populated_repository)["actual_standings"]
        assert actual[0]["team_id"] == "4"
        assert actual[0]["win_percentage"] == 1.0
        assert actual[0]["team_name"] == "Vintage Vipers"

    def test_without_actual_standings(self, populated_repository):
        populated_repository.backend.delete("actual_standings:2025")
        payload = build_dashboard(populated_repository)
        assert payload["actual_standings"] is None
        assert payload["stats"]["luckiest"] is None
        assert payload["stats"]["most_consistent"] is not None


class TestTeamDetail:
    def test_unknown_team(self, populated_repository):
        assert build_team_detail(populated_repository, "42") is None

    def test_records_and_differential(self, populated_repository):
        detail = build_team_detail(populated_repository, "1")

        assert detail["team_name"] == "Retro Rockets"
        assert detail["true_record"] == {
            "wins": 4,
            "losses": 3,
            "ties": 1,
            "win_percentage": pytest.approx(4 / 7),
            "total_games": 8,
        }
        assert detail["actual_record"]["wins"] == 2
        assert detail["record_differential"]["wins"] == -2
        assert detail["record_differential"]["win_percentage"] == pytest.approx(2 / 3 - 4 / 7)
        assert detail["current_week"] == 3

    def test_weekly_performance(self, populated_repository):
        weeks = build_team_detail(populated_repository, "1")["weekly_performance"]
        assert [w["week"] for w in weeks] == [1, 2, 3]
        assert weeks[0] == {
            "week": 1,
            "score": 120.0,
            "wins": 2,
            "losses": 1,
            "ties": 0,
            "rank": 2,
            "total_teams": 4,
        }
        assert weeks[2]["rank"] == 1
        assert weeks[2]["total_teams"] == 3

    def test_team_skips_missing_week(self, populated_repository):
        detail = build_team_detail(populated_repository, "4")
        assert [w["week"] for w in detail["weekly_performance"]] == [1, 2]
        assert detail["statistics"]["weeks_played"] == 2

    def test_head_to_head(self, populated_repository):
        h2h = build_team_detail(populated_repository, "1")["head_to_head"]
        assert [h["opponent_id"] for h in h2h] == ["3", "4", "2"]
        assert h2h[0]["opponent_name"] == "Arcade Aces"
        assert h2h[2]["ties"] == 1

    def test_without_actual_standings(self, populated_repository):
        populated_repository.backend.delete("actual_standings:2025")
        detail = build_team_detail(populated_repository, "1")
        assert detail["actual_record"] is None
        assert detail["record_differential"] is None


class TestWeeklyAnalysis:
    def test_no_data(self, repository):
        assert build_weekly_analysis(repository, 7) is None

    def test_summary(self, populated_repository):
        analysis = build_weekly_analysis(populated_repository, 1)

        assert analysis["season"] == 2025
        assert analysis["total_teams"] == 4
        assert [s["team_id"] for s in analysis["scores"]] == ["3", "1", "2", "4"]
        assert analysis["highest_score"]["team_id"] == "3"
        assert analysis["lowest_score"]["team_id"] == "4"
        assert analysis["average_score"] == 116.25
        assert analysis["median_score"] == 115.0
        assert len(analysis["matchup_matrix"]) == 6

    def test_tie_in_matrix(self, populated_repository):
        matrix = build_weekly_analysis(populated_repository, 3)["matchup_matrix"]
        tie = next(m for m in matrix if {m["team1_id"], m["team2_id"]} == {"1", "2"})
        assert tie["winner"] == "tie"

    def test_rounding(self):
        analysis = analyze_week(1, {"a": 100.111, "b": 100.0, "c": 100.0}, {})
        assert analysis["average_score"] == 100.04
        assert analysis["median_score"] == 100.0

    def test_only_missing_scores(self):
        assert analyze_week(1, {"a": None}, {}) is None


class TestHelpers:
    def test_latest_week(self, populated_repository):
        assert latest_week(populated_repository.get_all_true_records()) == 3
        assert latest_week({}) == 1

    def test_team_info_placeholder(self):
        assert team_info({}, "9") == {
            "team_id": "9",
            "team_name": "Team 9",
            "owner": "Owner 9",
            "abbrev": "T9",
        }

    def test_status(self, populated_repository):
        status = build_status(populated_repository)
        assert status["cached_weeks"] == [1, 2, 3]
        assert status["teams"] == 4
        assert status["has_actual_standings"] is True
