"""Tests for the command-line interface."""

import json
import sys

import pytest

from true_champion import cli


@pytest.fixture
def run_cli(monkeypatch, settings):
    """Run ``true-champion`` with the test settings and a shared repository."""

    def run(*argv, repository=None):
        monkeypatch.setattr(sys, "argv", ["true-champion", *argv])
        monkeypatch.setattr(cli, "get_settings", lambda: settings)
        if repository is not None:
            monkeypatch.setattr(cli, "create_repository", lambda s: repository)
        return cli.main()

    return run


# =========================================================================
# Read commands
# =========================================================================


class TestReadCommands:
    def test_no_command_prints_help(self, run_cli, capsys):
        assert run_cli() == 0
        assert "populate-test-data" in capsys.readouterr().out

    def test_standings_json(self, run_cli, populated_repository, capsys):
        assert run_cli("standings", "--json", repository=populated_repository) == 0
        data = json.loads(capsys.readouterr().out)
        assert [row["team_id"] for row in data["standings"]] == ["1", "2", "4", "3"]

    def test_standings_table(self, run_cli, populated_repository, capsys):
        assert run_cli("standings", repository=populated_repository) == 0
        out = capsys.readouterr().out
        assert "True Standings - 2025" in out
        assert "Retro Rockets" in out

    def test_standings_empty(self, run_cli, repository):
        assert run_cli("standings", repository=repository) == 1

    def test_team(self, run_cli, populated_repository, capsys):
        assert run_cli("team", "3", repository=populated_repository) == 0
        out = capsys.readouterr().out
        assert "Arcade Aces (Sam Park)" in out
        assert "True record: 3-5-0" in out

    def test_unknown_team(self, run_cli, populated_repository):
        assert run_cli("team", "42", repository=populated_repository) == 1

    def test_week_json(self, run_cli, populated_repository, capsys):
        assert run_cli("week", "1", "--json", repository=populated_repository) == 0
        assert json.loads(capsys.readouterr().out)["average_score"] == 116.25

    def test_week_out_of_range(self, run_cli):
        with pytest.raises(SystemExit):
            run_cli("week", "19")

    def test_status(self, run_cli, populated_repository, capsys):
        assert run_cli("status", repository=populated_repository) == 0
        out = capsys.readouterr().out
        assert "Cached weeks: 1, 2, 3" in out
        assert "Teams with true records: 4" in out


# =========================================================================
# Write commands
# =========================================================================


class TestWriteCommands:
    def test_populate_test_data(self, run_cli, repository):
        assert run_cli("populate-test-data", "--weeks", "3", "--seed", "5", repository=repository) == 0
        assert repository.cached_weeks() == [1, 2, 3]
        assert len(repository.get_all_true_records()) == 12
        assert repository.get_last_update() is not None

    def test_update_with_mock(self, run_cli, settings, repository):
        assert run_cli("update", "--mock", "--max-week", "2", repository=repository) == 0
        assert repository.cached_weeks() == [1, 2]

    def test_update_without_league_id(self, run_cli, settings, repository):
        settings.espn_league_id = ""
        assert run_cli("update", repository=repository) == 1

    def test_clear(self, run_cli, populated_repository):
        assert run_cli("clear", repository=populated_repository) == 0
        assert populated_repository.cached_weeks() == []
        assert populated_repository.get_all_true_records() == {}
