"""Tests for season aggregation of all-play records."""

import pytest
from pydantic import ValidationError

from true_champion.core.models import TrueRecord, WeeklyRecord, WeekScores
from true_champion.records import DuplicateWeekError, aggregate_season


class TestAggregateSeason:
    def test_two_weeks(self):
        weeks = [
            WeekScores(week=1, scores={"A": 100, "B": 90}),
            WeekScores(week=2, scores={"A": 80, "B": 95}),
        ]
        result = aggregate_season(weeks)

        assert result["A"].wins == 1 and result["A"].losses == 1
        assert result["A"].weekly_records == {
            1: WeeklyRecord(wins=1, losses=0),
            2: WeeklyRecord(wins=0, losses=1),
        }
        assert result["B"].wins == 1 and result["B"].losses == 1

    def test_team_missing_a_week_is_not_zero_filled(self):
        weeks = [
            WeekScores(week=1, scores={"A": 100, "B": 90, "C": 80}),
            WeekScores(week=2, scores={"A": 100, "B": 110}),
        ]
        result = aggregate_season(weeks)

        assert result["C"].weeks == [1]
        assert 2 not in result["C"].weekly_records
        assert (result["C"].wins, result["C"].losses) == (0, 2)

    def test_order_insensitive(self):
        weeks = [
            WeekScores(week=3, scores={"A": 70, "B": 75}),
            WeekScores(week=1, scores={"A": 100, "B": 90}),
            WeekScores(week=2, scores={"A": 80, "B": 80}),
        ]
        forward = aggregate_season(sorted(weeks, key=lambda w: w.week))
        shuffled = aggregate_season(weeks)
        assert forward == shuffled

    def test_duplicate_week_rejected(self):
        weeks = [
            WeekScores(week=1, scores={"A": 100, "B": 90}),
            WeekScores(week=1, scores={"A": 80, "B": 95}),
        ]
        with pytest.raises(DuplicateWeekError) as exc_info:
            aggregate_season(weeks)
        assert exc_info.value.week == 1
        assert isinstance(exc_info.value, ValueError)

    def test_empty_input(self):
        assert aggregate_season([]) == {}

    def test_ties_accumulate(self):
        weeks = [
            WeekScores(week=1, scores={"A": 100, "B": 100}),
            WeekScores(week=2, scores={"A": 100, "B": 100}),
        ]
        result = aggregate_season(weeks)
        assert result["A"].ties == 2
        assert result["A"].decisions == 0
        assert result["A"].win_percentage == 0.0

    def test_totals_equal_weekly_sums(self, sample_weeks):
        result = aggregate_season(sample_weeks)
        for record in result.values():
            assert record.wins == sum(w.wins for w in record.weekly_records.values())
            assert record.losses == sum(w.losses for w in record.weekly_records.values())
            assert record.ties == sum(w.ties for w in record.weekly_records.values())

    def test_sample_season_totals(self, sample_weeks):
        result = aggregate_season(sample_weeks)
        assert (result["1"].wins, result["1"].losses, result["1"].ties) == (4, 3, 1)
        assert (result["2"].wins, result["2"].losses, result["2"].ties) == (4, 3, 1)
        assert (result["3"].wins, result["3"].losses, result["3"].ties) == (3, 5, 0)
        assert (result["4"].wins, result["4"].losses, result["4"].ties) == (3, 3, 0)

    def test_generator_input(self, sample_weeks):
        assert aggregate_season(w for w in sample_weeks) == aggregate_season(sample_weeks)


class TestTrueRecordModel:
    def test_round_trips_through_json(self, sample_weeks):
        record = aggregate_season(sample_weeks)["1"]
        restored = TrueRecord.model_validate(record.model_dump(mode="json"))
        assert restored == record
        assert restored.weeks == [1, 2, 3]

    def test_team_id_coerced_to_string(self):
        assert TrueRecord(team_id=7).team_id == "7"

    def test_weekly_record_is_frozen(self):
        record = WeeklyRecord(wins=1)
        with pytest.raises(ValidationError):
            record.wins = 2
