"""
Pydantic models for league entities.

These models are used for:
- Typed inputs and outputs of the true-record engine
- Serializing records into the key/value cache and reading them back
- API response shaping
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Weekly Scores
# =============================================================================


class WeekScores(BaseModel):
    """One week of scores: team_id -> points."""

    week: int
    scores: dict[str, Optional[float]] = Field(default_factory=dict)

    @field_validator("scores", mode="before")
    @classmethod
    def _stringify_team_ids(cls, value):
        # ESPN team ids are ints; cache round-trips make them strings
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value

    def score_for(self, team_id: str) -> Optional[float]:
        return self.scores.get(team_id)


# =============================================================================
# True Record Models
# =============================================================================


class WeeklyRecord(BaseModel):
    """A team's all-play tally for a single week. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)

    @property
    def games(self) -> int:
        """Opponents compared against, ties included."""
        return self.wins + self.losses + self.ties


class TrueRecord(BaseModel):
    """
    Cumulative all-play record for one team across a season.

    ``wins``/``losses``/``ties`` always equal the sums over ``weekly_records``;
    records are rebuilt from scratch on every refresh rather than patched.
    """

    team_id: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    weekly_records: dict[int, WeeklyRecord] = Field(default_factory=dict)

    @field_validator("team_id", mode="before")
    @classmethod
    def _coerce_team_id(cls, value):
        return str(value)

    def add_week(self, week: int, record: WeeklyRecord) -> None:
        """Fold one week's tally into the running totals."""
        self.wins += record.wins
        self.losses += record.losses
        self.ties += record.ties
        self.weekly_records[week] = record

    @property
    def decisions(self) -> int:
        """Wins plus losses; ties are excluded from win percentage."""
        return self.wins + self.losses

    @property
    def win_percentage(self) -> float:
        return self.wins / self.decisions if self.decisions else 0.0

    @property
    def weeks(self) -> list[int]:
        return sorted(self.weekly_records)


# =============================================================================
# ESPN-sourced Models
# =============================================================================


class ActualStanding(BaseModel):
    """A team's real head-to-head record as reported by ESPN."""

    team_id: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)
    points: float = 0.0
    points_against: float = 0.0

    @field_validator("team_id", mode="before")
    @classmethod
    def _coerce_team_id(cls, value):
        return str(value)

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        return self.wins / self.games if self.games else 0.0


class TeamMetadata(BaseModel):
    """Display information for a team. Has no bearing on computation."""

    name: str
    owner: str
    abbrev: str

    @classmethod
    def placeholder(cls, team_id: str) -> "TeamMetadata":
        """Fallback used when ESPN metadata is missing for a team."""
        return cls(name=f"Team {team_id}", owner=f"Owner {team_id}", abbrev=f"T{team_id}")
