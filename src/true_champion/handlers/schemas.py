"""
Pydantic schemas for ESPN Fantasy Football v3 league responses.

Only the fields the app reads are declared; everything else passes through
(``extra="allow"``). Nested blocks ESPN sometimes omits are optional.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _ESPNModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ESPNTeamRecordTotals(_ESPNModel):
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @model_validator(mode="before")
    @classmethod
    def _unwrap_overall(cls, data):
        # mTeam view nests totals under "overall"
        if isinstance(data, dict) and isinstance(data.get("overall"), dict):
            return data["overall"]
        return data


class ESPNTeam(_ESPNModel):
    id: int
    name: Optional[str] = None
    abbrev: Optional[str] = None
    location: Optional[str] = None
    nickname: Optional[str] = None
    owners: list[str] = Field(default_factory=list)
    record: Optional[ESPNTeamRecordTotals] = None
    points: Optional[float] = None
    points_against: Optional[float] = Field(default=None, alias="pointsAgainst")

    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.location and self.nickname:
            return f"{self.location} {self.nickname}"
        return f"Team {self.id}"


class ESPNMember(_ESPNModel):
    id: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else f"Owner {self.id}"


class ESPNMatchupSide(_ESPNModel):
    team_id: int = Field(alias="teamId")
    total_points: float = Field(alias="totalPoints")


class ESPNMatchup(_ESPNModel):
    id: int
    matchup_period_id: int = Field(alias="matchupPeriodId")
    home: ESPNMatchupSide
    # Missing on bye weeks
    away: Optional[ESPNMatchupSide] = None
    winner: Optional[str] = None


class ESPNStatus(_ESPNModel):
    current_matchup_period: int = Field(alias="currentMatchupPeriod")
    latest_scoring_period: int = Field(alias="latestScoringPeriod")
    final_scoring_period: Optional[int] = Field(default=None, alias="finalScoringPeriod")


class ESPNLeagueResponse(_ESPNModel):
    id: int
    season_id: int = Field(alias="seasonId")
    scoring_period_id: int = Field(alias="scoringPeriodId")
    settings: Optional[dict] = None
    teams: list[ESPNTeam] = Field(default_factory=list)
    schedule: list[ESPNMatchup] = Field(default_factory=list)
    members: list[ESPNMember] = Field(default_factory=list)
    status: ESPNStatus
