"""
Offline mock league for development and demos.

Generates ESPN-shaped payloads for a 12-team league so the whole pipeline
(validation, parsing, aggregation, caching, API) runs without network access.
Scores are deterministic for a given seed and week, and the actual standings
are derived from a round-robin schedule over the simulated weeks.
"""

from __future__ import annotations

import random
from typing import Any

from .base import LeagueDataProvider
from .parsers import validate_league_response
from .schemas import ESPNLeagueResponse

MOCK_TEAMS = [
    ("Pixel", "Panthers", "PIX", "Sam", "Smith"),
    ("8-Bit", "Bears", "8BB", "Jordan", "Johnson"),
    ("Retro", "Rockets", "RET", "Taylor", "Williams"),
    ("Classic", "Crusaders", "CLS", "Morgan", "Brown"),
    ("Arcade", "Aces", "ARC", "Casey", "Davis"),
    ("Digital", "Dragons", "DIG", "Riley", "Miller"),
    ("Vintage", "Vikings", "VIN", "Alex", "Wilson"),
    ("Legacy", "Lions", "LEG", "Jamie", "Moore"),
    ("Throwback", "Titans", "THR", "Drew", "Taylor"),
    ("Old School", "Owls", "OLD", "Blake", "Anderson"),
    ("Timeless", "Tigers", "TIM", "Quinn", "Thomas"),
    ("Nostalgic", "Knights", "NOS", "Avery", "Jackson"),
]


class MockLeagueHandler(LeagueDataProvider):
    """Deterministic fake league implementing the provider interface."""

    provider_name = "mock"

    def __init__(
        self,
        *,
        league_id: int = 1044648461,
        season: int = 2025,
        current_week: int = 10,
        final_week: int = 17,
        seed: int = 42,
    ):
        self.league_id = league_id
        self.season = season
        self.current_week = current_week
        self.final_week = final_week
        self.seed = seed
        self.team_ids = list(range(1, len(MOCK_TEAMS) + 1))

    # =========================================================================
    # Simulation
    # =========================================================================

    def pairings(self, week: int) -> list[tuple[int, int]]:
        """Round-robin (circle method) pairings for a week."""
        ids = self.team_ids
        rotation = (week - 1) % (len(ids) - 1)
        rest = ids[1:]
        rest = rest[-rotation:] + rest[:-rotation] if rotation else rest
        order = [ids[0]] + rest
        half = len(order) // 2
        return list(zip(order[:half], reversed(order[half:])))

    def week_scores(self, week: int) -> dict[int, float]:
        rng = random.Random(f"{self.seed}:{week}")
        return {team_id: round(rng.uniform(80, 150), 2) for team_id in self.team_ids}

    def _records(self) -> dict[int, dict[str, float]]:
        totals = {
            team_id: {"wins": 0, "losses": 0, "ties": 0, "points": 0.0, "against": 0.0}
            for team_id in self.team_ids
        }
        for week in range(1, self.current_week):
            scores = self.week_scores(week)
            for home, away in self.pairings(week):
                h, a = scores[home], scores[away]
                totals[home]["points"] += h
                totals[home]["against"] += a
                totals[away]["points"] += a
                totals[away]["against"] += h
                if h > a:
                    totals[home]["wins"] += 1
                    totals[away]["losses"] += 1
                elif a > h:
                    totals[away]["wins"] += 1
                    totals[home]["losses"] += 1
                else:
                    totals[home]["ties"] += 1
                    totals[away]["ties"] += 1
        return totals

    # =========================================================================
    # Payloads
    # =========================================================================

    def build_payload(self, week: int | None = None) -> dict[str, Any]:
        """An ESPN-shaped league response for ``week`` (league view if None)."""
        scoring_period = week or self.current_week
        schedule = []
        if week is not None:
            scores = self.week_scores(week)
            for index, (home, away) in enumerate(self.pairings(week), start=1):
                h, a = scores[home], scores[away]
                schedule.append(
                    {
                        "id": (week - 1) * 100 + index,
                        "matchupPeriodId": week,
                        "home": {"teamId": home, "totalPoints": h},
                        "away": {"teamId": away, "totalPoints": a},
                        "winner": "HOME" if h > a else "AWAY" if a > h else "UNDECIDED",
                    }
                )

        records = self._records()
        teams = []
        members = []
        for team_id, (location, nickname, abbrev, first, last) in zip(self.team_ids, MOCK_TEAMS):
            member_id = f"member-{team_id}"
            members.append({"id": member_id, "firstName": first, "lastName": last})
            totals = records[team_id]
            teams.append(
                {
                    "id": team_id,
                    "name": f"{location} {nickname}",
                    "abbrev": abbrev,
                    "location": location,
                    "nickname": nickname,
                    "owners": [member_id],
                    "record": {
                        "overall": {
                            "wins": totals["wins"],
                            "losses": totals["losses"],
                            "ties": totals["ties"],
                        }
                    },
                    "points": round(totals["points"], 2),
                    "pointsAgainst": round(totals["against"], 2),
                }
            )

        return {
            "id": self.league_id,
            "seasonId": self.season,
            "scoringPeriodId": scoring_period,
            "settings": {"name": "Mock Fantasy League"},
            "teams": teams,
            "schedule": schedule,
            "members": members,
            "status": {
                "currentMatchupPeriod": self.current_week,
                "latestScoringPeriod": self.current_week,
                "finalScoringPeriod": self.final_week,
            },
        }

    async def fetch_weekly_data(self, week: int) -> ESPNLeagueResponse:
        return validate_league_response(self.build_payload(week))

    async def fetch_league_data(self) -> ESPNLeagueResponse:
        return validate_league_response(self.build_payload())
