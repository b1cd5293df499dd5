#!/usr/bin/env python3
"""
Command-line interface for True Champion.

Usage:
    true-champion update                      # Fetch weeks 1..current from ESPN
    true-champion update --max-week 8
    true-champion populate-test-data --weeks 10 --seed 7
    true-champion standings
    true-champion team 3
    true-champion week 5
    true-champion status
    true-champion clear
    true-champion serve --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .core.config import Settings, get_settings
from .core.http import ExternalAPIError
from .handlers import MockLeagueHandler, create_provider
from .handlers.base import LeagueDataProvider
from .repositories import InMemoryBackend, create_repository
from .repositories.league import LeagueRepository
from .services.league import (
    build_standings,
    build_status,
    build_team_detail,
    build_weekly_analysis,
)
from .services.updater import UpdateOptions, UpdateResult, update_all_data

logger = logging.getLogger("true_champion.cli")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_repository(settings: Settings) -> LeagueRepository:
    repository = create_repository(settings)
    if isinstance(repository.backend, InMemoryBackend):
        logger.warning("Using the in-memory cache; data will not outlive this command")
    return repository


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _log_update_result(result: UpdateResult) -> None:
    logger.info(
        "Status: %s | weeks: %d | teams: %d | errors: %d | %.2fs",
        "Success" if result.success else "Partial Success",
        result.weeks_processed,
        result.teams_updated,
        len(result.errors),
        result.duration,
    )
    for index, error in enumerate(result.errors, start=1):
        logger.warning("  %d. %s", index, error)


async def _run_update(
    provider: LeagueDataProvider,
    repository: LeagueRepository,
    options: UpdateOptions,
) -> UpdateResult:
    try:
        return await update_all_data(provider, repository, options)
    finally:
        await provider.close()


def cmd_update(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch the season from ESPN (or the mock league) into the cache."""
    try:
        provider = create_provider(settings, mock=True if args.mock else None)
    except ValueError as e:
        logger.error("Cannot build league provider: %s", e)
        return 1

    options = UpdateOptions(
        max_week=args.max_week,
        default_max_week=settings.default_max_week,
        request_delay=settings.espn_request_delay,
    )
    result = asyncio.run(_run_update(provider, get_repository(settings), options))
    _log_update_result(result)
    return 0 if result.success else 1


def cmd_populate_test_data(args: argparse.Namespace, settings: Settings) -> int:
    """Fill the cache with a generated 12-team league (no ESPN calls)."""
    provider = MockLeagueHandler(
        season=settings.espn_season,
        current_week=args.weeks + 1,
        seed=args.seed,
    )
    options = UpdateOptions(max_week=args.weeks, request_delay=0)
    result = asyncio.run(_run_update(provider, get_repository(settings), options))
    _log_update_result(result)
    return 0 if result.success else 1


def cmd_standings(args: argparse.Namespace, settings: Settings) -> int:
    """Print the true standings."""
    standings = build_standings(get_repository(settings))
    if standings is None:
        logger.info("No standings cached. Run 'true-champion update' first.")
        return 1

    if args.json:
        _print_json(standings)
        return 0

    print(f"\nTrue Standings - {standings['season']}")
    print("=" * 72)
    print(f"{'Rank':<5} {'Team':<28} {'W':>4} {'L':>4} {'T':>3} {'Pct':>6} {'Avg':>8}")
    for row in standings["standings"]:
        print(
            f"{row['rank']:<5} {row['team_name'][:28]:<28} {row['wins']:>4} "
            f"{row['losses']:>4} {row['ties']:>3} {row['win_percentage']:>6.3f} "
            f"{row['average_points']:>8.2f}"
        )
    print(f"\nLast update: {standings['last_update'] or 'Never'}")
    return 0


def cmd_team(args: argparse.Namespace, settings: Settings) -> int:
    """Print one team's detail."""
    detail = build_team_detail(get_repository(settings), args.team_id)
    if detail is None:
        logger.error("Team %s not found", args.team_id)
        return 1

    if args.json:
        _print_json(detail)
        return 0

    true_record = detail["true_record"]
    stats = detail["statistics"]
    print(f"\n{detail['team_name']} ({detail['owner']})")
    print("=" * 50)
    print(
        f"True record: {true_record['wins']}-{true_record['losses']}-{true_record['ties']} "
        f"({true_record['win_percentage']:.3f})"
    )
    if detail["actual_record"]:
        actual = detail["actual_record"]
        print(
            f"Actual record: {actual['wins']}-{actual['losses']}-{actual['ties']} "
            f"({actual['win_percentage']:.3f})"
        )
    print(
        f"Avg: {stats['average_points']:.2f}  Std dev: {stats['consistency']:.2f}  "
        f"Total: {stats['total_points']:.2f}"
    )
    print("\nWeek  Score    W-L-T     Rank")
    for week in detail["weekly_performance"]:
        print(
            f"{week['week']:<5} {week['score']:>7.2f}  "
            f"{week['wins']}-{week['losses']}-{week['ties']:<5} "
            f"{week['rank']}/{week['total_teams']}"
        )
    return 0


def cmd_week(args: argparse.Namespace, settings: Settings) -> int:
    """Print the analysis for one week."""
    analysis = build_weekly_analysis(get_repository(settings), args.week)
    if analysis is None:
        logger.error("No data available for week %d", args.week)
        return 1

    if args.json:
        _print_json(analysis)
        return 0

    print(f"\nWeek {analysis['week']} - {analysis['total_teams']} teams")
    print("=" * 50)
    for row in analysis["scores"]:
        print(f"{row['rank']:>3}. {row['team_name'][:30]:<30} {row['score']:>8.2f}")
    print(f"\nAverage: {analysis['average_score']:.2f}  Median: {analysis['median_score']:.2f}")
    return 0


def cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    """Show what is cached for the configured season."""
    status = build_status(get_repository(settings))
    print("\nTrue Champion Cache Status")
    print("=" * 50)
    print(f"League: {status['league_id'] or '(not set)'}  Season: {status['season']}")
    weeks = status["cached_weeks"]
    print(f"Cached weeks: {', '.join(map(str, weeks)) if weeks else 'none'}")
    print(f"Teams with true records: {status['teams']}")
    print(f"Actual standings cached: {'yes' if status['has_actual_standings'] else 'no'}")
    print(f"Last update: {status['last_update'] or 'Never'}")
    return 0


def cmd_clear(args: argparse.Namespace, settings: Settings) -> int:
    """Delete the season's cached scores, records and standings."""
    removed = get_repository(settings).clear_season_data()
    logger.info("Removed %d entries", removed)
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "true_champion.api.main:create_app",
        factory=True,
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="True Champion CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    update_parser = subparsers.add_parser("update", help="Fetch the season from ESPN into the cache")
    update_parser.add_argument("--max-week", type=int, choices=range(1, 19), metavar="N",
                               help="Last week to fetch (default: current week)")
    update_parser.add_argument("--mock", action="store_true", help="Use the generated mock league")

    populate_parser = subparsers.add_parser(
        "populate-test-data",
        help="Fill the cache with a generated 12-team league",
    )
    populate_parser.add_argument("--weeks", type=int, default=10, choices=range(1, 19), metavar="N",
                                 help="Number of weeks to generate (default: 10)")
    populate_parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")

    standings_parser = subparsers.add_parser("standings", help="Show true standings")
    standings_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    team_parser = subparsers.add_parser("team", help="Show one team's detail")
    team_parser.add_argument("team_id", help="League team ID")
    team_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    week_parser = subparsers.add_parser("week", help="Show one week's analysis")
    week_parser.add_argument("week", type=int, choices=range(1, 19), metavar="WEEK")
    week_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    subparsers.add_parser("status", help="Show cache status")
    subparsers.add_parser("clear", help="Delete cached data for the season")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging(settings.log_level)

    commands = {
        "update": cmd_update,
        "populate-test-data": cmd_populate_test_data,
        "standings": cmd_standings,
        "team": cmd_team,
        "week": cmd_week,
        "status": cmd_status,
        "clear": cmd_clear,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 1
    try:
        return cmd_func(args, settings)
    except ExternalAPIError as e:
        logger.error("League provider error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
