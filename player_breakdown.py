#!/usr/bin/env python3
"""
Player FTP Breakdown CLI

Shows how a player's fantasy points were earned, per category, plus their
best week and month.

Usage:
    python player_breakdown.py --player "Jane Smith"
    python player_breakdown.py --player "Jane Smith" --season "2024/25"
"""

import argparse
import logging

from clubftp import ALL_TIME, ClubStatsFetcher, summarize_player_breakdown
from clubftp.constants import CATEGORIES
from clubftp.logging_config import setup_logging
from clubftp.totw import season_filter


def main():
    parser = argparse.ArgumentParser(description="Player fantasy points breakdown")
    parser.add_argument("--player", "-p", required=True, help="Player name")
    parser.add_argument(
        "--season", "-s",
        default=ALL_TIME,
        help='Season label (e.g., "2024/25"); defaults to all time',
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory with exported tables",
    )
    args = parser.parse_args()

    setup_logging(level=logging.WARNING, log_to_file=False)

    fetcher = ClubStatsFetcher(args.data_dir)
    records = fetcher.fetch_match_stats(args.player, season=season_filter(args.season))
    summary = summarize_player_breakdown(records)

    print(f"{args.player} ({args.season}): {summary.total_points} FTP from {summary.match_count} matches")
    for category in CATEGORIES:
        if category in summary.breakdown:
            print(f"  {category}: {summary.values[category]:g} -> {summary.breakdown[category]:g} pts")

    if summary.highest_scoring_week:
        week = summary.highest_scoring_week
        print(f"  Best week: {week.period} ({week.total_points:g} pts)")
    if summary.highest_scoring_month:
        month = summary.highest_scoring_month
        print(f"  Best month: {month.period} ({month.total_points:g} pts)")


if __name__ == "__main__":
    main()
