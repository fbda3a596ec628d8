#!/usr/bin/env python3
"""
Club TOTW CLI

Assembles a season, all-time, or weekly Team of the Week from exported
club tables, recomputing every player's FTP score from match stats.

Usage:
    python compute_totw.py --season "2024/25"
    python compute_totw.py --season "All Time" --output web/totw/all_time.json
    python compute_totw.py --season "2024/25" --week 7
"""

import argparse
import logging
import sys
from pathlib import Path

from clubftp import ClubStatsFetcher, TOTWAssembler
from clubftp.logging_config import setup_logging, totw_levels
from clubftp.utils import save_json
from clubftp.validators import validate_totw_result


def main():
    parser = argparse.ArgumentParser(description="Club Team of the Week calculator")
    parser.add_argument(
        "--season", "-s",
        required=True,
        help='Season label (e.g., "2024/25") or "All Time"',
    )
    parser.add_argument(
        "--week", "-w",
        type=int,
        default=None,
        help="Week number (omit for the season TOTW)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory with exported tables",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the TOTW JSON",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write a log file to this directory",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Trace formation parsing and per-player stat fetches",
    )

    args = parser.parse_args()

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=bool(args.log_dir),
        module_levels=totw_levels(quiet=args.quiet, verbose=args.verbose),
    )

    if not args.season.strip():
        print("❌ Season parameter is required")
        sys.exit(1)

    assembler = TOTWAssembler(ClubStatsFetcher(args.data_dir))
    if args.week is None:
        result = assembler.compute_totw(args.season)
    else:
        result = assembler.compute_weekly_totw(args.season, args.week)

    if result.is_empty:
        scope = args.season if args.week is None else f"{args.season} week {args.week}"
        print(f"⚠️  No TOTW data found for {scope}")
    elif not args.quiet:
        totw = result.totw_data
        print("\n" + "=" * 60)
        print(f"TEAM OF THE WEEK: {totw.season}" + (f" week {totw.week}" if totw.week else ""))
        print(f"Formation: {totw.formation}")
        print("=" * 60)
        for player in result.players:
            star = " ★" if player.player_name == totw.star_man else ""
            print(f"  {player.position:<3} {player.player_name}: {player.ftp_score} pts{star}")
        print(f"\n  TOTAL: {totw.totw_score} points")
        print(f"  Star man: {totw.star_man} ({totw.star_man_score} pts)")
        print(f"  Players who featured: {totw.player_count}")

    for error in validate_totw_result(result):
        print(f"⚠️  {error}")

    if args.output:
        save_json(args.output, result)
        print(f"Saved: {args.output}")


if __name__ == "__main__":
    main()
