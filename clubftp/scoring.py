"""FTP breakdown calculation for a single match."""

import math
from typing import Optional

from .config import get_scoring_weights
from .constants import (
    ASSISTS,
    CLEAN_SHEETS,
    GOALS_CONCEDED,
    GOALS_SCORED,
    MAN_OF_THE_MATCH,
    MINUTES_PLAYED,
    OWN_GOALS,
    PENALTIES_CONCEDED,
    PENALTIES_MISSED,
    PENALTIES_SAVED,
    PENALTIES_SCORED,
    RED_CARDS,
    SAVES,
    YELLOW_CARDS,
)
from .models import FTPBreakdownEntry, MatchStatRecord
from .schemas import ScoringWeights


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (-0.5 -> 0, 2.5 -> 3)."""
    whole = math.floor(value)
    # Compare the fraction rather than adding 0.5, which can round up in float.
    return int(whole) + (1 if value - whole >= 0.5 else 0)


def _minutes_points(minutes: float, weights: ScoringWeights) -> float:
    if minutes >= weights.minutes_full_threshold:
        return weights.minutes_full
    if minutes > 0:
        return weights.minutes_partial
    return 0


def calculate_ftp_breakdown(
    record: MatchStatRecord,
    weights: Optional[ScoringWeights] = None,
) -> list[FTPBreakdownEntry]:
    """
    Break one match down into FTP points per category.

    Every category is always emitted, in a fixed order, with 0 points when
    the stat is zero or does not apply to the player's class.

    Scoring (default weights):
        - Man of the Match: 3 points
        - Minutes played: 2 points for 60+, 1 point for any appearance
        - Goals scored / Penalties scored: GK & DEF 6, MID 5, FWD 4 each
        - Assists: 3 points each
        - Clean Sheets: GK & DEF 4, MID 1 (only with 0 conceded)
        - Goals Conceded: GK & DEF -0.5 per goal, rounded half up per match
        - Yellow Cards: -1, Red Cards: -3
        - Own Goals: -2, Penalties Missed: -2
        - Saves: 1 point per 3 saves (goalkeepers only)
        - Penalties Saved: 5 points each
        - Penalties Conceded: 0

    Args:
        record: The player's stats for one match
        weights: Weight table (default: configured weights)

    Returns:
        Ordered list of FTPBreakdownEntry
    """
    weights = weights or get_scoring_weights()
    pos = record.position_class

    minutes = record.minutes
    mom = 1 if record.mom else 0

    conceded = record.conceded
    clean_sheet_pts = 0.0
    if conceded == 0 and record.clean_sheets > 0:
        clean_sheet_pts = record.clean_sheets * weights.clean_sheets.get(pos, 0)

    conceded_pts = 0
    if conceded > 0 and pos in weights.goals_conceded:
        conceded_pts = round_half_up(conceded * weights.goals_conceded[pos])

    saves_pts = 0
    if pos in weights.saves_positions:
        saves_pts = math.floor(record.saves / weights.saves_per_point)

    return [
        FTPBreakdownEntry(MAN_OF_THE_MATCH, mom, mom * weights.man_of_the_match, mom > 0),
        FTPBreakdownEntry(MINUTES_PLAYED, minutes, _minutes_points(minutes, weights), True),
        FTPBreakdownEntry(
            GOALS_SCORED,
            record.goals,
            record.goals * weights.goals_scored.get(pos, 0),
            record.goals > 0,
        ),
        FTPBreakdownEntry(ASSISTS, record.assists, record.assists * weights.assists, record.assists > 0),
        FTPBreakdownEntry(
            CLEAN_SHEETS,
            record.clean_sheets,
            clean_sheet_pts,
            conceded == 0 and record.clean_sheets > 0,
        ),
        FTPBreakdownEntry(GOALS_CONCEDED, conceded, conceded_pts, conceded > 0 and pos in weights.goals_conceded),
        FTPBreakdownEntry(
            YELLOW_CARDS,
            record.yellow_cards,
            record.yellow_cards * weights.yellow_cards,
            record.yellow_cards > 0,
        ),
        FTPBreakdownEntry(RED_CARDS, record.red_cards, record.red_cards * weights.red_cards, record.red_cards > 0),
        FTPBreakdownEntry(OWN_GOALS, record.own_goals, record.own_goals * weights.own_goals, record.own_goals > 0),
        FTPBreakdownEntry(
            PENALTIES_MISSED,
            record.penalties_missed,
            record.penalties_missed * weights.penalties_missed,
            record.penalties_missed > 0,
        ),
        FTPBreakdownEntry(
            PENALTIES_SCORED,
            record.penalties_scored,
            record.penalties_scored * weights.penalties_scored.get(pos, 0),
            record.penalties_scored > 0,
        ),
        FTPBreakdownEntry(SAVES, record.saves, saves_pts, record.saves > 0),
        FTPBreakdownEntry(
            PENALTIES_SAVED,
            record.penalties_saved,
            record.penalties_saved * weights.penalties_saved,
            record.penalties_saved > 0,
        ),
        FTPBreakdownEntry(
            PENALTIES_CONCEDED,
            record.penalties_conceded,
            record.penalties_conceded * weights.penalties_conceded,
            record.penalties_conceded > 0,
        ),
    ]


def match_points(record: MatchStatRecord, weights: Optional[ScoringWeights] = None) -> float:
    """Unrounded FTP total for one match."""
    return sum(entry.points for entry in calculate_ftp_breakdown(record, weights))
