"""Summing FTP points across matches for one player."""

from typing import Callable, Iterable, Optional

from .config import get_scoring_weights
from .models import AggregatedPlayerScore, MatchStatRecord, PeriodScore, PlayerBreakdownSummary
from .schemas import ScoringWeights
from .scoring import calculate_ftp_breakdown, round_half_up


def total_points(
    records: Iterable[MatchStatRecord],
    weights: Optional[ScoringWeights] = None,
) -> float:
    """Unrounded sum of every category's points over every match."""
    weights = weights or get_scoring_weights()
    total = 0.0
    for record in records:
        for entry in calculate_ftp_breakdown(record, weights):
            total += entry.points
    return total


def aggregate_player_score(
    player_name: str,
    records: Iterable[MatchStatRecord],
    position: str = '',
    slot: str = '',
    weights: Optional[ScoringWeights] = None,
) -> AggregatedPlayerScore:
    """
    Compute a player's FTP score over a scope.

    Records are expected to be pre-filtered to the scope (one week, one
    season, or all time). Points are summed unrounded across all matches
    and categories, and rounded half up exactly once at the end, so
    fractional categories cannot accumulate per-match rounding error.

    Args:
        player_name: Player the records belong to
        records: The player's match stats within the scope (may be empty)
        position: Position bucket the player fills (GK/DEF/MID/FWD)
        slot: Slot key that selected the player, if any
        weights: Weight table (default: configured weights)

    Returns:
        AggregatedPlayerScore (score 0 for no records)
    """
    score = round_half_up(total_points(records, weights))
    return AggregatedPlayerScore(
        player_name=player_name,
        position=position,
        ftp_score=score,
        slot=slot,
    )


def _highest_period(
    scored: list[tuple[MatchStatRecord, float]],
    key: Callable[[MatchStatRecord], Optional[str]],
) -> Optional[PeriodScore]:
    # dicts keep first-seen order, so the earliest of tied periods wins
    groups: dict[str, list[tuple[MatchStatRecord, float]]] = {}
    for record, points in scored:
        period = key(record)
        if period:
            groups.setdefault(period, []).append((record, points))

    best: Optional[PeriodScore] = None
    for period, matches in groups.items():
        period_total = sum(points for _, points in matches)
        if best is None or period_total > best.total_points:
            best = PeriodScore(
                period=period,
                season=matches[0][0].season,
                total_points=period_total,
                match_count=len(matches),
            )
    return best


def summarize_player_breakdown(
    records: Iterable[MatchStatRecord],
    weights: Optional[ScoringWeights] = None,
) -> PlayerBreakdownSummary:
    """
    Per-category FTP totals for a player across matches.

    Only categories a match would display (``show``) are accumulated into
    ``breakdown`` and ``values``; the overall total still counts every
    entry so it matches aggregate_player_score(). Also reports the best
    week and month by unrounded points.

    Args:
        records: The player's match stats, in match order
        weights: Weight table (default: configured weights)

    Returns:
        PlayerBreakdownSummary
    """
    weights = weights or get_scoring_weights()
    summary = PlayerBreakdownSummary()
    scored: list[tuple[MatchStatRecord, float]] = []
    running = 0.0

    for record in records:
        match_total = 0.0
        for entry in calculate_ftp_breakdown(record, weights):
            match_total += entry.points
            if entry.show:
                summary.breakdown[entry.stat] = summary.breakdown.get(entry.stat, 0) + entry.points
                summary.values[entry.stat] = summary.values.get(entry.stat, 0) + entry.value
        scored.append((record, match_total))
        running += match_total

    summary.match_count = len(scored)
    summary.total_points = round_half_up(running)
    summary.highest_scoring_week = _highest_period(scored, lambda r: r.season_week)
    summary.highest_scoring_month = _highest_period(scored, lambda r: r.season_month)
    return summary
