"""Sanity checks for breakdowns, player scores and assembled TOTWs."""

from collections import Counter

from .formation import resolve_formation
from .models import AggregatedPlayerScore, FTPBreakdownEntry, TOTWResult


def validate_breakdown(entries: list[FTPBreakdownEntry], expected_total: float) -> list[str]:
    """
    Check that a match breakdown is complete and adds up.

    Args:
        entries: Breakdown from calculate_ftp_breakdown()
        expected_total: Match total it should sum to

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    stats = [e.stat for e in entries]
    duplicates = sorted(stat for stat, count in Counter(stats).items() if count > 1)
    if duplicates:
        warnings.append(f'Breakdown repeats categories: {", ".join(duplicates)}')

    breakdown_sum = sum(e.points for e in entries)
    diff = abs(breakdown_sum - expected_total)
    if diff > 1e-9:
        warnings.append(
            f'Breakdown sum ({breakdown_sum:g}) != total ({expected_total:g}) - difference: {diff:g}'
        )

    return warnings


def validate_player_score(score: AggregatedPlayerScore) -> list[str]:
    """
    Check that a player's aggregate score is reasonable.

    Sanity checks:
    - Score is an integer (rounded once)
    - Score in a plausible season range (-20 to 200)
    - Player has a name and a known position

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    if not isinstance(score.ftp_score, int) or isinstance(score.ftp_score, bool):
        warnings.append(f'{score.player_name} has non-integer score: {score.ftp_score!r}')
        return warnings

    if score.ftp_score > 200:
        warnings.append(
            f'{score.player_name} scored {score.ftp_score} pts (unusually high - check for scoring bug)'
        )
    elif score.ftp_score < -20:
        warnings.append(
            f'{score.player_name} scored {score.ftp_score} pts (unusually low - check for scoring bug)'
        )

    if not score.player_name.strip():
        warnings.append(f'Blank player name in slot {score.slot or "?"}')

    if score.position not in ('GK', 'DEF', 'MID', 'FWD'):
        warnings.append(f'{score.player_name} has unknown position: {score.position!r}')

    return warnings


def validate_totw_result(result: TOTWResult) -> list[str]:
    """
    Check that an assembled TOTW is internally consistent.

    Checks:
    - Team score equals the sum of the listed players' scores
    - Star man score is the highest score among listed players
    - Players per position fit the formation

    Returns:
        List of error messages (empty if valid)
    """
    errors: list[str] = []
    totw = result.totw_data

    if totw is None:
        if result.players:
            errors.append(f'Empty TOTW lists {len(result.players)} players')
        return errors

    players_sum = sum(p.ftp_score for p in result.players)
    if totw.totw_score != players_sum:
        errors.append(f'TOTW score ({totw.totw_score}) != sum of player scores ({players_sum})')

    if result.players:
        best = max(p.ftp_score for p in result.players)
        if totw.star_man_score != best:
            errors.append(f'Star man {totw.star_man} scored {totw.star_man_score}, but best score is {best}')
        if totw.star_man not in {p.player_name for p in result.players}:
            errors.append(f'Star man {totw.star_man!r} is not in the team')
    elif totw.star_man:
        errors.append(f'Star man {totw.star_man!r} named for a team with no players')

    formation = resolve_formation(totw.formation)
    limits = {
        'GK': 1,
        'DEF': formation.defenders,
        'MID': formation.midfielders,
        'FWD': formation.forwards,
    }
    counts = Counter(p.position for p in result.players)
    for pos, limit in limits.items():
        if counts[pos] > limit:
            errors.append(f'TOTW has {counts[pos]} {pos} players (formation allows {limit})')

    return errors
