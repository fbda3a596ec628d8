"""Data models for the club FTP engine."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .constants import MATCH_ROW_FIELDS
from .utils import to_number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class MatchStatRecord:
    """One player's statistics for one match."""
    minutes: float = 0
    mom: bool = False
    goals: float = 0
    assists: float = 0
    conceded: float = 0
    clean_sheets: float = 0
    yellow_cards: float = 0
    red_cards: float = 0
    saves: float = 0
    own_goals: float = 0
    penalties_scored: float = 0
    penalties_missed: float = 0
    penalties_conceded: float = 0
    penalties_saved: float = 0
    position_class: str = ''
    # Context for period grouping, not used for scoring
    season: Optional[str] = None
    season_week: Optional[str] = None
    season_month: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> 'MatchStatRecord':
        """
        Build a record from a raw match-detail row.

        Numeric fields default to 0 when absent or unparsable. Minutes are
        read from ``minutes`` and fall back to ``min``. The man-of-the-match
        flag is true only for the literal values 1 or True.
        """
        minutes = to_number(row.get('minutes')) or to_number(row.get('min'))
        raw_mom = row.get('mom')
        mom = raw_mom is True or (type(raw_mom) in (int, float) and raw_mom == 1)
        counts = {attr: to_number(row.get(key)) for key, attr in MATCH_ROW_FIELDS.items()}
        return cls(
            minutes=minutes,
            mom=mom,
            position_class=str(row.get('class') or '').strip().upper(),
            season=_optional_text(row.get('season')),
            season_week=_optional_text(row.get('seasonWeek')),
            season_month=_optional_text(row.get('seasonMonth')),
            date=_optional_text(row.get('date')),
            **counts,
        )


@dataclass(frozen=True)
class FTPBreakdownEntry:
    """Points one statistic category contributed for one match."""
    stat: str
    value: float
    points: float
    show: bool = False


@dataclass(frozen=True)
class AggregatedPlayerScore:
    """A player's FTP score summed over a scope and rounded once."""
    player_name: str
    position: str
    ftp_score: int
    slot: str = ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'playerName': self.player_name,
            'ftpScore': self.ftp_score,
            'position': self.position,
        }


@dataclass(frozen=True)
class TOTWRecord:
    """An assembled team of the week for one scope."""
    season: str
    formation: str
    slots: dict[str, str] = field(default_factory=dict)  # slot key -> player name
    totw_score: int = 0
    star_man: str = ''
    star_man_score: int = 0
    player_count: int = 0
    week: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'season': self.season,
            'week': self.week,
            'bestFormation': self.formation,
            'totwScore': self.totw_score,
            'playerCount': self.player_count,
            'starMan': self.star_man,
            'starManScore': self.star_man_score,
        }
        data.update(self.slots)
        return data


@dataclass(frozen=True)
class TOTWResult:
    """What the assembler hands back: a TOTW and its scored players, or nothing."""
    totw_data: Optional[TOTWRecord] = None
    players: tuple[AggregatedPlayerScore, ...] = ()

    @classmethod
    def empty(cls) -> 'TOTWResult':
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.totw_data is None

    def to_dict(self) -> dict[str, Any]:
        return {
            'totwData': self.totw_data.to_dict() if self.totw_data else None,
            'players': [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True)
class PeriodScore:
    """Unrounded points a player earned within one week or month."""
    period: str
    season: Optional[str]
    total_points: float
    match_count: int


@dataclass
class PlayerBreakdownSummary:
    """A player's FTP totals per category across a set of matches."""
    total_points: int = 0
    match_count: int = 0
    breakdown: dict[str, float] = field(default_factory=dict)
    values: dict[str, float] = field(default_factory=dict)
    highest_scoring_week: Optional[PeriodScore] = None
    highest_scoring_month: Optional[PeriodScore] = None
