"""Stats sources the TOTW assembler reads from."""

import logging
import threading
from pathlib import Path
from typing import Optional

import polars as pl

from .models import MatchStatRecord
from .schemas import StoredTOTW

logger = logging.getLogger('clubftp.data_fetcher')


class StatsSource:
    """
    Read-only access to stored TOTW picks and per-match player stats.

    ``season=None`` means all time. Implementations must be safe to call
    from several threads at once: the assembler fetches player stats in
    parallel. Every method is idempotent.
    """

    def fetch_stored_totw(self, season: str) -> Optional[StoredTOTW]:
        """Stored season (or all-time) TOTW, or None when there is none."""
        raise NotImplementedError

    def fetch_stored_weekly_totw(self, season: str, week: int) -> Optional[StoredTOTW]:
        """Stored TOTW for one week of a season, or None."""
        raise NotImplementedError

    def fetch_match_stats(
        self,
        player_name: str,
        season: Optional[str] = None,
        season_week: Optional[str] = None,
    ) -> list[MatchStatRecord]:
        """A player's match stats within the scope, oldest first."""
        raise NotImplementedError

    def fetch_distinct_eligible_contributor_count(
        self,
        season: Optional[str] = None,
        season_week: Optional[str] = None,
    ) -> int:
        """Distinct site-eligible players with at least one match in scope."""
        raise NotImplementedError


def _text(column: str) -> pl.Expr:
    return pl.col(column).cast(pl.Utf8)


class ClubStatsFetcher(StatsSource):
    """
    Stats source over tables exported from the club database.

    Expects, in ``data_dir``: match_details.csv (one row per player per
    match, camelCase stat columns plus playerName/season/seasonWeek),
    players.csv (playerName, allowOnSite), season_totw.csv and
    weekly_totw.csv (stored TOTW picks). Tables load lazily on first use;
    frames can also be passed in directly.
    """

    def __init__(
        self,
        data_dir: Path | str = 'data',
        match_details: Optional[pl.DataFrame] = None,
        players: Optional[pl.DataFrame] = None,
        season_totw: Optional[pl.DataFrame] = None,
        weekly_totw: Optional[pl.DataFrame] = None,
    ):
        self.data_dir = Path(data_dir)
        self._frames: dict[str, Optional[pl.DataFrame]] = {
            'match_details': match_details,
            'players': players,
            'season_totw': season_totw,
            'weekly_totw': weekly_totw,
        }
        self._lock = threading.Lock()

    def _load(self, name: str) -> pl.DataFrame:
        with self._lock:
            frame = self._frames[name]
            if frame is None:
                path = self.data_dir / f'{name}.csv'
                if path.exists():
                    logger.info(f'Loading {name} from {path}...')
                    frame = pl.read_csv(path, infer_schema_length=10000)
                else:
                    logger.warning(f'No {name} table at {path}')
                    frame = pl.DataFrame()
                self._frames[name] = frame
            return frame

    @property
    def match_details(self) -> pl.DataFrame:
        """Lazy load match details."""
        return self._load('match_details')

    @property
    def players(self) -> pl.DataFrame:
        """Lazy load players."""
        return self._load('players')

    @property
    def season_totw(self) -> pl.DataFrame:
        """Lazy load stored season TOTWs."""
        return self._load('season_totw')

    @property
    def weekly_totw(self) -> pl.DataFrame:
        """Lazy load stored weekly TOTWs."""
        return self._load('weekly_totw')

    @staticmethod
    def _first_totw(frame: pl.DataFrame, expr: pl.Expr) -> Optional[StoredTOTW]:
        rows = frame.filter(expr).head(1).to_dicts()
        if not rows:
            return None
        return StoredTOTW.model_validate(rows[0])

    def fetch_stored_totw(self, season: str) -> Optional[StoredTOTW]:
        frame = self.season_totw
        if 'season' not in frame.columns:
            return None
        return self._first_totw(frame, _text('season') == season)

    def fetch_stored_weekly_totw(self, season: str, week: int) -> Optional[StoredTOTW]:
        frame = self.weekly_totw
        if 'season' not in frame.columns or 'week' not in frame.columns:
            return None
        return self._first_totw(frame, (_text('season') == season) & (_text('week') == str(week)))

    def _scoped(
        self,
        season: Optional[str],
        season_week: Optional[str],
    ) -> pl.DataFrame:
        frame = self.match_details
        if 'playerName' not in frame.columns:
            return pl.DataFrame()
        for column, value in (('season', season), ('seasonWeek', season_week)):
            if value is None:
                continue
            if column not in frame.columns:
                logger.warning(f'match_details has no {column} column, nothing in scope for {value}')
                return pl.DataFrame()
            frame = frame.filter(_text(column) == value)
        return frame

    def fetch_match_stats(
        self,
        player_name: str,
        season: Optional[str] = None,
        season_week: Optional[str] = None,
    ) -> list[MatchStatRecord]:
        frame = self._scoped(season, season_week)
        if frame.is_empty():
            return []
        frame = frame.filter(pl.col('playerName') == player_name)
        if 'date' in frame.columns:
            frame = frame.sort('date', nulls_last=True)
        return [MatchStatRecord.from_row(row) for row in frame.to_dicts()]

    def fetch_distinct_eligible_contributor_count(
        self,
        season: Optional[str] = None,
        season_week: Optional[str] = None,
    ) -> int:
        players = self.players
        if 'playerName' not in players.columns or 'allowOnSite' not in players.columns:
            return 0
        eligible = players.filter(
            _text('allowOnSite').str.to_lowercase().is_in(['true', '1'])
        )['playerName'].to_list()

        frame = self._scoped(season, season_week)
        if frame.is_empty():
            return 0
        return frame.filter(pl.col('playerName').is_in(eligible))['playerName'].n_unique()
