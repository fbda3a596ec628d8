"""Team-of-the-week assembly."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .aggregation import aggregate_player_score
from .config import get_config
from .constants import ALL_TIME
from .data_fetcher import StatsSource
from .formation import Slot, build_slots, resolve_formation
from .models import AggregatedPlayerScore, MatchStatRecord, TOTWRecord, TOTWResult
from .schemas import EngineConfig, StoredTOTW

logger = logging.getLogger('clubftp.totw')


def season_filter(season: str) -> Optional[str]:
    """The "All Time" scope removes the season filter."""
    return None if season == ALL_TIME else season


def elect_star_man(
    players: list[AggregatedPlayerScore],
    tie_break: str = 'name',
) -> Optional[AggregatedPlayerScore]:
    """
    Pick the highest-scoring player.

    Ties on score go to the alphabetically first name (case-insensitive)
    with ``tie_break='name'``, or to the first player in slot order with
    ``tie_break='slot'``.
    """
    if not players:
        return None
    best_score = max(p.ftp_score for p in players)
    tied = [p for p in players if p.ftp_score == best_score]
    if tie_break == 'slot':
        return tied[0]
    return min(tied, key=lambda p: (p.player_name.casefold(), p.player_name))


class TOTWAssembler:
    """
    Builds a TOTW from stored picks and freshly scored match stats.

    Stored aggregates (team score, star man, player count) are never
    trusted; they are recomputed from the current stats on every call.
    """

    def __init__(self, source: StatsSource, config: Optional[EngineConfig] = None):
        """
        Initialize assembler.

        Args:
            source: Where stored TOTWs and match stats come from
            config: Engine configuration (default: data/scoring_config.json)
        """
        self.source = source
        self.config = config or get_config()

    def compute_totw(self, season: str) -> TOTWResult:
        """
        Assemble the TOTW for a season label or "All Time".

        Args:
            season: Season label such as "2024/25", or "All Time"

        Returns:
            TOTWResult, empty when nothing is stored for the season

        Raises:
            ValueError: If season is blank
            Exception: Any stats fetch failure, when on_fetch_error is "fail"
        """
        season = self._require_season(season)
        stored = self.source.fetch_stored_totw(season)
        if stored is None:
            logger.info(f'No stored TOTW for season: {season}')
            return TOTWResult.empty()
        return self._assemble(stored, season, week=0, scope=(season_filter(season), None))

    def compute_weekly_totw(self, season: str, week: int) -> TOTWResult:
        """
        Assemble the TOTW for a single week of a season.

        Player stats are scoped to the ``"<season>-<week>"`` season-week.
        """
        season = self._require_season(season)
        stored = self.source.fetch_stored_weekly_totw(season, week)
        if stored is None:
            logger.info(f'No stored TOTW for season: {season}, week: {week}')
            return TOTWResult.empty()
        return self._assemble(stored, season, week=week, scope=(season, f'{season}-{week}'))

    @staticmethod
    def _require_season(season: str) -> str:
        if not season or not str(season).strip():
            raise ValueError('Season parameter is required')
        return str(season).strip()

    def _fetch_stats(self, player_name: str, scope: tuple[Optional[str], Optional[str]]) -> list[MatchStatRecord]:
        season, season_week = scope
        records = self.source.fetch_match_stats(player_name, season=season, season_week=season_week)
        logger.debug(f'Fetched {len(records)} matches for {player_name} in {season_week or season or "all time"}')
        return records

    def _fetch_all(
        self,
        picks: list[tuple[Slot, str]],
        scope: tuple[Optional[str], Optional[str]],
    ) -> list[Optional[list[MatchStatRecord]]]:
        """Fetch every pick's stats in parallel; results come back in slot order."""
        if not picks:
            return []

        workers = min(self.config.max_workers, len(picks))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._fetch_stats, name, scope) for _, name in picks]

            results: list[Optional[list[MatchStatRecord]]] = []
            for (slot, name), future in zip(picks, futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    if self.config.on_fetch_error == 'zero':
                        logger.warning(f'Stats fetch failed for {name} ({slot.key}), scoring 0: {e}')
                        results.append(None)
                        continue
                    logger.error(f'Stats fetch failed for {name} ({slot.key}): {e}')
                    for pending in futures:
                        pending.cancel()
                    raise
        return results

    def _assemble(
        self,
        stored: StoredTOTW,
        season: str,
        week: int,
        scope: tuple[Optional[str], Optional[str]],
    ) -> TOTWResult:
        formation = resolve_formation(stored.best_formation)
        slots = build_slots(formation)
        picked = stored.slots

        picks = [(slot, picked.get(slot.key, '')) for slot in slots]
        picks = [(slot, name) for slot, name in picks if name]

        stats = self._fetch_all(picks, scope)

        players: list[AggregatedPlayerScore] = []
        for (slot, name), records in zip(picks, stats):
            players.append(
                aggregate_player_score(
                    name,
                    records or [],
                    position=slot.position,
                    slot=slot.key,
                    weights=self.config.weights,
                )
            )

        logger.debug(
            'TOTW players with FTP scores: '
            + ', '.join(f'{p.player_name}: {p.ftp_score}' for p in players)
        )

        totw_score = sum(p.ftp_score for p in players)
        star = elect_star_man(players, self.config.star_tie_break)
        player_count = self.source.fetch_distinct_eligible_contributor_count(*scope)

        record = TOTWRecord(
            season=stored.season or season,
            week=week,
            formation=stored.best_formation or formation.descriptor,
            slots=picked,
            totw_score=totw_score,
            star_man=star.player_name if star else '',
            star_man_score=star.ftp_score if star else 0,
            player_count=int(player_count),
        )
        logger.info(
            f'Assembled TOTW {record.season}'
            + (f' week {week}' if week else '')
            + f': {len(players)} players, {totw_score} pts, star {record.star_man or "-"}'
        )
        return TOTWResult(totw_data=record, players=tuple(players))


def compute_totw(source: StatsSource, season: str, config: Optional[EngineConfig] = None) -> TOTWResult:
    """Assemble the TOTW for a season label or "All Time"."""
    return TOTWAssembler(source, config).compute_totw(season)


def compute_weekly_totw(
    source: StatsSource,
    season: str,
    week: int,
    config: Optional[EngineConfig] = None,
) -> TOTWResult:
    """Assemble the TOTW for one week of a season."""
    return TOTWAssembler(source, config).compute_weekly_totw(season, week)
