"""Tests for the polars-backed stats source."""

import polars as pl
import pytest

from clubftp.data_fetcher import ClubStatsFetcher, StatsSource
from clubftp.schemas import EngineConfig
from clubftp.totw import compute_totw, compute_weekly_totw


@pytest.fixture
def frames():
    """Small club export: four players, two seasons."""
    match_details = pl.DataFrame({
        'playerName': ['Amy', 'Amy', 'Ben', 'Cal', 'Dee'],
        'season': ['2024/25', '2023/24', '2024/25', '2024/25', '2024/25'],
        'seasonWeek': ['2024/25-1', '2023/24-5', '2024/25-1', '2024/25-1', '2024/25-2'],
        'date': ['2024-09-07', '2023-10-01', '2024-09-07', '2024-09-07', '2024-09-14'],
        'minutes': [90, 60, 45, None, 90],
        'mom': [1, 0, None, 0, 0],
        'goals': [1, 0, 2, 0, 0],
        'class': ['MID', 'MID', 'FWD', 'DEF', 'GK'],
    })
    players = pl.DataFrame({
        'playerName': ['Amy', 'Ben', 'Cal', 'Dee'],
        'allowOnSite': [True, True, False, True],
    })
    season_totw = pl.DataFrame({
        'season': ['2024/25'],
        'bestFormation': ['4-3-3'],
        'totwScore': [999],
        'gk1': ['Dee'],
        'mid1': ['Amy'],
        'fwd1': ['Ben'],
    })
    weekly_totw = pl.DataFrame({
        'season': ['2024/25', '2024/25'],
        'week': [1, 2],
        'bestFormation': ['4-4-2', '4-4-2'],
        'mid1': ['Amy', None],
        'fwd1': ['Ben', None],
        'gk1': [None, 'Dee'],
    })
    return {
        'match_details': match_details,
        'players': players,
        'season_totw': season_totw,
        'weekly_totw': weekly_totw,
    }


@pytest.fixture
def fetcher(frames):
    return ClubStatsFetcher(**frames)


class TestStatsSourceInterface:
    """The base class only defines the contract."""

    def test_base_methods_not_implemented(self):
        """Subclasses must provide every fetch."""
        source = StatsSource()
        with pytest.raises(NotImplementedError):
            source.fetch_stored_totw('2024/25')
        with pytest.raises(NotImplementedError):
            source.fetch_match_stats('Amy')
        with pytest.raises(NotImplementedError):
            source.fetch_distinct_eligible_contributor_count()


class TestClubStatsFetcher:
    """Tests for ClubStatsFetcher over in-memory frames."""

    def test_stored_totw(self, fetcher):
        """Stored season TOTW is read and normalized."""
        stored = fetcher.fetch_stored_totw('2024/25')
        assert stored.best_formation == '4-3-3'
        assert stored.slots['gk1'] == 'Dee'
        assert stored.slots['def1'] == ''
        assert stored.totw_score == 999

    def test_stored_totw_missing(self, fetcher):
        """Unknown season gives None."""
        assert fetcher.fetch_stored_totw('2019/20') is None

    def test_stored_weekly_totw(self, fetcher):
        """Weekly TOTW is matched on season and week."""
        stored = fetcher.fetch_stored_weekly_totw('2024/25', 2)
        assert stored.week == 2
        assert stored.slots['gk1'] == 'Dee'
        assert stored.slots['mid1'] == ''
        assert fetcher.fetch_stored_weekly_totw('2024/25', 9) is None

    def test_match_stats_season_scope(self, fetcher):
        """Season filter keeps only that season's matches."""
        records = fetcher.fetch_match_stats('Amy', season='2024/25')
        assert len(records) == 1
        assert records[0].mom is True
        assert records[0].minutes == 90
        assert records[0].position_class == 'MID'

    def test_match_stats_all_time_sorted(self, fetcher):
        """No season filter returns every match, oldest first."""
        records = fetcher.fetch_match_stats('Amy')
        assert [r.season for r in records] == ['2023/24', '2024/25']

    def test_match_stats_week_scope(self, fetcher):
        """Season-week filter narrows to one week."""
        assert len(fetcher.fetch_match_stats('Dee', '2024/25', '2024/25-1')) == 0
        assert len(fetcher.fetch_match_stats('Dee', '2024/25', '2024/25-2')) == 1

    def test_null_stats_default_to_zero(self, fetcher):
        """Null cells become 0."""
        record = fetcher.fetch_match_stats('Cal', season='2024/25')[0]
        assert record.minutes == 0
        assert record.mom is False

    def test_unknown_player(self, fetcher):
        """A player with no rows has no records."""
        assert fetcher.fetch_match_stats('Nobody') == []

    def test_contributor_count(self, fetcher):
        """Only eligible players with a match in scope are counted, once each."""
        assert fetcher.fetch_distinct_eligible_contributor_count('2024/25') == 3
        assert fetcher.fetch_distinct_eligible_contributor_count() == 3
        assert fetcher.fetch_distinct_eligible_contributor_count('2023/24') == 1
        assert fetcher.fetch_distinct_eligible_contributor_count('2024/25', '2024/25-1') == 2

    def test_season_totw_end_to_end(self, fetcher):
        """Assembler over the fetcher recomputes scores from match rows."""
        result = compute_totw(fetcher, '2024/25', EngineConfig())
        scores = {p.player_name: p.ftp_score for p in result.players}
        assert scores == {'Dee': 2, 'Amy': 10, 'Ben': 9}
        assert result.totw_data.totw_score == 21
        assert result.totw_data.star_man == 'Amy'
        assert result.totw_data.player_count == 3

    def test_weekly_totw_end_to_end(self, fetcher):
        """Weekly assembly only counts that week's matches."""
        result = compute_weekly_totw(fetcher, '2024/25', 1, EngineConfig())
        assert [p.player_name for p in result.players] == ['Amy', 'Ben']
        assert result.totw_data.totw_score == 19
        assert result.totw_data.player_count == 2


class TestCsvLoading:
    """Tables load lazily from CSV exports."""

    def test_loads_from_data_dir(self, tmp_path):
        """CSV tables in the data directory are read on first use."""
        (tmp_path / 'match_details.csv').write_text(
            'playerName,season,seasonWeek,minutes,mom,goals,assists,class\n'
            'Amy,2024/25,2024/25-1,90,1,1,0,MID\n'
            'Ben,2024/25,2024/25-1,70,0,0,2,FWD\n'
        )
        (tmp_path / 'players.csv').write_text('playerName,allowOnSite\nAmy,true\nBen,false\n')
        fetcher = ClubStatsFetcher(tmp_path)

        records = fetcher.fetch_match_stats('Ben', season='2024/25')
        assert records[0].assists == 2
        assert records[0].minutes == 70
        assert fetcher.fetch_distinct_eligible_contributor_count('2024/25') == 1

    def test_missing_tables(self, tmp_path):
        """Absent exports behave like empty tables."""
        fetcher = ClubStatsFetcher(tmp_path)
        assert fetcher.fetch_stored_totw('2024/25') is None
        assert fetcher.fetch_stored_weekly_totw('2024/25', 1) is None
        assert fetcher.fetch_match_stats('Amy') == []
        assert fetcher.fetch_distinct_eligible_contributor_count() == 0
        assert compute_totw(fetcher, '2024/25', EngineConfig()).to_dict() == {'totwData': None, 'players': []}


class TestMissingScopeColumns:
    """Exports without season columns leave nothing in a scoped query."""

    @pytest.fixture
    def unscoped(self, frames):
        match_details = pl.DataFrame({
            'playerName': ['Amy', 'Ben', 'Dee'],
            'goals': [1, 2, 0],
            'class': ['MID', 'FWD', 'GK'],
            'minutes': [90, 45, 90],
        })
        return ClubStatsFetcher(
            match_details=match_details,
            players=frames['players'],
            season_totw=frames['season_totw'],
        )

    def test_season_scope_without_season_column(self, unscoped):
        """A season filter on a table with no season column finds no matches."""
        assert unscoped.fetch_match_stats('Amy', season='2024/25') == []
        assert unscoped.fetch_distinct_eligible_contributor_count('2024/25') == 0

    def test_week_scope_without_week_column(self, frames):
        """A week filter on a table with no seasonWeek column finds no matches."""
        fetcher = ClubStatsFetcher(
            match_details=frames['match_details'].drop('seasonWeek'),
            players=frames['players'],
        )
        assert fetcher.fetch_match_stats('Amy', '2024/25', '2024/25-1') == []
        assert len(fetcher.fetch_match_stats('Amy', season='2024/25')) == 1

    def test_all_time_still_reads_rows(self, unscoped):
        """No scope filter means no scope column is needed."""
        records = unscoped.fetch_match_stats('Amy')
        assert len(records) == 1
        assert records[0].goals == 1
        assert unscoped.fetch_distinct_eligible_contributor_count() == 3

    def test_season_totw_scores_zero(self, unscoped):
        """The season TOTW still assembles, with every pick on 0."""
        result = compute_totw(unscoped, '2024/25', EngineConfig())
        assert [p.player_name for p in result.players] == ['Dee', 'Amy', 'Ben']
        assert all(p.ftp_score == 0 for p in result.players)
        assert result.totw_data.totw_score == 0
        assert result.totw_data.player_count == 0
