from .models import (
    AggregatedPlayerScore,
    FTPBreakdownEntry,
    MatchStatRecord,
    PeriodScore,
    PlayerBreakdownSummary,
    TOTWRecord,
    TOTWResult,
)
from .scoring import calculate_ftp_breakdown, match_points, round_half_up
from .aggregation import aggregate_player_score, summarize_player_breakdown, total_points
from .formation import Formation, Slot, build_slots, resolve_formation
from .data_fetcher import ClubStatsFetcher, StatsSource
from .totw import TOTWAssembler, compute_totw, compute_weekly_totw, elect_star_man
from .schemas import EngineConfig, ScoringWeights
from .constants import ALL_TIME

__all__ = [
    # Models
    'MatchStatRecord',
    'FTPBreakdownEntry',
    'AggregatedPlayerScore',
    'TOTWRecord',
    'TOTWResult',
    'PeriodScore',
    'PlayerBreakdownSummary',
    # Configuration
    'EngineConfig',
    'ScoringWeights',
    # Scoring
    'calculate_ftp_breakdown',
    'match_points',
    'round_half_up',
    # Aggregation
    'aggregate_player_score',
    'summarize_player_breakdown',
    'total_points',
    # Formation
    'Formation',
    'Slot',
    'resolve_formation',
    'build_slots',
    # Data sources
    'StatsSource',
    'ClubStatsFetcher',
    # TOTW
    'TOTWAssembler',
    'compute_totw',
    'compute_weekly_totw',
    'elect_star_man',
    'ALL_TIME',
]
