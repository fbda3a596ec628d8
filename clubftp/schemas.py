"""Pydantic schemas for configuration and stored TOTW validation."""

from pydantic import BaseModel, Field, field_validator

from .constants import POSITIONS, SLOT_KEYS
from .utils import to_number


def _validate_position_weights(v: dict[str, float]) -> dict[str, float]:
    for pos in v:
        if pos not in POSITIONS:
            raise ValueError(f'Invalid position: {pos}')
    return v


class ScoringWeights(BaseModel):
    """
    FTP weight table.

    Every point value the breakdown calculator uses lives here so scoring
    policy changes never touch the calculator or the aggregator. Positional
    tables map GK/DEF/MID/FWD to points per unit; a class missing from a
    table scores 0 for that category.
    """

    man_of_the_match: float = 3
    minutes_full_threshold: int = Field(60, ge=1)
    minutes_full: float = 2
    minutes_partial: float = 1
    goals_scored: dict[str, float] = Field(
        default_factory=lambda: {'GK': 6, 'DEF': 6, 'MID': 5, 'FWD': 4}
    )
    penalties_scored: dict[str, float] = Field(
        default_factory=lambda: {'GK': 6, 'DEF': 6, 'MID': 5, 'FWD': 4}
    )
    assists: float = 3
    clean_sheets: dict[str, float] = Field(
        default_factory=lambda: {'GK': 4, 'DEF': 4, 'MID': 1, 'FWD': 0}
    )
    goals_conceded: dict[str, float] = Field(
        default_factory=lambda: {'GK': -0.5, 'DEF': -0.5}
    )
    yellow_cards: float = -1
    red_cards: float = -3
    own_goals: float = -2
    penalties_missed: float = -2
    saves_per_point: int = Field(3, ge=1)
    saves_positions: list[str] = Field(default_factory=lambda: ['GK'])
    penalties_saved: float = 5
    penalties_conceded: float = 0

    @field_validator('goals_scored', 'penalties_scored', 'clean_sheets', 'goals_conceded')
    @classmethod
    def validate_positions(cls, v):
        """Ensure positional tables only name known positions."""
        return _validate_position_weights(v)

    @field_validator('saves_positions')
    @classmethod
    def validate_saves_positions(cls, v):
        """Ensure saves positions are known."""
        _validate_position_weights({pos: 0 for pos in v})
        return v

    class Config:
        extra = 'forbid'


class EngineConfig(BaseModel):
    """Engine configuration settings."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    max_workers: int = Field(4, ge=1, le=32)
    star_tie_break: str = Field('name', pattern=r'^(name|slot)$')
    on_fetch_error: str = Field('fail', pattern=r'^(fail|zero)$')

    class Config:
        extra = 'forbid'


class StoredTOTW(BaseModel):
    """
    A stored TOTW node (season, weekly, or all-time) as read from storage.

    Slot picks are normalized to stripped strings with nulls as "". The
    stored aggregate fields are accepted for completeness but never trusted:
    the assembler recomputes them.
    """

    season: str = ''
    week: int = 0
    best_formation: str = Field('', alias='bestFormation')
    totw_score: float = Field(0, alias='totwScore')
    star_man: str = Field('', alias='starMan')
    star_man_score: float = Field(0, alias='starManScore')
    player_count: int = Field(0, alias='playerCount')
    gk1: str = ''
    def1: str = ''
    def2: str = ''
    def3: str = ''
    def4: str = ''
    def5: str = ''
    mid1: str = ''
    mid2: str = ''
    mid3: str = ''
    mid4: str = ''
    mid5: str = ''
    fwd1: str = ''
    fwd2: str = ''
    fwd3: str = ''

    @field_validator('season', 'best_formation', 'star_man', *SLOT_KEYS, mode='before')
    @classmethod
    def coerce_text(cls, v):
        """Stored text fields may be null or non-string."""
        if v is None:
            return ''
        return str(v).strip()

    @field_validator('week', 'totw_score', 'star_man_score', 'player_count', mode='before')
    @classmethod
    def coerce_number(cls, v):
        """Stored numbers may be null, strings, or 64-bit integer pairs."""
        return to_number(v)

    @property
    def slots(self) -> dict[str, str]:
        """Slot key -> picked player name ("" when blank)."""
        return {key: getattr(self, key) for key in SLOT_KEYS}

    class Config:
        extra = 'ignore'
        populate_by_name = True
