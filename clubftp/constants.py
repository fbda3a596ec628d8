"""Constants and mappings for the club FTP engine."""

# Season scope sentinel meaning "no season filter"
ALL_TIME = 'All Time'

# Position buckets
GK = 'GK'
DEF = 'DEF'
MID = 'MID'
FWD = 'FWD'
POSITIONS = (GK, DEF, MID, FWD)

# Slot key prefix per position (gk1, def1..def5, mid1..mid5, fwd1..fwd3)
SLOT_PREFIXES = {
    GK: 'gk',
    DEF: 'def',
    MID: 'mid',
    FWD: 'fwd',
}

# Maximum stored picks per position
SLOT_CAPACITY = {
    GK: 1,
    DEF: 5,
    MID: 5,
    FWD: 3,
}

SLOT_KEYS = tuple(
    f'{SLOT_PREFIXES[pos]}{i}'
    for pos in POSITIONS
    for i in range(1, SLOT_CAPACITY[pos] + 1)
)

# Default formation (defenders, midfielders, forwards)
DEFAULT_FORMATION = (4, 4, 2)

# Breakdown categories, in emission order
MAN_OF_THE_MATCH = 'Man of the Match'
MINUTES_PLAYED = 'Minutes played'
GOALS_SCORED = 'Goals scored'
ASSISTS = 'Assists'
CLEAN_SHEETS = 'Clean Sheets'
GOALS_CONCEDED = 'Goals Conceded'
YELLOW_CARDS = 'Yellow Cards'
RED_CARDS = 'Red Cards'
OWN_GOALS = 'Own Goals'
PENALTIES_MISSED = 'Penalties Missed'
PENALTIES_SCORED = 'Penalties Scored'
SAVES = 'Saves'
PENALTIES_SAVED = 'Penalties Saved'
PENALTIES_CONCEDED = 'Penalties Conceded'

CATEGORIES = (
    MAN_OF_THE_MATCH,
    MINUTES_PLAYED,
    GOALS_SCORED,
    ASSISTS,
    CLEAN_SHEETS,
    GOALS_CONCEDED,
    YELLOW_CARDS,
    RED_CARDS,
    OWN_GOALS,
    PENALTIES_MISSED,
    PENALTIES_SCORED,
    SAVES,
    PENALTIES_SAVED,
    PENALTIES_CONCEDED,
)

# Raw match-detail row keys -> MatchStatRecord fields
MATCH_ROW_FIELDS = {
    'goals': 'goals',
    'assists': 'assists',
    'conceded': 'conceded',
    'cleanSheets': 'clean_sheets',
    'yellowCards': 'yellow_cards',
    'redCards': 'red_cards',
    'saves': 'saves',
    'ownGoals': 'own_goals',
    'penaltiesScored': 'penalties_scored',
    'penaltiesMissed': 'penalties_missed',
    'penaltiesConceded': 'penalties_conceded',
    'penaltiesSaved': 'penalties_saved',
}
