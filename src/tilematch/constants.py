GRID_ROWS = 8
GRID_COLS = 8

# Moves granted at the start of every game; an accepted swap costs one.
INITIAL_MOVES = 30
STARTING_LEVEL = 1

# Score per removed tile, plus a flat bonus for every non-empty removal step.
BASE_POINTS = 10
MATCH_BONUS = 50

# Shortest run that counts as a match.
MIN_MATCH_LENGTH = 3

# Canonical tile types -> display glyph used by text front-ends.
DEFAULT_TILE_TYPES = {
    'lollipop':   '\U0001F36D',
    'polar_bear': '\U0001F43B\u200d\u2744\ufe0f',
    'sparkles':   '\u2728',
    'droplet':    '\U0001F4A7',
    'snowflake':  '\u2744\ufe0f',
}

# Status texts pushed to the presentation layer.
MESSAGE_READY = "Ready!"
MESSAGE_MATCH = "Match!"
MESSAGE_COMBO = "Combo!"
MESSAGE_NO_MATCH = "No Match"
MESSAGE_GAME_OVER = "Game Over!"
