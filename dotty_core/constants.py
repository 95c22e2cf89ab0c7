"""Build-time tuning constants for the Dotty board."""

# Number of rows and columns on the (square) board.
GRID_SIZE = 6

# Number of distinct token colors.
NUM_COLORS = 5

# Move budget handed out at the start of every game.
INIT_MOVES = 10

# A path must hold at least this many tokens to be resolved.
MIN_PATH = 2
