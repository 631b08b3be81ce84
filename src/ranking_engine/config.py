# Ranking view sizes
DEFAULT_TOP_N = 8  # Sports shown on the ranking card

# Evaluator variable naming
MIN_THRESHOLD_PREFIX = "min"
MAX_THRESHOLD_PREFIX = "max"
WEIGHT_SUFFIX = "Weight"
LOOKUP_SEPARATOR = ":"

# Values accepted as true for boolean measures
TRUE_VALUES = {"true"}
