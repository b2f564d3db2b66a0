# Default auction settings
DEFAULT_BUDGET_PER_TEAM = 1000
DEFAULT_TARGET_SQUAD_SIZE = 11

# Sealed-bid window for a live round
DEFAULT_ROUND_DURATION_SECONDS = 60
