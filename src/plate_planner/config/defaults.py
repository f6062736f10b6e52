"""
Default configuration values.
"""

# Layout defaults
DEFAULT_PLATE_FORMAT = 96
DEFAULT_RANDOM_SEED = None

# Calculator defaults
DEFAULT_WELL_VOLUME_UL = 200.0

# Logging
DEFAULT_LOG_LEVEL = "INFO"
