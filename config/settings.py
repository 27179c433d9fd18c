"""
Configuration settings for ReviewSynth.

Centralized configuration for the generation pipeline, storage and scheduler.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("REVIEWSYNTH_DATA_ROOT", str(PROJECT_ROOT / "data")))
OUTPUT_ROOT = Path(os.getenv("REVIEWSYNTH_OUTPUT_ROOT", str(PROJECT_ROOT / "output")))
SETTINGS_REGISTRY_FILENAME = "generation_settings.json"

# Rating distribution (weights, not required to sum to 100)
DEFAULT_RATING_DISTRIBUTION = {5: 60, 4: 30, 3: 8, 2: 1, 1: 1}
FALLBACK_RATING = 5  # Returned if cumulative sampling runs off the end

# Batch guard
MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 20
DEFAULT_BATCH_SIZE = 5

# Review metadata
VERIFIED_PURCHASE_PROBABILITY = 0.7
MAX_BACKDATE_DAYS = 30
DEVICE_TYPES = ("mobile", "desktop", "tablet")
PLATFORMS = ("Chrome", "Firefox", "Safari", "Edge", "Opera")
DEFAULT_COUNTRY_CODES = ("US", "GB", "CA", "DE", "FR", "ES", "IT", "AU", "JP", "BR")
DEFAULT_CATEGORY = "digital service"
REVIEW_SOURCE = "auto"
FAKER_LOCALE = os.getenv("REVIEWSYNTH_FAKER_LOCALE", "en_US")

# Per-product generation settings defaults
DEFAULT_MIN_RATING = 3
DEFAULT_MAX_RATING = 5
DEFAULT_TARGET_REVIEW_COUNT = 20
DEFAULT_DAILY_GENERATION_LIMIT = 2

# Daily scheduler
MAX_DAILY_REVIEWS_PER_PRODUCT = 3
MIN_SCHEDULE_DELAY_MINUTES = 1
MAX_SCHEDULE_DELAY_MINUTES = 60 * 23

# Logging
LOG_LEVEL = os.getenv("REVIEWSYNTH_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewsynth.log"
