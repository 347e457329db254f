"""Application settings and configuration."""

import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Data paths
DATA_DIR = BASE_DIR / "data"
STORM_DATA_FILE = Path(os.getenv("STORM_DATA_FILE", str(DATA_DIR / "StormData.csv.bz2")))
STORM_DATA_URL = os.getenv(
    "STORM_DATA_URL",
    "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2",
)

# Output directories
EXPORT_DIR = Path(os.getenv("STORM_EXPORT_DIR", str(BASE_DIR / "output" / "exports")))
FIGURE_DIR = Path(os.getenv("STORM_FIGURE_DIR", str(BASE_DIR / "output" / "figures")))

# Raw column names in the NOAA storm database
NOAA_COLUMNS = {
    "event_id": "REFNUM",
    "event_type": "EVTYPE",
    "property_damage": "PROPDMG",
    "property_damage_exp": "PROPDMGEXP",
    "crop_damage": "CROPDMG",
    "crop_damage_exp": "CROPDMGEXP",
    "fatalities": "FATALITIES",
    "injuries": "INJURIES",
    "begin_date": "BGN_DATE",
}

# Clustering settings
CLUSTERING_SETTINGS = {
    "frequency_threshold": 50,
    "n_clusters": 6,
    "metric": "euclidean",
    "method": "complete",
    "log_offset": 0.01,
}

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("STORM_LOG_LEVEL", "INFO").upper()
