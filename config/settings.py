"""
Configuration settings for the catalog manager.

Centralized configuration for the store, record files, and demo driver.
"""

import os
from decimal import Decimal
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("CATALOG_DATA_ROOT", PROJECT_ROOT / "data"))
REPORTS_ROOT = Path(os.getenv("CATALOG_REPORTS_ROOT", PROJECT_ROOT / "reports"))
SNAPSHOT_ROOT = Path(os.getenv("CATALOG_SNAPSHOT_ROOT", PROJECT_ROOT / "temp"))

# Record files
PRODUCT_FILE_PREFIX = "product"
PRODUCT_FILE = "product{id}.txt"
REVIEWS_FILE = "reviews{id}.txt"
REPORT_FILE = "product{id}_{client}report.txt"
SNAPSHOT_FILE = "catalog_{timestamp}.json"
RECORD_DELIMITER = ","

# Record tags
STANDARD_TAG = "D"
PERISHABLE_TAG = "F"

# Pricing
DISCOUNT_RATE = Decimal("0.1")

# Locales
DEFAULT_LOCALE = "en-GB"

# Demo driver
MIN_PRODUCT_ID = 101
NUM_PRODUCTS = 5
NUM_CLIENTS = 5
MAX_THREADS = 3

# Snapshots
SNAPSHOT_VERSION = "1.0"

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"
LOG_FILE = "catalog.log"
