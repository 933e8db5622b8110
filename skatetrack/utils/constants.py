"""
Constants for the SkateTrack dashboard.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "SkateTrack"
DEFAULT_CREATED_BY = "Admin User"

# Session types map to fixed duration tokens
SESSION_TYPE_DURATIONS = {
    "standard": "1h",
    "extended": "2h",
    "half-day": "4h",
    "full-day": "8h",
}
DEFAULT_SESSION_TYPE = "standard"

# Repeating timers (seconds)
SWEEP_INTERVAL_SECONDS = 60
CLOCK_INTERVAL_SECONDS = 1
DISPLAY_REFRESH_SECONDS = 60

# Reporting
BUSY_DAY_THRESHOLD = 3  # more sessions than this flags a "Busy day"
BUSY_DAY_NOTE = "Busy day"
CURRENCY_PREFIX = "NPR"
RANGE_KINDS = ("today", "week", "month", "year", "custom")
RANGE_WINDOW_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
}

# Rental shoe sizes offered at the counter
MIN_SHOE_SIZE = 36
MAX_SHOE_SIZE = 50
SHOE_SIZES = [str(size) for size in range(MIN_SHOE_SIZE, MAX_SHOE_SIZE + 1)]
SHOE_SIZE_BUCKETS = [
    ("36-38", 36, 38),
    ("39-41", 39, 41),
    ("42-44", 42, 44),
    ("45+", 45, None),
]

# Inventory display thresholds
LOW_STOCK_THRESHOLD = 1

# Branding defaults and local storage keys
DEFAULT_BRAND_NAME = "SkateTrack"
DEFAULT_BRAND_COLOR = "#3b82f6"
DEFAULT_LOGO_URL = ""
BRAND_NAME_KEY = "brandName"
BRAND_COLOR_KEY = "brandColor"
LOGO_URL_KEY = "logoUrl"
BRAND_COLOR_SHIFT = 40
