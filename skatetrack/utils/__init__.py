"""
Utilities package for the SkateTrack dashboard.

This package contains time helpers and constants used throughout the application.
"""
from .time_utils import (
    Duration, InvalidTimeFormat, InvalidDurationFormat, now_dt,
    parse_time_of_day, format_time_of_day, parse_duration_token,
    compute_end_time, has_elapsed
)
from .constants import (
    APP_TITLE, DEFAULT_CREATED_BY, SESSION_TYPE_DURATIONS, DEFAULT_SESSION_TYPE,
    SWEEP_INTERVAL_SECONDS, CLOCK_INTERVAL_SECONDS, DISPLAY_REFRESH_SECONDS,
    BUSY_DAY_THRESHOLD, BUSY_DAY_NOTE, CURRENCY_PREFIX, RANGE_KINDS,
    RANGE_WINDOW_DAYS, SHOE_SIZES, SHOE_SIZE_BUCKETS,
    LOW_STOCK_THRESHOLD, DEFAULT_BRAND_NAME, DEFAULT_BRAND_COLOR,
    DEFAULT_LOGO_URL, BRAND_NAME_KEY, BRAND_COLOR_KEY, LOGO_URL_KEY,
    BRAND_COLOR_SHIFT
)

__all__ = [
    "Duration", "InvalidTimeFormat", "InvalidDurationFormat", "now_dt",
    "parse_time_of_day", "format_time_of_day", "parse_duration_token",
    "compute_end_time", "has_elapsed",
    "APP_TITLE", "DEFAULT_CREATED_BY", "SESSION_TYPE_DURATIONS",
    "DEFAULT_SESSION_TYPE", "SWEEP_INTERVAL_SECONDS", "CLOCK_INTERVAL_SECONDS",
    "DISPLAY_REFRESH_SECONDS", "BUSY_DAY_THRESHOLD", "BUSY_DAY_NOTE",
    "CURRENCY_PREFIX", "RANGE_KINDS", "RANGE_WINDOW_DAYS",
    "SHOE_SIZES", "SHOE_SIZE_BUCKETS", "LOW_STOCK_THRESHOLD",
    "DEFAULT_BRAND_NAME", "DEFAULT_BRAND_COLOR", "DEFAULT_LOGO_URL",
    "BRAND_NAME_KEY", "BRAND_COLOR_KEY", "LOGO_URL_KEY", "BRAND_COLOR_SHIFT"
]
