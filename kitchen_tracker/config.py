"""Runtime configuration defaults for search, dates and the debug log."""

from __future__ import annotations

import os

# Queries shorter than this (after trimming) leave the kitchen list unfiltered.
SEARCH_MIN_CHARS = 2

DATE_DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
UNKNOWN_DATE_LABEL = "unknown date"

_DEBUG_LOG_ENV = "KITCHEN_TRACKER_DEBUG_LOG"
DEBUG_LOG_PATH = os.environ.get(_DEBUG_LOG_ENV, "").strip() or "/tmp/kitchen-tracker-debug.log"
