#!/usr/bin/env python3
"""
Filesystem and formatting helpers for AutoTime.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

APP_NAME = "AutoTime"


def get_app_support_directory() -> Path:
    """Base directory for AutoTime settings and data (not created)."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def get_data_directory() -> Path:
    """Get the directory the ledger lives in, creating it if needed."""
    data_dir = get_app_support_directory() / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def default_export_filename(now: Optional[datetime] = None) -> str:
    """File name offered for CSV exports, e.g. AutoTime_Export_2024-01-15.csv."""
    now = now or datetime.now()
    return f"{APP_NAME}_Export_{now.strftime('%Y-%m-%d')}.csv"


def format_duration(seconds: float) -> str:
    """Format a duration as H:MM:SS."""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
