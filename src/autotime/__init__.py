"""
AutoTime - automatic timesheets from application and window activity.

This package infers how working time is spent from the foreground
application and window title, with:

- A sticky switching rule that absorbs brief distractions
- Idle detection from keyboard and mouse input
- A blacklist of applications that are never logged
- A JSON ledger of editable time entries
- CSV export of the ledger
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .classifier import TitleClassifier, classify
from .config import Config, TrackerConfig
from .ledger import EntryLedger
from .models import ActivitySession, Allocation, PendingSwitch, TimeEntry
from .tracker import ActivityTracker, TrackerState

__all__ = [
    "ActivitySession",
    "ActivityTracker",
    "Allocation",
    "Config",
    "EntryLedger",
    "PendingSwitch",
    "TimeEntry",
    "TitleClassifier",
    "TrackerConfig",
    "TrackerState",
    "classify",
]
