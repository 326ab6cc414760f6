#!/usr/bin/env python3
"""
Data model for AutoTime.
Sessions and pending switches live in the tracker; time entries live in the ledger.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict

MIN_ENTRY_SECONDS = 10
DEFAULT_COMPANY = "Pending"
DEFAULT_ALLOCATION = "Unassigned"

DAY_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M:%S"


def local_time(moment: datetime) -> datetime:
    """Moment in the local timezone for display. Naive values are taken as local."""
    return moment.astimezone()


class Allocation(str, Enum):
    """Standard allocation labels offered when starting a workday."""

    PRODUCTION = "Production"
    EDITING = "Editing"
    UNASSIGNED = "Unassigned"


@dataclass
class ActivitySession:
    """The activity currently believed to be receiving the user's attention."""

    application: str
    project: str
    start_time: datetime
    last_active_time: datetime

    def matches(self, application: str, project: str) -> bool:
        return self.application == application and self.project == project


@dataclass(frozen=True)
class PendingSwitch:
    """A candidate activity observed while another session is active."""

    application: str
    project: str
    switch_time: datetime

    def matches(self, application: str, project: str) -> bool:
        return self.application == application and self.project == project


@dataclass(frozen=True)
class BlacklistDwell:
    """Moment a blacklisted application took over the foreground."""

    start: datetime


@dataclass
class TimeEntry:
    """A finalized block of time attributed to one application and project."""

    application: str
    project: str
    time_start: datetime
    time_finish: datetime
    company: str = DEFAULT_COMPANY
    allocation: str = DEFAULT_ALLOCATION
    overview: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    day: str = ""

    def __post_init__(self):
        if not self.day:
            self.day = local_time(self.time_start).strftime(DAY_FORMAT)

    @property
    def duration_ms(self) -> int:
        delta = self.time_finish - self.time_start
        return int(delta.total_seconds() * 1000)

    @property
    def duration_hours(self) -> float:
        return self.duration_ms / 3_600_000

    @property
    def formatted_start_time(self) -> str:
        return local_time(self.time_start).strftime(TIME_FORMAT)

    @property
    def formatted_finish_time(self) -> str:
        return local_time(self.time_finish).strftime(TIME_FORMAT)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the ledger's camelCase field names."""
        return {
            "id": self.id,
            "day": self.day,
            "company": self.company,
            "allocation": self.allocation,
            "application": self.application,
            "project": self.project,
            "timeStart": self.time_start.isoformat(timespec="microseconds"),
            "timeFinish": self.time_finish.isoformat(timespec="microseconds"),
            "overview": self.overview,
            "durationMs": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeEntry":
        """Build an entry from a ledger record. durationMs is recomputed."""
        return cls(
            id=data["id"],
            day=data.get("day", ""),
            company=data.get("company", DEFAULT_COMPANY),
            allocation=data.get("allocation", DEFAULT_ALLOCATION),
            application=data["application"],
            project=data.get("project", ""),
            time_start=datetime.fromisoformat(data["timeStart"]),
            time_finish=datetime.fromisoformat(data["timeFinish"]),
            overview=data.get("overview", ""),
        )
