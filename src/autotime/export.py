#!/usr/bin/env python3
"""
CSV export of time entries.
"""

import csv
import io
from pathlib import Path
from typing import Iterable, List, Union

from .models import TimeEntry

CSV_HEADERS = [
    "Day",
    "Company",
    "Allocation",
    "Application",
    "Project",
    "Time Start",
    "Time Finish",
    "Hours",
    "Overview",
]


def entry_to_row(entry: TimeEntry) -> List[str]:
    return [
        entry.day,
        entry.company,
        entry.allocation,
        entry.application,
        entry.project,
        entry.formatted_start_time,
        entry.formatted_finish_time,
        f"{entry.duration_hours:.2f}",
        entry.overview,
    ]


def entries_to_csv(entries: Iterable[TimeEntry]) -> str:
    """Render entries as CSV text, one row per entry in the given order.

    Fields containing a comma, quote or newline are quoted and inner quotes
    are doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(entry_to_row(entry))
    return buffer.getvalue()


def export_csv(entries: Iterable[TimeEntry], path: Union[str, Path]) -> Path:
    """Write entries to a CSV file. OSError propagates to the caller."""
    path = Path(path)
    content = entries_to_csv(entries)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path
