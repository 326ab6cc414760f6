#!/usr/bin/env python3
"""
Entry ledger for AutoTime.
Most-recent-first collection of finalized time entries, safe to mutate from
the tracker and from user edits at the same time.
"""

import threading
from datetime import date, datetime, time
from typing import List, Optional

from .models import TimeEntry, local_time
from .storage import LedgerStore

EDITABLE_FIELDS = ("company", "allocation", "project", "overview")


class EntryLedger:
    """Thread-safe ledger of time entries, persisted on every mutation."""

    def __init__(self, store: Optional[LedgerStore] = None):
        self.store = store
        self._lock = threading.Lock()
        self._entries: List[TimeEntry] = store.load() if store else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def entries(self) -> List[TimeEntry]:
        """Snapshot of all entries, most recent first."""
        with self._lock:
            return list(self._entries)

    def add(self, entry: TimeEntry) -> None:
        """Insert a finalized entry at the head of the ledger."""
        with self._lock:
            self._entries.insert(0, entry)
            self._save()

    def get(self, entry_id: str) -> TimeEntry:
        with self._lock:
            return self._find(entry_id)

    def update(self, entry_id: str, **changes) -> TimeEntry:
        """Apply user edits to an entry in place.

        Only company, allocation, project and overview may be edited.

        Raises:
            KeyError: if no entry has the given id.
            ValueError: if a non-editable field is passed.
        """
        invalid = set(changes) - set(EDITABLE_FIELDS)
        if invalid:
            raise ValueError(f"Fields not editable: {', '.join(sorted(invalid))}")

        with self._lock:
            entry = self._find(entry_id)
            for name, value in changes.items():
                setattr(entry, name, value)
            self._save()
            return entry

    def delete(self, entry_id: str) -> TimeEntry:
        """Remove an entry. Raises KeyError if the id is unknown."""
        with self._lock:
            entry = self._find(entry_id)
            self._entries.remove(entry)
            self._save()
            return entry

    def get_entries(
        self,
        day: date,
        start_seconds: float = 0,
        end_seconds: float = 86400,
    ) -> List[TimeEntry]:
        """Entries of a day that start or finish inside a window of that day.

        The window is given in seconds since midnight.
        """
        if isinstance(day, datetime):
            day = day.date()
        start_of_day = datetime.combine(day, time.min)

        matches = []
        for entry in self.entries:
            # Compare on the local wall clock the user sees
            start = local_time(entry.time_start).replace(tzinfo=None)
            finish = local_time(entry.time_finish).replace(tzinfo=None)
            if start.date() != day:
                continue
            start_sec = (start - start_of_day).total_seconds()
            finish_sec = (finish - start_of_day).total_seconds()
            if (start_seconds <= start_sec <= end_seconds) or (
                start_seconds <= finish_sec <= end_seconds
            ):
                matches.append(entry)
        return matches

    def total_hours(self, entries: Optional[List[TimeEntry]] = None) -> float:
        if entries is None:
            entries = self.entries
        return sum(entry.duration_hours for entry in entries)

    def _find(self, entry_id: str) -> TimeEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise KeyError(entry_id)

    def _save(self) -> None:
        if self.store:
            self.store.save(self._entries)
