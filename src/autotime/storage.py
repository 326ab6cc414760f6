#!/usr/bin/env python3
"""
Data storage and persistence for AutoTime.
Handles all file I/O for the entry ledger.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Union

from .models import TimeEntry


class LedgerStore:
    """Loads and saves the full entry ledger as a JSON document."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> List[TimeEntry]:
        """Load entries from disk. A missing or unreadable file yields []."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [TimeEntry.from_dict(record) for record in data]
        except (json.JSONDecodeError, IOError, KeyError, TypeError, ValueError) as e:
            print(f"Warning: Could not load ledger {self.path}: {e}")
            print("Starting with an empty ledger.")
            return []

    def save(self, entries: List[TimeEntry]) -> bool:
        """Rewrite the ledger file atomically. Returns False on failure."""
        records = [entry.to_dict() for entry in entries]

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".entries-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except (IOError, OSError) as e:
            print(f"Warning: Could not save ledger {self.path}: {e}")
            return False

        return True
