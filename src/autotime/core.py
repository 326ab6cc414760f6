#!/usr/bin/env python3
"""
AutoTime
Infers where working time goes from the foreground app and window title,
and keeps a ledger of time entries.
"""

import sys
import time
from pathlib import Path
from typing import Optional, Union

from .activity_monitor import ActivityMonitor
from .config import Config, TrackerConfig, load_config_from_env
from .export import export_csv
from .ledger import EntryLedger
from .logger import ActivityLogger
from .models import Allocation
from .storage import LedgerStore
from .tracker import ActivityTracker
from .utils import default_export_filename, format_duration

LEDGER_FILENAME = "entries.json"


class AutoTime:
    """
    AutoTime application - wires the tracker to the OS monitor and the ledger.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        data_dir: Optional[str] = None,
        company: Optional[str] = None,
        allocation: Optional[str] = None,
        verbose: Optional[bool] = None,
        idle_threshold: Optional[float] = None,
        sticky_threshold: Optional[float] = None,
    ):
        """
        Initialize AutoTime.

        Args:
            config (Optional[Config]): Settings. Loaded from the user config
                                       directory and environment if None.
            data_dir (Optional[str]): Directory holding the ledger file.
            company (Optional[str]): Company tag for entries of this workday.
            allocation (Optional[str]): Allocation tag for this workday.
            verbose (Optional[bool]): Print tracking events.
            idle_threshold (Optional[float]): Seconds without input before a
                                              session is closed.
            sticky_threshold (Optional[float]): Seconds a new activity must
                                                hold focus to be committed.
        """
        if config is None:
            config = Config()
            env_config = load_config_from_env()
            if env_config:
                config.update(env_config)
        self.config = config

        self.company = company if company is not None else config.default_company
        self.allocation = (
            allocation if allocation is not None else config.default_allocation
        )
        self.running = False

        base = config.tracker_config()
        self.tracker_config = TrackerConfig(
            idle_threshold=idle_threshold if idle_threshold is not None
            else base.idle_threshold,
            sticky_threshold=sticky_threshold if sticky_threshold is not None
            else base.sticky_threshold,
            blacklist=base.blacklist,
        )

        data_path = Path(data_dir) if data_dir else config.data_dir
        self.store = LedgerStore(data_path / LEDGER_FILENAME)
        self.ledger = EntryLedger(self.store)
        self.logger = ActivityLogger(
            verbose=config.verbose_logging if verbose is None else verbose
        )
        self.tracker = ActivityTracker(
            config=self.tracker_config,
            ledger=self.ledger,
            logger=self.logger,
        )
        self.monitor = ActivityMonitor(
            self.tracker, poll_interval=config.poll_interval
        )

    def start(self) -> None:
        """Start the workday: tracking plus OS polling."""
        if self.running:
            return
        print(f"Starting AutoTime... Ledger: {self.store.path}")
        print(
            f"Idle after {format_duration(self.tracker_config.idle_threshold)}, "
            f"switches stick after {self.tracker_config.sticky_threshold:.0f}s"
        )
        self.tracker.start(self.company, self.allocation)
        self.monitor.start()
        self.running = True

    def stop(self) -> None:
        """Stop the workday and close the current session."""
        if not self.running:
            return
        print("Stopping AutoTime...")
        self.monitor.stop()
        self.tracker.stop()
        self.running = False

    def run(self) -> None:
        """Start and block until stop() is called or the process is interrupted."""
        self.start()
        while self.running:
            time.sleep(0.5)

    def export_csv(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Export the ledger to CSV. Defaults to AutoTime_Export_<date>.csv."""
        target = Path(path) if path else Path.cwd() / default_export_filename()
        return export_csv(self.ledger.entries, target)

    def list_entries(self) -> None:
        """Print the ledger, most recent first."""
        entries = self.ledger.entries
        if not entries:
            print("No entries recorded yet")
            return

        for entry in entries:
            print(
                f"{entry.day} {entry.formatted_start_time}-"
                f"{entry.formatted_finish_time} "
                f"{format_duration(entry.duration_ms / 1000):>9} "
                f"{entry.company} / {entry.allocation} | "
                f"{entry.application} - {entry.project}"
            )
        print(f"\nTotal: {self.ledger.total_hours(entries):.2f} hours")


def _option_value(args, names):
    """Value following any of the given flags, or None."""
    for i, arg in enumerate(args):
        if arg in names and i + 1 < len(args) and not args[i + 1].startswith("-"):
            return args[i + 1]
    return None


def _normalize_allocation(value):
    """Match a standard allocation case-insensitively. Other labels pass through."""
    if value is None:
        return None
    for allocation in Allocation:
        if value.lower() == allocation.value.lower():
            return allocation.value
    return value


def print_help():
    print("AutoTime - automatic timesheets from app and window activity")
    print("Usage: autotime [options]")
    print("Options:")
    print("  --company NAME           Company tag for this workday")
    standard = ", ".join(allocation.value for allocation in Allocation)
    print(f"  --allocation NAME        Allocation tag ({standard}, or any label)")
    print("  --quiet, -q              Run in quiet mode (no logging)")
    print("  --idle-threshold SEC     Close sessions after SEC without input")
    print("  --sticky-threshold SEC   Commit a switch after SEC of focus")
    print("  --list                   Print recorded entries and exit")
    print("  --export [PATH]          Export entries to CSV and exit")
    print("  --help, -h               Show this help message")


def main():
    """Main entry point."""
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        print_help()
        return

    verbose = not ("--quiet" in args or "-q" in args)
    company = _option_value(args, ("--company",))
    allocation = _normalize_allocation(_option_value(args, ("--allocation",)))

    thresholds = {}
    for flag, key in (
        ("--idle-threshold", "idle_threshold"),
        ("--sticky-threshold", "sticky_threshold"),
    ):
        if flag in args:
            raw = _option_value(args, (flag,))
            try:
                thresholds[key] = float(raw)
            except (TypeError, ValueError):
                print(f"Invalid {flag.lstrip('-').replace('-', ' ')}: {raw}")
                return

    app = AutoTime(
        company=company,
        allocation=allocation,
        verbose=verbose,
        idle_threshold=thresholds.get("idle_threshold"),
        sticky_threshold=thresholds.get("sticky_threshold"),
    )

    if "--list" in args:
        app.list_entries()
        return

    if "--export" in args:
        try:
            path = app.export_csv(_option_value(args, ("--export",)))
        except OSError as e:
            print(f"Failed to export CSV: {e}")
            sys.exit(1)
        print(f"CSV exported to: {path}")
        return

    try:
        app.run()
    except KeyboardInterrupt:
        print("\nReceived interrupt signal")
    finally:
        app.stop()
        print("AutoTime stopped")


if __name__ == "__main__":
    main()
