#!/usr/bin/env python3
"""
Console output for AutoTime tracking events.
"""

from datetime import datetime

from .models import TimeEntry


class ActivityLogger:
    """Handles logging and output for activity tracking."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def _emit(self, message: str) -> None:
        if not self.verbose:
            return

        now_str = datetime.now().strftime("%H:%M:%S")
        print(f"[{now_str}] {message}")

    def log_tracking_start(self, company: str, allocation: str) -> None:
        """Log tracking start information."""
        if not self.verbose:
            return

        print("Workday started - watching for app switches...")
        print(f"Company: {company or 'Pending'} | Allocation: {allocation or 'Unassigned'}")
        print("Format: [HH:MM:SS] Event: App - Project")
        print("-" * 70)

    def log_session_started(self, application: str, project: str) -> None:
        self._emit(f"Session: {application} - {project}")

    def log_switch_pending(self, application: str, project: str) -> None:
        self._emit(f"Pending: {application} - {project}")

    def log_switch_cancelled(self, application: str, project: str) -> None:
        self._emit(f"Back to: {application} - {project} (pending switch cancelled)")

    def log_switch_committed(self, old_app: str, new_app: str, project: str) -> None:
        self._emit(f"Switch: {old_app} -> {new_app} - {project}")

    def log_idle_detected(self, idle_time: float) -> None:
        """Log idle state detection."""
        self._emit(
            f"[IDLE] No input for {idle_time:.0f}s - closing session"
        )

    def log_blacklist_timeout(self, dwell_time: float) -> None:
        self._emit(
            f"[BLACKLIST] Disregarded app held focus for {dwell_time:.0f}s "
            f"- closing session"
        )

    def log_entry_recorded(self, entry: TimeEntry) -> None:
        self._emit(
            f"Recorded: {entry.application} - {entry.project} "
            f"({entry.duration_ms / 1000:.1f}s)"
        )

    def log_entry_discarded(self, application: str, duration: float) -> None:
        self._emit(f"Discarded: {application} ({duration:.1f}s is below noise floor)")

    def log_listener_error(self, event: str, error: Exception) -> None:
        # Errors are always reported, even in quiet mode
        print(f"Warning: {event} listener failed: {error}")

    def log_tracking_stop(self) -> None:
        """Log tracking stop."""
        if self.verbose:
            print("\nTracking stopped")
