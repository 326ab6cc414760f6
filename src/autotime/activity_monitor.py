#!/usr/bin/env python3
"""
Activity monitoring loop for AutoTime.
Polls the OS detectors and feeds foreground and input events to the tracker.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional, Tuple

from .clock import SystemClock
from .detection import ApplicationDetector, InputDetector, WindowTitleDetector
from .tracker import ActivityTracker

# The idle counter and the wall clock are read at slightly different moments
INPUT_JITTER = timedelta(milliseconds=500)


@dataclass
class MonitorConfig:
    """Configuration for ActivityMonitor."""

    poll_interval: float = 2.0
    include_window_titles: bool = True


class ActivityMonitor:
    """Turns polled OS state into foreground-change and user-input events."""

    def __init__(
        self,
        tracker: ActivityTracker,
        poll_interval: float = 2.0,
        include_window_titles: bool = True,
        app_detector: Optional[ApplicationDetector] = None,
        window_detector: Optional[WindowTitleDetector] = None,
        input_detector: Optional[InputDetector] = None,
        clock: Optional[Any] = None,
    ):
        self.config = MonitorConfig(
            poll_interval=poll_interval,
            include_window_titles=include_window_titles,
        )
        self.tracker = tracker
        self.clock = clock or SystemClock()

        # Composition - allow dependency injection
        self.app_detector = app_detector or ApplicationDetector()
        self.input_detector = input_detector or InputDetector()
        self.window_detector: Optional[WindowTitleDetector] = None
        if self.config.include_window_titles:
            self.window_detector = window_detector or WindowTitleDetector()

        self.last_foreground: Optional[Tuple[str, str]] = None
        self.last_input_time: Optional[datetime] = None

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def poll_interval(self) -> float:
        return self.config.poll_interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def get_current_activity(self) -> Optional[Tuple[str, str]]:
        """Get the current (application, raw window title) pair."""
        app_name = self.app_detector.get_active_application()
        if not app_name:
            return None

        if not self.window_detector:
            return app_name, ""

        return app_name, self.window_detector.get_window_title(app_name) or ""

    def check_input(self, now: datetime) -> bool:
        """Forward input newer than the last one seen. Returns True if forwarded."""
        idle_seconds = self.input_detector.seconds_since_last_input()
        input_at = now - timedelta(seconds=idle_seconds)

        if (
            self.last_input_time is not None
            and input_at - self.last_input_time <= INPUT_JITTER
        ):
            return False

        self.last_input_time = input_at
        self.tracker.on_user_input(at=min(input_at, now))
        return True

    def poll_once(self) -> None:
        """Sample the detectors once and forward any changes."""
        now = self.clock.now()
        input_seen = self.check_input(now)

        activity = self.get_current_activity()
        if activity is None:
            return

        # After an idle timeout the user may resume in the same window;
        # re-announce it so a new session starts.
        if input_seen and self.tracker.is_tracking and self.tracker.session is None:
            self.last_foreground = None

        if activity != self.last_foreground:
            self.last_foreground = activity
            self.tracker.on_foreground_change(*activity)

    def start(self) -> None:
        """Start polling on a background daemon thread."""
        if self.running:
            return
        self._stop_event.clear()
        self.last_foreground = None
        self.last_input_time = None
        self._thread = threading.Thread(
            target=self._run, name="autotime-monitor", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait for the thread to exit."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                print(f"Error in monitoring loop: {e}")
            self._stop_event.wait(self.config.poll_interval)
