#!/usr/bin/env python3
"""
Time source and fixed-rate ticker used to drive the tracking state machine.
"""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional


class SystemClock:
    """Absolute time source. Instants are UTC so intervals survive DST changes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class Ticker:
    """Calls a function at a fixed interval on a background daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. Does nothing if already running."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="autotime-ticker", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop ticking and wait for the thread to exit."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                print(f"Error in tick callback: {e}")
