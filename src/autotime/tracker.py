#!/usr/bin/env python3
"""
Activity tracking state machine for AutoTime.

Decides, from foreground-change and user-input events plus a 1 Hz tick,
when one loggable activity ends and another begins.

A new application (or a new project inside the same application) only
replaces the current session once it has held focus for longer than the
sticky threshold. Short excursions are absorbed into the current session.
Sessions are closed when input stops for longer than the idle threshold, or
when a blacklisted application keeps focus for that long. Every boundary is
retroactive: entries end at the moment attention actually moved (last
input, blacklist start, switch time), never at the tick that noticed it.
"""

import threading
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from .classifier import classify
from .clock import SystemClock, Ticker
from .config import TrackerConfig
from .ledger import EntryLedger
from .logger import ActivityLogger
from .models import (
    DEFAULT_ALLOCATION,
    DEFAULT_COMPANY,
    MIN_ENTRY_SECONDS,
    ActivitySession,
    BlacklistDwell,
    PendingSwitch,
    TimeEntry,
)

SESSION_CHANGED = "session_changed"
PENDING_CHANGED = "pending_changed"
ENTRY_FINALIZED = "entry_finalized"
EVENTS = (SESSION_CHANGED, PENDING_CHANGED, ENTRY_FINALIZED)

Notification = Tuple[str, Any]


class TrackerState(Enum):
    STOPPED = "stopped"
    IDLE = "idle"
    ACTIVE = "active"
    ACTIVE_WITH_PENDING = "active_with_pending"


class ActivityTracker:
    """Owns the current session, the pending switch and blacklist dwell."""

    def __init__(
        self,
        config: Optional[TrackerConfig] = None,
        ledger: Optional[EntryLedger] = None,
        clock: Optional[Any] = None,
        logger: Optional[ActivityLogger] = None,
        classifier: Optional[Callable[[str, str], str]] = None,
        ticker: Optional[Ticker] = None,
    ):
        self.config = config or TrackerConfig()
        self.ledger = ledger if ledger is not None else EntryLedger()
        self.clock = clock or SystemClock()
        self.logger = logger or ActivityLogger(verbose=False)
        self.classify = classifier or classify
        self.ticker = ticker or Ticker(self.config.tick_interval, self.tick)

        self._lock = threading.RLock()
        # Notifications queued under _lock, delivered in order by one drainer
        self._outbox: Deque[Notification] = deque()
        self._dispatch_lock = threading.Lock()
        self._listeners: Dict[str, List[Callable[[Any], None]]] = {
            event: [] for event in EVENTS
        }

        self.is_tracking = False
        self.company = ""
        self.allocation = ""
        self.last_input_time: datetime = self.clock.now()

        self._session: Optional[ActivitySession] = None
        self._pending: Optional[PendingSwitch] = None
        self._dwell: Optional[BlacklistDwell] = None

    # Observation

    @property
    def session(self) -> Optional[ActivitySession]:
        with self._lock:
            return self._session

    @property
    def pending_switch(self) -> Optional[PendingSwitch]:
        with self._lock:
            return self._pending

    @property
    def blacklist_dwell(self) -> Optional[BlacklistDwell]:
        with self._lock:
            return self._dwell

    @property
    def state(self) -> TrackerState:
        with self._lock:
            if not self.is_tracking:
                return TrackerState.STOPPED
            if self._session is None:
                return TrackerState.IDLE
            if self._pending is None:
                return TrackerState.ACTIVE
            return TrackerState.ACTIVE_WITH_PENDING

    def subscribe(self, event: str, callback: Callable[[Any], None]) -> None:
        """Register a callback for session_changed, pending_changed or entry_finalized.

        Callbacks run outside the state lock and see notifications in the
        order the state changed. When several threads change state at once,
        a callback may run on whichever thread is delivering at the time.
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}")
        with self._lock:
            self._listeners[event].append(callback)

    def unsubscribe(self, event: str, callback: Callable[[Any], None]) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}")
        with self._lock:
            if callback in self._listeners[event]:
                self._listeners[event].remove(callback)

    # Inputs

    def start(self, company: str = "", allocation: str = "") -> None:
        """Begin a workday tagged with company and allocation."""
        events = self._outbox
        with self._lock:
            if self.is_tracking:
                return
            self.company = company or ""
            self.allocation = allocation or ""
            self._dwell = None
            self._set_pending(None, events)
            self._set_session(None, events)
            self.last_input_time = self.clock.now()
            self.is_tracking = True

        self.logger.log_tracking_start(self.company, self.allocation)
        self.ticker.start()
        self._dispatch()

    def stop(self) -> None:
        """Close the current session at now and stop tracking."""
        events = self._outbox
        with self._lock:
            if not self.is_tracking:
                return
            self.is_tracking = False
            if self._session is not None:
                self._finalize(self._session, self.clock.now(), events)
            self._dwell = None
            self._set_pending(None, events)
            self._set_session(None, events)

        self.ticker.stop()
        self.logger.log_tracking_stop()
        self._dispatch()

    def on_foreground_change(self, application: str, raw_title: str) -> None:
        """Handle a change of front-most application or window title."""
        project = self.classify(application, raw_title)
        events = self._outbox

        with self._lock:
            if not self.is_tracking:
                return

            now = self.clock.now()
            self._record_input(now)

            if self.config.is_blacklisted(application):
                if self._dwell is None:
                    self._dwell = BlacklistDwell(start=now)
                return

            # Coming back from a blacklisted app cancels its dwell clock
            self._dwell = None

            if self._session is None:
                self._set_session(
                    ActivitySession(application, project, now, now), events
                )
                self._set_pending(None, events)
                self.logger.log_session_started(application, project)
            elif self._session.matches(application, project):
                if self._pending is not None:
                    self.logger.log_switch_cancelled(application, project)
                self._set_pending(None, events)
            elif self._pending is None or not self._pending.matches(
                application, project
            ):
                self._set_pending(PendingSwitch(application, project, now), events)
                self.logger.log_switch_pending(application, project)

        self._dispatch()

    def on_user_input(self, at: Optional[datetime] = None) -> None:
        """Record keyboard or mouse activity, optionally at a known past instant."""
        with self._lock:
            if not self.is_tracking:
                return
            self._record_input(at or self.clock.now())

    def tick(self) -> None:
        """Evaluate idle, blacklist and sticky thresholds, in that order."""
        events = self._outbox

        with self._lock:
            if not self.is_tracking:
                return

            now = self.clock.now()
            idle_threshold = self.config.idle_threshold

            idle_for = (now - self.last_input_time).total_seconds()
            if idle_for > idle_threshold:
                if self._session is not None:
                    self.logger.log_idle_detected(idle_for)
                    self._finalize(self._session, self.last_input_time, events)
                    self._set_session(None, events)
                    self._set_pending(None, events)
            else:
                self._check_blacklist(now, events)
                self._check_sticky(now, events)

        self._dispatch()

    # Tick branches

    def _check_blacklist(self, now: datetime, events: Deque[Notification]) -> None:
        if self._dwell is None:
            return

        dwell_for = (now - self._dwell.start).total_seconds()
        if dwell_for <= self.config.idle_threshold:
            return

        self.logger.log_blacklist_timeout(dwell_for)
        if self._session is not None:
            self._finalize(self._session, self._dwell.start, events)
        self._set_session(None, events)
        self._set_pending(None, events)
        self._dwell = None

    def _check_sticky(self, now: datetime, events: Deque[Notification]) -> None:
        pending = self._pending
        if pending is None:
            return

        if (now - pending.switch_time).total_seconds() <= self.config.sticky_threshold:
            return

        previous = self._session
        if previous is not None:
            self._finalize(previous, pending.switch_time, events)

        self._set_session(
            ActivitySession(
                pending.application, pending.project, pending.switch_time, now
            ),
            events,
        )
        self._set_pending(None, events)
        self.logger.log_switch_committed(
            previous.application if previous else "-",
            pending.application,
            pending.project,
        )

    # Helpers (caller holds the lock)

    def _record_input(self, at: datetime) -> None:
        if at > self.last_input_time:
            self.last_input_time = at
        session = self._session
        if session is not None and at > session.last_active_time:
            session.last_active_time = at

    def _set_session(
        self, session: Optional[ActivitySession], events: Deque[Notification]
    ) -> None:
        if session is None and self._session is None:
            return
        self._session = session
        events.append((SESSION_CHANGED, session))

    def _set_pending(
        self, pending: Optional[PendingSwitch], events: Deque[Notification]
    ) -> None:
        if pending is None and self._pending is None:
            return
        self._pending = pending
        events.append((PENDING_CHANGED, pending))

    def _finalize(
        self,
        session: ActivitySession,
        end_time: datetime,
        events: Deque[Notification],
    ) -> Optional[TimeEntry]:
        """Turn a session into a ledger entry unless it is shorter than the noise floor."""
        duration = (end_time - session.start_time).total_seconds()
        if duration < MIN_ENTRY_SECONDS:
            self.logger.log_entry_discarded(session.application, duration)
            return None

        entry = TimeEntry(
            company=self.company or DEFAULT_COMPANY,
            allocation=self.allocation or DEFAULT_ALLOCATION,
            application=session.application,
            project=session.project,
            time_start=session.start_time,
            time_finish=end_time,
        )
        self.ledger.add(entry)
        self.logger.log_entry_recorded(entry)
        events.append((ENTRY_FINALIZED, entry))
        return entry

    def _dispatch(self) -> None:
        """Deliver queued notifications unless another call is already doing so."""
        while self._dispatch_lock.acquire(blocking=False):
            try:
                while True:
                    with self._lock:
                        if not self._outbox:
                            break
                        event, payload = self._outbox.popleft()
                        callbacks = list(self._listeners[event])
                    for callback in callbacks:
                        try:
                            callback(payload)
                        except Exception as e:
                            self.logger.log_listener_error(event, e)
            finally:
                self._dispatch_lock.release()

            # Pick up anything queued between the last check and the release
            with self._lock:
                if not self._outbox:
                    return
