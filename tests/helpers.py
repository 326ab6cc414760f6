"""Shared test helpers."""

from datetime import datetime, timedelta

T0 = datetime(2024, 1, 15, 9, 0, 0)


class FakeClock:
    """Manually advanced clock, expressed in seconds after T0."""

    def __init__(self, start: datetime = T0):
        self.origin = start
        self.current = start

    def now(self) -> datetime:
        return self.current

    def set(self, seconds: float) -> datetime:
        self.current = self.origin + timedelta(seconds=seconds)
        return self.current

    def at(self, seconds: float) -> datetime:
        return self.origin + timedelta(seconds=seconds)
