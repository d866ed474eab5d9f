"""
Clock abstraction so the engine can run against a fixed synthetic "now".
"""

from typing import Protocol

import pendulum
from pendulum import DateTime


class Clock(Protocol):
    """Anything able to tell the current instant."""

    def now(self) -> DateTime:
        """Return the current instant."""


class SystemClock:
    """Wall clock in a single configured timezone."""

    def __init__(self, timezone: str = "America/New_York"):
        self.timezone = timezone

    def now(self) -> DateTime:
        return pendulum.now(self.timezone)


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and by the CLI ``--at`` option.
    """

    def __init__(self, instant: DateTime):
        self.instant = instant

    def now(self) -> DateTime:
        return self.instant
