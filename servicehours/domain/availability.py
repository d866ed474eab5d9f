"""
Evaluation of whether a service is open at a given instant.
"""

import logging
from typing import List, Optional, Sequence

from pendulum import DateTime

from .clock import Clock
from .models import Availability, ResolvedTimeWindow, ServiceType, ServiceWindow
from .window_matcher import anchor_window, has_any_windows, is_overnight, match_windows, to_minutes, weekday_of

logger = logging.getLogger(__name__)

# Yesterday's overnight windows are only considered before this hour.
OVERNIGHT_LOOKBACK_HOUR = 6


class AvailabilityEvaluator:
    """
    Decides whether a service is open right now.

    Algorithm:
    1. No enabled window for the service at all -> always open
    2. Today's windows: open inside [open, close), or after the opening of an
       overnight window
    3. Before 06:00, yesterday's overnight windows: open before their close
    4. Still closed -> report the next opening later today
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def evaluate(
        self,
        windows: Sequence[ServiceWindow],
        service_type: ServiceType,
        now: Optional[DateTime] = None
    ) -> Availability:
        now = now or self.clock.now()

        if not has_any_windows(windows, service_type):
            logger.debug("No %s schedules configured, treating as always open", service_type.value)
            return Availability(is_open=True, has_any_schedules=False)

        today = now.start_of("day")
        todays_windows = match_windows(windows, weekday_of(today), service_type)

        for window in todays_windows:
            opens, closes = anchor_window(window, today)
            if opens <= now < closes:
                return Availability(is_open=True, has_any_schedules=True, closes_at=window.close)

        if now.hour < OVERNIGHT_LOOKBACK_HOUR:
            yesterday = today.subtract(days=1)
            for window in match_windows(windows, weekday_of(yesterday), service_type):
                if not is_overnight(window):
                    continue
                _, closes = anchor_window(window, yesterday)
                if now < closes:
                    return Availability(is_open=True, has_any_schedules=True, closes_at=window.close)

        return Availability(
            is_open=False,
            has_any_schedules=True,
            opens_at=self._next_opening(todays_windows, now)
        )

    @staticmethod
    def _next_opening(windows: List[ResolvedTimeWindow], now: DateTime) -> Optional[str]:
        """Earliest opening later today, if any."""
        current_minutes = now.hour * 60 + now.minute
        upcoming = [w.open for w in windows if to_minutes(w.open) > current_minutes]
        # windows arrive sorted by opening time
        return upcoming[0] if upcoming else None
