"""
Core logic for generating orderable time slots.

Pure domain logic: windows and dates go in, slots come out. The only
ambient input is the clock, used to recognise "today".
"""

import logging
from typing import Dict, List, Optional, Sequence

from pendulum import DateTime

from .clock import Clock
from .models import DaySlots, ResolvedTimeWindow, ServiceType, ServiceWindow, TimeSlot
from .window_matcher import anchor_window, match_windows, weekday_of

logger = logging.getLogger(__name__)

SLOT_INTERVAL_MINUTES = 30
MAX_SLOTS_PER_WINDOW = 48


def round_up_to_interval(instant: DateTime, interval_minutes: int = SLOT_INTERVAL_MINUTES) -> DateTime:
    """
    Round an instant up to the next wall-clock boundary of the interval.

    Example: 22:10 -> 22:30, 22:30 -> 22:30, 22:30:15 -> 23:00
    """
    floored = instant.set(
        minute=instant.minute - instant.minute % interval_minutes,
        second=0,
        microsecond=0
    )
    if floored == instant:
        return floored
    return floored.add(minutes=interval_minutes)


class SlotGenerator:
    """
    Enumerates orderable instants inside service windows.

    Algorithm:
    1. Anchor open/close on the target date (overnight close -> next date)
    2. Start at open, or at the lead instant rounded up to the cadence when
       the target date is today
    3. Step every 30 minutes up to and including close
    4. Stop after 48 slots per window
    5. Merge the slots of all windows of the day, dedupe and sort
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def generate_for_window(
        self,
        window: ResolvedTimeWindow,
        target_date: DateTime,
        min_lead: Optional[DateTime] = None
    ) -> List[TimeSlot]:
        """
        Generate the slots of one window on one date.

        Args:
            window: Open/close pair applying to the target date
            target_date: Any instant on the calendar date to generate for
            min_lead: Earliest acceptable instant, only honoured for today

        Returns:
            Slots in ascending order, possibly empty
        """
        day = target_date.start_of("day")
        opens, closes = anchor_window(window, day)
        current = opens

        if min_lead is not None and self._is_today(day):
            earliest = round_up_to_interval(min_lead)
            if earliest >= closes:
                logger.debug(
                    "Lead time %s is past close %s, no slots left",
                    earliest.format("HH:mm"),
                    window.close
                )
                return []
            current = max(current, earliest)

        slots: List[TimeSlot] = []

        while current <= closes:
            if len(slots) >= MAX_SLOTS_PER_WINDOW:
                logger.debug(
                    "Reached %d slots for window %s-%s, stopping",
                    MAX_SLOTS_PER_WINDOW,
                    window.open,
                    window.close
                )
                break

            slots.append(
                TimeSlot(
                    display_time=current.format("HH:mm"),
                    instant=current,
                    is_next_day=current.date() != day.date()
                )
            )
            current = current.add(minutes=SLOT_INTERVAL_MINUTES)

        return slots

    def generate_for_windows(
        self,
        windows: Sequence[ResolvedTimeWindow],
        target_date: DateTime,
        min_lead: Optional[DateTime] = None
    ) -> List[TimeSlot]:
        """
        Generate slots for several windows of the same day (e.g. lunch and
        dinner), merged, de-duplicated by instant and sorted.
        """
        by_instant: Dict[DateTime, TimeSlot] = {}

        for window in windows:
            for slot in self.generate_for_window(window, target_date, min_lead):
                by_instant.setdefault(slot.instant, slot)

        return [by_instant[instant] for instant in sorted(by_instant)]

    def generate_for_day(
        self,
        windows: Sequence[ServiceWindow],
        service_type: ServiceType,
        target_date: DateTime,
        min_lead: Optional[DateTime] = None
    ) -> DaySlots:
        """Resolve the windows of the target date's weekday and generate their slots."""
        day = target_date.start_of("day")
        resolved = match_windows(windows, weekday_of(day), service_type)

        return DaySlots(
            date=day,
            windows=resolved,
            slots=self.generate_for_windows(resolved, day, min_lead)
        )

    def _is_today(self, day: DateTime) -> bool:
        return day.date() == self.clock.now().date()
