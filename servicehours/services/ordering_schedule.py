"""
Application service answering the storefront's scheduling questions.

The service fetches schedule rows through a repository and delegates the
actual decisions to the domain components (availability evaluator, slot
generator, date option builder). Depending on a protocol rather than a
concrete store keeps it easy to test with an in-memory repository.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Protocol, Sequence

from pendulum import DateTime

from ..domain.availability import AvailabilityEvaluator
from ..domain.clock import Clock
from ..domain.date_options import DateOptionBuilder
from ..domain.models import Availability, DateOption, DaySlots, ResolvedTimeWindow, ServiceType, ServiceWindow
from ..domain.slot_generator import SlotGenerator
from ..domain.window_matcher import has_any_windows

logger = logging.getLogger(__name__)

# Stand-in window for services without any configured hours
ALWAYS_OPEN_WINDOW = ResolvedTimeWindow(open="00:00", close="23:59")


class ScheduleRepositoryProtocol(Protocol):
    """Protocol describing the schedule store behaviour needed by the service."""

    def get_schedules(self) -> List[ServiceWindow]:
        """Return all schedule windows of the restaurant."""


class OrderingScheduleService:
    """
    Orchestrates schedule retrieval and the scheduling engine.

    Every call re-reads the windows and the clock, so results always reflect
    the current schedule and "now".
    """

    def __init__(
        self,
        repository: ScheduleRepositoryProtocol,
        clock: Clock,
        lead_time_minutes: int = 20,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self.lead_time_minutes = lead_time_minutes

        self._evaluator = AvailabilityEvaluator(clock)
        self._slot_generator = SlotGenerator(clock)
        self._date_builder = DateOptionBuilder(clock)

    def load_windows(self) -> List[ServiceWindow]:
        """Fetch schedule windows from the repository."""
        windows = self._repository.get_schedules()
        logger.debug("Fetched %d schedule windows", len(windows))
        return windows

    def availability(
        self,
        service_type: ServiceType,
        windows: Optional[Sequence[ServiceWindow]] = None,
    ) -> Availability:
        """Tell whether the service is open right now."""
        windows = self.load_windows() if windows is None else windows
        return self._evaluator.evaluate(windows, service_type, self._clock.now())

    def date_options(
        self,
        service_type: ServiceType,
        windows: Optional[Sequence[ServiceWindow]] = None,
    ) -> List[DateOption]:
        """
        List the selectable dates.

        Without any configured hours every day counts as operating, the
        same fallback the availability evaluator applies.
        """
        windows = self.load_windows() if windows is None else windows
        options = self._date_builder.build(windows, service_type)

        if has_any_windows(windows, service_type):
            return options

        return [
            replace(
                option,
                label=option.label.replace(" (Closed)", ""),
                is_operating_day=True,
            )
            for option in options
        ]

    def now(self) -> DateTime:
        return self._clock.now()

    def minimum_lead_instant(self) -> DateTime:
        """Earliest instant an order placed now can be ready."""
        return self._clock.now().add(minutes=self.lead_time_minutes)

    def slots_for_date(
        self,
        service_type: ServiceType,
        date: DateTime,
        windows: Optional[Sequence[ServiceWindow]] = None,
    ) -> DaySlots:
        """
        Generate the orderable slots for a date.

        The minimum lead time only restricts slots when the date is today.
        """
        windows = self.load_windows() if windows is None else windows
        min_lead = self.minimum_lead_instant()

        if not has_any_windows(windows, service_type):
            day = date.start_of("day")
            return DaySlots(
                date=day,
                windows=[ALWAYS_OPEN_WINDOW],
                slots=self._slot_generator.generate_for_windows([ALWAYS_OPEN_WINDOW], day, min_lead),
            )

        day_slots = self._slot_generator.generate_for_day(windows, service_type, date, min_lead)

        if day_slots.is_past_cutoff:
            logger.debug("No %s slots left on %s", service_type.value, day_slots.date.to_date_string())

        return day_slots
