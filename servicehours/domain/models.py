"""
Domain models for service windows, time slots and date options.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import pendulum
from pendulum import DateTime


class ServiceType(str, Enum):
    """The service a schedule governs."""
    DELIVERY = "delivery"
    TAKEOUT = "takeout"


WEEKDAY_NAMES = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}


def _format_clock_time(value: str) -> str:
    """Turn "15:00" into "3:00 PM"."""
    hours, minutes = value.split(":")
    return pendulum.datetime(2000, 1, 1, int(hours), int(minutes)).format("h:mm A")


@dataclass(frozen=True)
class ServiceWindow:
    """
    A recurring weekly window during which a service is offered.

    Days are numbered 0=Sunday to 6=Saturday. ``day_start > day_stop`` means
    the day range wraps across the Saturday/Sunday boundary (e.g. 5 to 1 is
    Friday through Monday). A window whose ``time_stop`` is at or before its
    ``time_start`` runs overnight into the following calendar day.
    """
    service_type: ServiceType
    day_start: int
    day_stop: int
    time_start: str  # "HH:MM"
    time_stop: str   # "HH:MM"
    is_enabled: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        for name in ("day_start", "day_stop"):
            value = getattr(self, name)
            if value not in range(7):
                raise ValueError(f"{name} must be between 0 and 6, got {value}")

    def describe_days(self) -> str:
        """Return the day range as text, e.g. "Friday–Monday"."""
        if self.day_start == self.day_stop:
            return WEEKDAY_NAMES[self.day_start]
        return f"{WEEKDAY_NAMES[self.day_start]}–{WEEKDAY_NAMES[self.day_stop]}"


@dataclass(frozen=True)
class ResolvedTimeWindow:
    """Open/close times of a window that applies to one concrete weekday."""
    open: str   # "HH:MM"
    close: str  # "HH:MM"

    def format_display(self) -> str:
        """Format as "11:00 AM – 10:00 PM"."""
        return f"{_format_clock_time(self.open)} – {_format_clock_time(self.close)}"


@dataclass(frozen=True)
class TimeSlot:
    """
    One orderable instant.

    ``is_next_day`` is set when the instant falls on the calendar day after
    the date the slots were generated for (overnight spill-over).
    """
    display_time: str  # "HH:mm"
    instant: DateTime
    is_next_day: bool = False

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: h:mm AM/PM, with " (next day)" for spill-over slots
        """
        text = self.instant.format("h:mm A")
        if self.is_next_day:
            text += " (next day)"
        return text


@dataclass
class DaySlots:
    """All slots for one calendar date together with the windows behind them."""
    date: DateTime
    windows: List[ResolvedTimeWindow] = field(default_factory=list)
    slots: List[TimeSlot] = field(default_factory=list)

    @property
    def is_closed_day(self) -> bool:
        """No window applies to this date at all."""
        return not self.windows

    @property
    def is_past_cutoff(self) -> bool:
        """Windows apply, but the lead time left none of their slots."""
        return bool(self.windows) and not self.slots


@dataclass(frozen=True)
class DateOption:
    """A selectable day within the ordering horizon."""
    iso_date: str  # "YYYY-MM-DD"
    label: str
    weekday: int  # 0=Sunday
    is_operating_day: bool


@dataclass(frozen=True)
class Availability:
    """Whether a service is open right now, for availability banners."""
    is_open: bool
    has_any_schedules: bool
    opens_at: Optional[str] = None   # "HH:MM", when closed and opening later today
    closes_at: Optional[str] = None  # "HH:MM", when open
