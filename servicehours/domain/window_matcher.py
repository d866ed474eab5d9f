"""
Matching of recurring service windows against concrete days.

Every component that needs to know which windows apply to a day, whether a
window runs past midnight, or where a window sits on the calendar goes
through the helpers in this module.
"""

from typing import Iterable, List, Tuple

from pendulum import DateTime

from .models import ResolvedTimeWindow, ServiceType, ServiceWindow


def weekday_of(moment) -> int:
    """Return the weekday of a date or datetime, 0=Sunday to 6=Saturday."""
    return moment.isoweekday() % 7


def to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def window_applies_to_day(window: ServiceWindow, weekday: int) -> bool:
    """
    Check whether a window's day range covers the given weekday.

    A range with ``day_start > day_stop`` wraps over the end of the week,
    so Friday(5)–Monday(1) covers {5, 6, 0, 1}.
    """
    if window.day_start <= window.day_stop:
        return window.day_start <= weekday <= window.day_stop
    return weekday >= window.day_start or weekday <= window.day_stop


def match_windows(
    windows: Iterable[ServiceWindow],
    weekday: int,
    service_type: ServiceType
) -> List[ResolvedTimeWindow]:
    """
    Resolve the enabled windows of a service that apply to a weekday.

    Returns the open/close pairs sorted by opening time.
    """
    resolved = [
        ResolvedTimeWindow(open=window.time_start, close=window.time_stop)
        for window in windows
        if window.service_type == service_type
        and window.is_enabled
        and window_applies_to_day(window, weekday)
    ]
    return sorted(resolved, key=lambda w: to_minutes(w.open))


def has_any_windows(windows: Iterable[ServiceWindow], service_type: ServiceType) -> bool:
    """Check whether a service has at least one enabled window anywhere in the week."""
    return any(
        window.service_type == service_type and window.is_enabled
        for window in windows
    )


def is_overnight(window: ResolvedTimeWindow) -> bool:
    """
    A window closing at or before its opening time runs into the next day.

    20:00–02:00 is overnight, 11:00–22:00 is not. A zero-length window
    (open == close) also counts as overnight.
    """
    return to_minutes(window.close) <= to_minutes(window.open)


def anchor_window(window: ResolvedTimeWindow, day: DateTime) -> Tuple[DateTime, DateTime]:
    """
    Place a window on the calendar for the given day.

    The close instant moves to the following date for overnight windows.
    """
    midnight = day.start_of("day")
    open_hour, open_minute = divmod(to_minutes(window.open), 60)
    close_hour, close_minute = divmod(to_minutes(window.close), 60)

    opens = midnight.set(hour=open_hour, minute=open_minute)
    close_day = midnight.add(days=1) if is_overnight(window) else midnight
    closes = close_day.set(hour=close_hour, minute=close_minute)

    return opens, closes
