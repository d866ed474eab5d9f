"""
Builder for the selectable ordering dates.
"""

from typing import List, Sequence

from .clock import Clock
from .models import DateOption, ServiceType, ServiceWindow
from .window_matcher import match_windows, weekday_of

HORIZON_DAYS = 7


class DateOptionBuilder:
    """Lists today and the following days, flagging those the service operates on."""

    def __init__(self, clock: Clock):
        self.clock = clock

    def build(
        self,
        windows: Sequence[ServiceWindow],
        service_type: ServiceType,
        horizon_days: int = HORIZON_DAYS
    ) -> List[DateOption]:
        today = self.clock.now().start_of("day")
        options: List[DateOption] = []

        for offset in range(horizon_days):
            day = today.add(days=offset)
            weekday = weekday_of(day)
            is_operating_day = bool(match_windows(windows, weekday, service_type))

            if offset == 0:
                label = "Today"
            elif offset == 1:
                label = "Tomorrow"
            else:
                label = day.format("dddd, MMM D")

            if not is_operating_day:
                label += " (Closed)"

            options.append(
                DateOption(
                    iso_date=day.to_date_string(),
                    label=label,
                    weekday=weekday,
                    is_operating_day=is_operating_day
                )
            )

        return options
