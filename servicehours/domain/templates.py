"""
Preset weekly schedules for restaurants setting up their hours.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .exceptions import UnknownTemplateError
from .models import ServiceType, ServiceWindow

# (weekdays, time_start, time_stop), weekdays numbered 0=Sunday
_Rule = Tuple[Sequence[int], str, str]

EVERY_DAY = range(7)
WEEKDAYS = range(1, 6)
WEEKEND = (6, 0)


@dataclass(frozen=True)
class ScheduleTemplate:
    """A named preset of weekly hours."""
    name: str
    description: str
    rules: Tuple[_Rule, ...]

    def build(self, service_types: Sequence[ServiceType]) -> List[ServiceWindow]:
        """One window per weekday and rule, for every requested service type."""
        windows: List[ServiceWindow] = []
        for service_type in service_types:
            for days, time_start, time_stop in self.rules:
                for day in days:
                    windows.append(
                        ServiceWindow(
                            service_type=service_type,
                            day_start=day,
                            day_stop=day,
                            time_start=time_start,
                            time_stop=time_stop
                        )
                    )
        return windows


TEMPLATES: Dict[str, ScheduleTemplate] = {
    template.name: template
    for template in (
        ScheduleTemplate(
            name="24/7",
            description="Open 24 hours, 7 days a week",
            rules=((EVERY_DAY, "00:00", "23:59"),)
        ),
        ScheduleTemplate(
            name="Mon-Fri 9-5",
            description="Standard business hours",
            rules=((WEEKDAYS, "09:00", "17:00"),)
        ),
        ScheduleTemplate(
            name="Mon-Fri 11-9, Sat-Sun 11-10",
            description="Common restaurant hours",
            rules=(
                (WEEKDAYS, "11:00", "21:00"),
                (WEEKEND, "11:00", "22:00"),
            )
        ),
        ScheduleTemplate(
            name="Lunch & Dinner",
            description="Split shifts: 11am-2pm and 5pm-9pm",
            rules=(
                (EVERY_DAY, "11:00", "14:00"),
                (EVERY_DAY, "17:00", "21:00"),
            )
        ),
    )
}


def list_templates() -> List[ScheduleTemplate]:
    return list(TEMPLATES.values())


def build_template(
    name: str,
    service_types: Sequence[ServiceType] = (ServiceType.DELIVERY, ServiceType.TAKEOUT)
) -> List[ServiceWindow]:
    """
    Build the windows of a named template.

    Raises:
        UnknownTemplateError: If no template has that name
    """
    template = TEMPLATES.get(name)
    if template is None:
        known = ", ".join(TEMPLATES)
        raise UnknownTemplateError(f"Unknown schedule template '{name}'. Available: {known}")
    return template.build(service_types)
