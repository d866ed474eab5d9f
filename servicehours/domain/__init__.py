"""
Domain layer - Pure scheduling logic without I/O.
"""

from .availability import AvailabilityEvaluator
from .clock import Clock, FixedClock, SystemClock
from .date_options import DateOptionBuilder
from .models import Availability, DateOption, DaySlots, ResolvedTimeWindow, ServiceType, ServiceWindow, TimeSlot
from .slot_generator import SlotGenerator

__all__ = [
    "Availability",
    "AvailabilityEvaluator",
    "Clock",
    "DateOption",
    "DateOptionBuilder",
    "DaySlots",
    "FixedClock",
    "ResolvedTimeWindow",
    "ServiceType",
    "ServiceWindow",
    "SlotGenerator",
    "SystemClock",
    "TimeSlot",
]
