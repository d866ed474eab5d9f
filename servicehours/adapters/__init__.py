"""
Adapters layer - Schedule storage.
"""

from .schedule_repository import InMemoryScheduleRepository, JsonScheduleRepository, ScheduleRecord

__all__ = ["InMemoryScheduleRepository", "JsonScheduleRepository", "ScheduleRecord"]
