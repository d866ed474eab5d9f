"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .ordering_schedule import OrderingScheduleService, ScheduleRepositoryProtocol

__all__ = ["OrderingScheduleService", "ScheduleRepositoryProtocol"]
