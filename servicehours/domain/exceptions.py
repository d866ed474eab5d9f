"""
Domain-specific exception hierarchy for the service hours engine.
"""


class ServiceHoursError(Exception):
    """Base class for all application-level errors."""


class ScheduleDataError(ServiceHoursError):
    """Raised when schedule rows cannot be read or fail validation."""


class UnknownTemplateError(ServiceHoursError):
    """Raised when a schedule template name is not known."""
