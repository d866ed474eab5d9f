"""
Schedule storage backed by JSON files.

This is where raw schedule rows enter the application, so validation of
weekdays, time strings and service types happens here rather than in the
scheduling engine.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError, field_validator

from ..domain.exceptions import ScheduleDataError
from ..domain.models import ServiceType, ServiceWindow

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")

# The storefront calls takeout "pickup"
_SERVICE_TYPE_ALIASES = {"pickup": "takeout"}


class ScheduleRecord(BaseModel):
    """A persisted schedule row."""
    id: Optional[int] = None
    type: ServiceType
    day_start: int
    day_stop: int
    time_start: str
    time_stop: str
    is_enabled: bool = True

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Accept service type aliases and any casing."""
        if isinstance(v, str):
            v = v.strip().lower()
            return _SERVICE_TYPE_ALIASES.get(v, v)
        return v

    @field_validator("day_start", "day_stop")
    @classmethod
    def validate_day(cls, v: int) -> int:
        """Validate weekday is between 0 (Sunday) and 6 (Saturday)."""
        if not 0 <= v <= 6:
            raise ValueError(f"Weekday must be between 0 and 6, got {v}")
        return v

    @field_validator("time_start", "time_stop")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Validate HH:MM (or HH:MM:SS) and normalize to HH:MM."""
        match = _TIME_PATTERN.match(v.strip())
        if not match:
            raise ValueError(f"Time must be in HH:MM format, got '{v}'")
        return f"{match.group(1)}:{match.group(2)}"

    def to_window(self) -> ServiceWindow:
        return ServiceWindow(
            service_type=self.type,
            day_start=self.day_start,
            day_stop=self.day_stop,
            time_start=self.time_start,
            time_stop=self.time_stop,
            is_enabled=self.is_enabled,
            id=self.id
        )

    @classmethod
    def from_window(cls, window: ServiceWindow) -> "ScheduleRecord":
        return cls(
            id=window.id,
            type=window.service_type,
            day_start=window.day_start,
            day_stop=window.day_stop,
            time_start=window.time_start,
            time_stop=window.time_stop,
            is_enabled=window.is_enabled
        )


def parse_schedule_rows(rows: Sequence[Dict[str, Any]]) -> List[ServiceWindow]:
    """
    Validate raw schedule rows and convert them to service windows.

    Raises:
        ScheduleDataError: If any row is invalid
    """
    windows: List[ServiceWindow] = []

    for index, row in enumerate(rows):
        try:
            record = ScheduleRecord.model_validate(row)
        except ValidationError as exc:
            raise ScheduleDataError(f"Invalid schedule row #{index} {row!r}: {exc}") from exc

        if record.time_start == record.time_stop:
            logger.warning(
                "Schedule row #%d opens and closes at %s, it will be treated as overnight",
                index,
                record.time_start
            )
        windows.append(record.to_window())

    return windows


class InMemoryScheduleRepository:
    """Repository holding windows in memory, for tests and embedding."""

    def __init__(self, windows: Optional[Sequence[ServiceWindow]] = None):
        self._windows = list(windows or [])

    def get_schedules(self) -> List[ServiceWindow]:
        return list(self._windows)

    def save_schedules(self, windows: Sequence[ServiceWindow]) -> None:
        self._windows = list(windows)


class JsonScheduleRepository:
    """
    Loads schedule rows from a JSON file.

    The file holds either a list of rows or the REST payload shape
    ``{"schedules": [...]}``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_schedules(self) -> List[ServiceWindow]:
        """
        Read and validate all schedule rows.

        Raises:
            FileNotFoundError: If the schedules file doesn't exist
            ScheduleDataError: If the file or any row is invalid
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Schedules file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScheduleDataError(f"Invalid JSON in {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("schedules", [])

        if not isinstance(data, list):
            raise ScheduleDataError(f"{self.path} must contain a list of schedule rows.")

        windows = parse_schedule_rows(data)
        logger.info("Loaded %d schedule rows from %s", len(windows), self.path)
        return windows

    def save_schedules(self, windows: Sequence[ServiceWindow]) -> None:
        """Write windows as schedule rows, replacing the file's content."""
        rows = [
            ScheduleRecord.from_window(window).model_dump(mode="json")
            for window in windows
        ]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"schedules": rows}, f, indent=2)
        logger.info("Saved %d schedule rows to %s", len(rows), self.path)
