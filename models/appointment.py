"""
Existing bookings and blocked time.

These are the dynamic (appointments) and static (blocked ranges) sources
of unavailability consumed by the conflict and schedule checks.
"""

from enum import Enum
from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from availability.timeutils import format_12h, to_minutes
from .service import DEFAULT_SERVICE_DURATION

ALL_STAFF = "all"


class AppointmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    ARRIVED = "arrived"
    STARTED = "started"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DID_NOT_SHOW = "did_not_show"


# Only these statuses hold a slot
BLOCKING_STATUSES = frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.PENDING})


class Appointment(BaseModel):
    """
    A booking already persisted for the business.
    The stored time may be "2:30 PM" or "14:30"; both normalize to minutes.
    """
    id: str = Field(description="Unique identifier")
    staff_id: Optional[str] = Field(default=None, description="None means 'any staff'")
    location_id: Optional[str] = Field(default=None)
    date: date_type = Field(description="Calendar day")
    time: int = Field(description="Start, minutes since midnight")
    duration: int = Field(default=DEFAULT_SERVICE_DURATION, gt=0)

    # None on legacy records; the business default buffer applies then
    buffer_time: Optional[int] = Field(default=None, ge=0)

    status: AppointmentStatus = Field(default=AppointmentStatus.CONFIRMED)
    client_name: str = Field(default="")

    @field_validator('time', mode='before')
    @classmethod
    def normalize_time(cls, v):
        return to_minutes(v)

    @field_validator('duration', mode='before')
    @classmethod
    def default_duration(cls, v):
        return DEFAULT_SERVICE_DURATION if v is None else v

    @property
    def blocks_slot(self) -> bool:
        return self.status in BLOCKING_STATUSES

    @property
    def time_label(self) -> str:
        return format_12h(self.time)

    def occupied_until(self, default_buffer: int = 0) -> int:
        """End of the occupied interval, including this appointment's own buffer."""
        buffer = self.buffer_time if self.buffer_time is not None else default_buffer
        return self.time + self.duration + buffer

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "apt_001",
            "staff_id": "staff_anna",
            "location_id": "loc_main",
            "date": "2024-01-02",
            "time": "10:00 AM",
            "duration": 60,
            "buffer_time": 15,
            "status": "confirmed"
        }
    })


class BlockedTimeRange(BaseModel):
    """
    Explicit exclusion window (training day, holiday cover...) for one staff
    member or, with staff_id='all', for everyone.
    """
    id: str = Field(default="", description="Unique identifier")
    staff_id: str = Field(description="A staff id or 'all'")
    start_date: date_type
    end_date: date_type
    start_time: int = Field(description="Minutes since midnight (inclusive)")
    end_time: int = Field(description="Minutes since midnight (exclusive)")
    reason: str = Field(default="")

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def normalize_time(cls, v):
        return to_minutes(v)

    @model_validator(mode='after')
    def validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError("Blocked range end date cannot be before start date")
        if self.end_time <= self.start_time:
            raise ValueError("Blocked range end time must be after start time")
        return self

    def applies_to(self, staff_id: str) -> bool:
        return self.staff_id == ALL_STAFF or self.staff_id == staff_id

    def covers(self, day: date_type) -> bool:
        return self.start_date <= day <= self.end_date
