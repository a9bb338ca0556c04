"""
Business-level data models: opening hours, locations and booking policy.

All times are normalized to minutes since midnight on the way in, so
"9:00 AM" and "09:00" describe the same DayHours.
"""

from datetime import date
from typing import Dict, FrozenSet, Optional
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from availability.timeutils import Weekday, to_minutes


class DayHours(BaseModel):
    """Opening window for one weekday. If closed, open/close are ignored."""
    open: int = Field(default=9 * 60, description="Opening minute (accepts 'HH:mm' or 'h:mm AM/PM')")
    close: int = Field(default=18 * 60, description="Closing minute")
    closed: bool = Field(default=False)

    @field_validator('open', 'close', mode='before')
    @classmethod
    def normalize_time(cls, v):
        return to_minutes(v)

    @model_validator(mode='after')
    def validate_window(self):
        if not self.closed and self.close <= self.open:
            raise ValueError("Close time must be strictly after open time")
        return self


WeeklyHours = Dict[Weekday, DayHours]


class Location(BaseModel):
    """A physical salon location with its own weekly opening hours."""
    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Display name")
    hours: WeeklyHours = Field(
        default_factory=dict,
        description="Opening hours keyed by weekday; a missing day means closed"
    )

    def hours_for(self, day: Weekday) -> Optional[DayHours]:
        return self.hours.get(day)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "loc_main",
            "name": "Main Street",
            "hours": {
                "monday": {"open": "09:00", "close": "17:00", "closed": False},
                "sunday": {"open": "09:00", "close": "17:00", "closed": True}
            }
        }
    })


class BookingPolicy(BaseModel):
    """
    A single, already-resolved booking policy.

    Legacy field fallbacks (minBookingNoticeHours, maxAdvanceBookingDays...)
    are resolved by adapters.documents.resolve_booking_policy, never here.
    """
    min_notice_hours: float = Field(default=24, ge=0, description="Minimum notice before a slot")

    # Months are calendar months. Days are only used when months is absent.
    max_advance_months: Optional[int] = Field(default=None, ge=0)
    max_advance_days: int = Field(default=90, ge=0)

    booking_time_interval: int = Field(default=15, gt=0, description="Slot granularity in minutes")
    holidays: FrozenSet[date] = Field(default_factory=frozenset, description="Fully closed dates")

    default_buffer_minutes: int = Field(
        default=0,
        ge=0,
        description="Business-wide buffer for appointments stored without one"
    )
    timezone: Optional[str] = Field(default=None, description="Business timezone name (e.g. 'Europe/London')")
