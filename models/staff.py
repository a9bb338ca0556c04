"""
Staff data models.

A staff member is the unit every schedule and conflict check runs
against. Two different staff can hold overlapping appointments.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from availability.timeutils import Weekday, to_minutes
from .business import DayHours, WeeklyHours

ALL_SERVICES = "all"


class StaffStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Break(BaseModel):
    """A recurring weekly break (lunch, admin time...)."""
    day: Weekday
    start: int = Field(description="Break start, minutes since midnight")
    end: int = Field(description="Break end, minutes since midnight")

    @field_validator('start', 'end', mode='before')
    @classmethod
    def normalize_time(cls, v):
        return to_minutes(v)

    @model_validator(mode='after')
    def validate_times(self):
        if self.start >= self.end:
            raise ValueError("Break end must be strictly after break start")
        return self


class StaffMember(BaseModel):
    """
    Human resource with weekly working hours, breaks and a capability set.
    """
    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Display name")

    # None means the staff member floats across every location
    location_id: Optional[str] = Field(default=None)

    working_hours: WeeklyHours = Field(
        default_factory=dict,
        description="Personal hours; a missing day falls back to the location's hours"
    )
    breaks: List[Break] = Field(default_factory=list)

    services: List[str] = Field(
        default_factory=list,
        description="Service ids this member performs, or ['all']"
    )

    status: StaffStatus = Field(default=StaffStatus.ACTIVE)
    is_back_of_house: bool = Field(default=False, description="Never bookable by clients")

    @field_validator('services', mode='before')
    @classmethod
    def normalize_services(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return list(v)

    @property
    def performs_all_services(self) -> bool:
        return ALL_SERVICES in self.services

    @property
    def is_schedulable(self) -> bool:
        return self.status == StaffStatus.ACTIVE and not self.is_back_of_house

    def hours_for(self, day: Weekday) -> Optional[DayHours]:
        return self.working_hours.get(day)

    def breaks_for(self, day: Weekday) -> List[Break]:
        return [b for b in self.breaks if b.day == day]

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "staff_anna",
            "name": "Anna",
            "location_id": "loc_main",
            "working_hours": {"monday": {"open": "09:00", "close": "17:00"}},
            "breaks": [{"day": "monday", "start": "12:00", "end": "12:30"}],
            "services": ["svc_cut", "svc_colour"],
            "status": "active"
        }
    })
