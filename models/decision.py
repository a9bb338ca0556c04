"""
Output models of the Availability Engine.

Every rejection is data with a reason code and a message the booking page
can show as-is. Nothing in here is persisted.
"""

from enum import Enum
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field

from .staff import StaffMember


class PolicyReason(str, Enum):
    """Outcome of the date-level booking policy check."""
    OK = "ok"
    TOO_SOON = "too-soon"
    TOO_FAR = "too-far"
    HOLIDAY = "holiday"


class DayReason(str, Enum):
    """Why a whole day produced (or did not produce) a slot walk."""
    OK = "ok"
    TOO_SOON = "too-soon"
    TOO_FAR = "too-far"
    HOLIDAY = "holiday"
    CLOSED = "closed"


class SlotReason(str, Enum):
    """Per-slot outcome."""
    OK = "ok"
    TOO_SOON = "too-soon"
    STAFF_UNAVAILABLE = "staff-unavailable"
    NO_STAFF = "no-staff"
    BLOCKED = "blocked"


class PolicyDecision(BaseModel):
    """Result of PolicyGate for one calendar date."""
    reason: PolicyReason
    message: str = Field(default="")
    min_bookable: datetime = Field(description="Earliest bookable date boundary")
    max_bookable: datetime = Field(description="Latest bookable date boundary")

    @property
    def allowed(self) -> bool:
        return self.reason == PolicyReason.OK


class SlotDecision(BaseModel):
    """One candidate start time and whether it can be booked."""
    time: str = Field(description="Display label, e.g. '9:00 AM'")
    minute: int = Field(description="Minutes since midnight")
    available: bool
    reason: SlotReason
    message: str = Field(default="")
    eligible_staff: List[StaffMember] = Field(
        default_factory=list,
        description="Staff who can take this slot, in snapshot order"
    )
