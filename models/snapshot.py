"""
Immutable input bundle handed to the engine once per date/selection change.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .appointment import Appointment, BlockedTimeRange
from .business import BookingPolicy, Location
from .service import Service
from .staff import StaffMember


class BusinessSnapshot(BaseModel):
    """Read-only view of one business and one selected location."""
    location: Location
    staff: List[StaffMember] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    appointments: List[Appointment] = Field(default_factory=list)
    blocked_times: List[BlockedTimeRange] = Field(default_factory=list)
    policy: BookingPolicy = Field(default_factory=BookingPolicy)

    model_config = ConfigDict(frozen=True)

    def staff_by_id(self, staff_id: str) -> Optional[StaffMember]:
        return next((s for s in self.staff if s.id == staff_id), None)

    def services_by_id(self) -> Dict[str, Service]:
        return {s.id: s for s in self.services}
