"""
Data models package for the Salon Availability Engine.

This package exports the three groups of the data architecture:
1. Supply (Location, StaffMember, BookingPolicy)
2. Demand & existing load (Service, ServiceCart, Appointment, BlockedTimeRange)
3. Output (SlotDecision, PolicyDecision and their reason codes)
"""

from availability.timeutils import Weekday

from .business import (
    DayHours,
    WeeklyHours,
    Location,
    BookingPolicy
)

from .staff import (
    ALL_SERVICES,
    Break,
    StaffMember,
    StaffStatus
)

from .service import (
    Service,
    ServiceCart
)

from .appointment import (
    ALL_STAFF,
    BLOCKING_STATUSES,
    Appointment,
    AppointmentStatus,
    BlockedTimeRange
)

from .decision import (
    DayReason,
    PolicyDecision,
    PolicyReason,
    SlotDecision,
    SlotReason
)

from .snapshot import BusinessSnapshot

__all__ = [
    # --- Supply Models ---
    "Weekday",
    "DayHours",
    "WeeklyHours",
    "Location",
    "BookingPolicy",
    "ALL_SERVICES",
    "Break",
    "StaffMember",
    "StaffStatus",

    # --- Demand & Load Models ---
    "Service",
    "ServiceCart",
    "ALL_STAFF",
    "BLOCKING_STATUSES",
    "Appointment",
    "AppointmentStatus",
    "BlockedTimeRange",
    "BusinessSnapshot",

    # --- Output Models ---
    "DayReason",
    "PolicyDecision",
    "PolicyReason",
    "SlotDecision",
    "SlotReason",
]
