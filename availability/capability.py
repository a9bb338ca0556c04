"""
Staff pool narrowing.

Cheap, time-independent predicates (location, capability, status) run
before any slot is walked so the per-slot checks only see staff who could
ever take the booking.
"""

from typing import List, Optional

from models import Location, ServiceCart, StaffMember


class CapabilityFilter:
    """Filters a staff pool down to members able to serve a cart at a location."""

    def __init__(self, staff: List[StaffMember]):
        self.staff = staff

    def eligible(self, location: Optional[Location], cart: ServiceCart) -> List[StaffMember]:
        """Eligible members, in the pool's original order."""
        return [m for m in self.staff if self.can_serve(m, location, cart)]

    @staticmethod
    def can_serve(member: StaffMember, location: Optional[Location], cart: ServiceCart) -> bool:
        return (
            CapabilityFilter.works_at(member, location)
            and CapabilityFilter.covers_cart(member, cart)
            and member.is_schedulable
        )

    @staticmethod
    def works_at(member: StaffMember, location: Optional[Location]) -> bool:
        # Unassigned staff float across every location
        return location is None or member.location_id is None or member.location_id == location.id

    @staticmethod
    def covers_cart(member: StaffMember, cart: ServiceCart) -> bool:
        """All-or-nothing: partial capability never qualifies for a multi-service cart."""
        if member.performs_all_services:
            return True
        offered = set(member.services)
        return all(sid in offered for sid in cart.service_ids)

    @staticmethod
    def explain(member: StaffMember, location: Optional[Location], cart: ServiceCart) -> str:
        """Human-readable reason a member is not eligible (empty if eligible)."""
        name = member.name or member.id
        if not member.is_schedulable:
            return f"{name} is not available for online booking"
        if not CapabilityFilter.works_at(member, location):
            return f"{name} does not work at this location"
        if not CapabilityFilter.covers_cart(member, cart):
            return f"{name} cannot perform all selected services"
        return ""
