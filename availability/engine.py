"""
The Salon Availability Engine.

This module implements the slot walk shared by the public booking page and
the staff calendar. For one date it composes:
1. PolicyGate (may the day be booked at all?)
2. CapabilityFilter (who could ever take this cart here?)
3. ScheduleResolver + ConflictDetector (who is free at this minute?)

It is pure: identical snapshots and 'now' always give identical output.
"""

import logging
import math
from datetime import date as date_type, datetime
from typing import Iterable, List, Optional, Sequence, Union

from models import (
    BusinessSnapshot,
    DayReason,
    Service,
    ServiceCart,
    SlotDecision,
    SlotReason,
    StaffMember,
)
from .capability import CapabilityFilter
from .conflicts import ConflictDetector
from .constraints import ConflictKind, ConstraintViolation, ScheduleResolver
from .errors import InvalidInput
from .policy import PolicyGate, to_business_time
from .state import DayAvailability
from .timeutils import combine, format_12h, to_minutes, TimeLike

logger = logging.getLogger(__name__)

CartLike = Union[ServiceCart, Sequence[Service]]


class AvailabilityEngine:
    """
    Main availability engine.
    Ingests a BusinessSnapshot, outputs slot decisions and conflict verdicts.
    """

    def __init__(self, snapshot: BusinessSnapshot):
        self.snapshot = snapshot
        self.policy = snapshot.policy

        # Initialize Helpers
        self.gate = PolicyGate(snapshot.policy)
        self.capability = CapabilityFilter(snapshot.staff)
        self.resolver = ScheduleResolver(snapshot.location, snapshot.blocked_times)
        self.detector = ConflictDetector(snapshot.appointments, snapshot.policy.default_buffer_minutes)

    def cart_for(self, service_ids: Iterable[str]) -> ServiceCart:
        """Build a cart from service ids, in the order given."""
        catalogue = self.snapshot.services_by_id()
        services = []
        for sid in service_ids:
            if sid not in catalogue:
                raise InvalidInput(f"Unknown service id: {sid}")
            services.append(catalogue[sid])
        return ServiceCart.of(services)

    def generate_slots(
        self,
        day: date_type,
        cart: CartLike,
        now: datetime,
        staff_id: Optional[str] = None
    ) -> DayAvailability:
        """
        Walk every candidate start on `day` at the booking interval.

        With `staff_id` the walk is for that member only; without it a slot
        is available when at least one eligible member is free.
        """
        cart = self._as_cart(cart)
        pinned = self._pinned_staff(staff_id)

        # 1. Date-level policy
        decision = self.gate.evaluate(day, now)
        if not decision.allowed:
            logger.debug(f"{day} rejected by policy: {decision.reason.value}")
            return DayAvailability(day, DayReason(decision.reason.value), decision.message)

        # 2. Walk window
        window = self.resolver.effective_window(pinned, day)
        if window is None:
            if pinned:
                message = f"{pinned.name or pinned.id} is not working on this day"
            else:
                message = "The location is closed on this day"
            return DayAvailability(day, DayReason.CLOSED, message)

        open_, close = window
        span = cart.span
        interval = self.policy.booking_time_interval
        earliest = self.gate.earliest_instant(now)
        start = self._first_step(day, open_, interval, to_business_time(now, self.policy.timezone), earliest)

        logger.debug(
            f"Walking {day} {format_12h(start)}-{format_12h(close)} "
            f"span={span} interval={interval} staff={staff_id or 'any'}"
        )

        result = DayAvailability(day)

        # 3. Staff pool (computed once per call)
        if pinned:
            pool = [pinned]
            pinned_problem = CapabilityFilter.explain(pinned, self.snapshot.location, cart)
        else:
            pool = self.capability.eligible(self.snapshot.location, cart)
            pinned_problem = ""

        # 4. Main Loop: one decision per step, ascending
        minute = start
        while minute + span <= close:
            if combine(day, minute) < earliest:
                result.add_slot(SlotDecision(
                    time=format_12h(minute),
                    minute=minute,
                    available=False,
                    reason=SlotReason.TOO_SOON,
                    message="This time is too close to now for the required booking notice",
                ))
            elif pinned:
                result.add_slot(self._decide_pinned(result, pinned, pinned_problem, day, minute, span))
            else:
                result.add_slot(self._decide_any(result, pool, day, minute, span))
            minute += interval

        stats = result.get_statistics()
        logger.debug(f"{day}: {stats['available_slots']}/{stats['total_slots']} slots available")
        return result

    def available_times(self, day: date_type, cart: CartLike, now: datetime,
                        staff_id: Optional[str] = None) -> List[str]:
        return self.generate_slots(day, cart, now, staff_id).available_times

    def check_appointment(
        self,
        staff_id: str,
        day: date_type,
        time: TimeLike,
        span: int,
        exclude_appointment_id: Optional[str] = None,
        include_schedule: bool = False
    ) -> Optional[ConstraintViolation]:
        """
        Calendar / drag-and-drop validation for an explicit proposed interval.

        Always checks the staff member's other appointments (the moved one
        excluded). With include_schedule, hours, breaks and blocked time are
        checked first.
        """
        minute = to_minutes(time)
        if include_schedule:
            staff = self._pinned_staff(staff_id)
            violation = self.resolver.check(staff, day, minute, span)
            if violation:
                return violation
        return self.detector.find_conflict(staff_id, day, minute, span, exclude_appointment_id)

    # --- Helpers ---

    def _evaluate(self, member: StaffMember, day: date_type, minute: int, span: int) -> Optional[ConstraintViolation]:
        violation = self.resolver.check(member, day, minute, span)
        if violation:
            return violation
        return self.detector.find_conflict(member.id, day, minute, span)

    def _decide_pinned(self, result: DayAvailability, member: StaffMember, problem: str,
                       day: date_type, minute: int, span: int) -> SlotDecision:
        if problem:
            violation = ConstraintViolation(ConflictKind.CAPABILITY, problem, member.id, day, minute)
        else:
            violation = self._evaluate(member, day, minute, span)

        if violation is None:
            return SlotDecision(
                time=format_12h(minute), minute=minute, available=True,
                reason=SlotReason.OK, eligible_staff=[member]
            )

        result.record_violation(violation)
        reason = SlotReason.BLOCKED if violation.constraint_type == ConflictKind.BLOCKED else SlotReason.STAFF_UNAVAILABLE
        return SlotDecision(
            time=format_12h(minute), minute=minute, available=False,
            reason=reason, message=violation.reason
        )

    def _decide_any(self, result: DayAvailability, pool: List[StaffMember],
                    day: date_type, minute: int, span: int) -> SlotDecision:
        if not pool:
            return SlotDecision(
                time=format_12h(minute), minute=minute, available=False,
                reason=SlotReason.NO_STAFF,
                message="No staff member can perform the selected services at this location",
            )

        passing = []
        violations = []
        for member in pool:
            violation = self._evaluate(member, day, minute, span)
            if violation is None:
                passing.append(member)
            else:
                violations.append(violation)
                result.record_violation(violation)

        if passing:
            return SlotDecision(
                time=format_12h(minute), minute=minute, available=True,
                reason=SlotReason.OK, eligible_staff=passing
            )

        if all(v.constraint_type == ConflictKind.BLOCKED for v in violations):
            return SlotDecision(
                time=format_12h(minute), minute=minute, available=False,
                reason=SlotReason.BLOCKED, message=violations[0].reason
            )

        return SlotDecision(
            time=format_12h(minute), minute=minute, available=False,
            reason=SlotReason.STAFF_UNAVAILABLE, message="No staff available at this time"
        )

    def _first_step(self, day: date_type, open_: int, interval: int,
                    now: datetime, earliest: datetime) -> int:
        """
        On the current day, skip grid steps already in the past of the
        notice instant. Later days always start at opening time.
        """
        if day != now.date() or earliest.date() != day:
            return open_
        cutoff = earliest.hour * 60 + earliest.minute + (1 if earliest.second or earliest.microsecond else 0)
        if cutoff <= open_:
            return open_
        return open_ + math.ceil((cutoff - open_) / interval) * interval

    def _pinned_staff(self, staff_id: Optional[str]) -> Optional[StaffMember]:
        if not staff_id:
            return None
        member = self.snapshot.staff_by_id(staff_id)
        if member is None:
            raise InvalidInput(f"Unknown staff id: {staff_id}")
        return member

    @staticmethod
    def _as_cart(cart: CartLike) -> ServiceCart:
        if isinstance(cart, ServiceCart):
            return cart
        return ServiceCart.of(cart)
