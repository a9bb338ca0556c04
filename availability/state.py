"""
Per-walk result state.

This module acts as the 'Memory' of a single slot walk. It tracks:
1. The emitted slot decisions (available and unavailable, in time order).
2. Why each staff member was rejected, for the calendar's detail view.
3. Summary statistics for dashboards and logs.

Nothing here outlives the call that produced it.
"""

from datetime import date as date_type
from typing import List, Dict, Any, Optional
from collections import defaultdict

from models import DayReason, SlotDecision, SlotReason, StaffMember

from .constraints import ConstraintViolation


class DayAvailability:
    """
    Outcome of one SlotGenerator walk for one date.
    """

    def __init__(self, date: date_type, reason: DayReason = DayReason.OK, message: str = ""):
        self.date = date
        self.reason = reason
        self.message = message

        # The Slot List (ascending, never skips a step)
        self.slots: List[SlotDecision] = []

        # staff_id -> violations collected while walking
        self.staff_violations: Dict[str, List[ConstraintViolation]] = defaultdict(list)

    @property
    def is_open(self) -> bool:
        """True when the day produced a slot walk at all."""
        return self.reason == DayReason.OK

    def add_slot(self, decision: SlotDecision) -> None:
        self.slots.append(decision)

    def record_violation(self, violation: ConstraintViolation) -> None:
        if violation.staff_id:
            self.staff_violations[violation.staff_id].append(violation)

    # --- Query Methods ---

    @property
    def available_slots(self) -> List[SlotDecision]:
        return [s for s in self.slots if s.available]

    @property
    def available_times(self) -> List[str]:
        return [s.time for s in self.slots if s.available]

    def slot_at(self, minute: int) -> Optional[SlotDecision]:
        return next((s for s in self.slots if s.minute == minute), None)

    def slot_for_time(self, label: str) -> Optional[SlotDecision]:
        return next((s for s in self.slots if s.time == label), None)

    def eligible_staff_at(self, minute: int) -> List[StaffMember]:
        slot = self.slot_at(minute)
        return list(slot.eligible_staff) if slot else []

    # --- Reporting Methods ---

    def get_statistics(self) -> Dict[str, Any]:
        """Counts for the booking page header and logs."""
        if not self.slots:
            return {
                "date": self.date.isoformat(),
                "day_reason": self.reason.value,
                "total_slots": 0,
                "available_slots": 0,
                "availability_rate": 0.0,
            }

        reason_counts = defaultdict(int)
        for slot in self.slots:
            reason_counts[slot.reason.value] += 1

        available = len(self.available_slots)
        total = len(self.slots)

        staff_capacity = defaultdict(int)
        for slot in self.available_slots:
            for member in slot.eligible_staff:
                staff_capacity[member.id] += 1

        return {
            "date": self.date.isoformat(),
            "day_reason": self.reason.value,
            "total_slots": total,
            "available_slots": available,
            "availability_rate": round(available / total * 100, 1),
            "first_available": self.available_slots[0].time if available else None,
            "last_available": self.available_slots[-1].time if available else None,
            "reason_breakdown": dict(reason_counts),
            "staff_open_slots": dict(staff_capacity),
        }

    def get_unavailability_report(self) -> List[Dict]:
        """
        Per-staff summary of what blocked them and how often.
        Sorted with the most frequently blocked staff first.
        """
        report = []
        for staff_id, violations in self.staff_violations.items():
            breakdown = defaultdict(int)
            for v in violations:
                breakdown[v.constraint_type.value] += 1

            report.append({
                "staff_id": staff_id,
                "total_rejections": len(violations),
                "primary_cause": max(breakdown, key=breakdown.get),
                "violation_breakdown": dict(breakdown),
                "latest_reason": violations[-1].reason,
            })

        report.sort(key=lambda x: x["total_rejections"], reverse=True)
        return report

    def unavailable_reasons(self) -> Dict[str, SlotReason]:
        """Time label -> reason for every unavailable slot."""
        return {s.time: s.reason for s in self.slots if not s.available}
