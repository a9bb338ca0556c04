"""
Appointment clash detection.

Checks a candidate interval for one staff member against that staff
member's existing bookings. Each existing booking occupies its own
duration plus its own buffer.
"""

from datetime import date as date_type
from typing import List, Optional

from models import Appointment

from .constraints import ConflictKind, ConstraintViolation
from .timeutils import format_12h, overlaps


class ConflictDetector:
    """
    Validates candidate (staff, date, start, span) intervals against appointments.
    Runs per staff member: two different staff can hold overlapping bookings.
    An appointment with no staff assigned clashes for every staff member.
    """

    def __init__(self, appointments: List[Appointment], default_buffer: int = 0):
        self.appointments = appointments
        self.default_buffer = default_buffer

    def find_conflict(
        self,
        staff_id: str,
        day: date_type,
        slot_start: int,
        span: int,
        exclude_appointment_id: Optional[str] = None
    ) -> Optional[ConstraintViolation]:
        """First clashing appointment as a violation, or None if the interval is free."""
        for apt in self._relevant(staff_id, day, exclude_appointment_id):
            if overlaps(slot_start, slot_start + span, apt.time, apt.occupied_until(self.default_buffer)):
                return self._violation(apt, staff_id, day, slot_start)
        return None

    def has_conflict(self, staff_id: str, day: date_type, slot_start: int, span: int,
                     exclude_appointment_id: Optional[str] = None) -> bool:
        return self.find_conflict(staff_id, day, slot_start, span, exclude_appointment_id) is not None

    def conflicts_for(
        self,
        staff_id: str,
        day: date_type,
        slot_start: int,
        span: int,
        exclude_appointment_id: Optional[str] = None
    ) -> List[Appointment]:
        """Every clashing appointment (calendar views list them all)."""
        return [
            apt for apt in self._relevant(staff_id, day, exclude_appointment_id)
            if overlaps(slot_start, slot_start + span, apt.time, apt.occupied_until(self.default_buffer))
        ]

    def _relevant(self, staff_id: str, day: date_type, exclude_id: Optional[str]):
        for apt in self.appointments:
            if apt.date != day:
                continue
            # Unassigned bookings hold the slot against whoever is checked
            if apt.staff_id is not None and apt.staff_id != staff_id:
                continue
            if not apt.blocks_slot:
                continue
            # The appointment being dragged never clashes with itself
            if exclude_id is not None and apt.id == exclude_id:
                continue
            yield apt

    @staticmethod
    def _violation(apt: Appointment, staff_id: str, day: date_type, start: int) -> ConstraintViolation:
        who = f"{apt.client_name}'s appointment" if apt.client_name else "an appointment"
        return ConstraintViolation(
            ConflictKind.APPOINTMENT,
            f"Clashes with {who} at {apt.time_label} ({apt.duration} min)",
            staff_id, day, start,
            conflicting_id=apt.id
        )
