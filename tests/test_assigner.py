import pytest

from availability.assigner import StaffAssigner, revalidate_booking
from availability.engine import AvailabilityEngine
from availability.errors import SlotNoLongerAvailable
from helpers import MONDAY_MORNING, TUESDAY, appointment
from models import AppointmentStatus, SlotDecision, SlotReason


def test_single_eligible_staff_is_auto_assigned(make_snapshot, cut):
    result = AvailabilityEngine(make_snapshot()).generate_slots(TUESDAY, [cut], MONDAY_MORNING)
    assert StaffAssigner().assign(result.slot_at(540)).id == "staff_anna"


def test_first_eligible_in_snapshot_order_wins(make_snapshot, anna, ben, cut):
    engine = AvailabilityEngine(make_snapshot(staff=[ben, anna]))
    slot = engine.generate_slots(TUESDAY, [cut], MONDAY_MORNING).slot_at(600)

    assert [m.id for m in slot.eligible_staff] == ["staff_ben", "staff_anna"]
    assert StaffAssigner().assign(slot).id == "staff_ben"


def test_assignment_is_not_load_balanced(make_snapshot, anna, ben, cut):
    engine = AvailabilityEngine(make_snapshot(staff=[anna, ben]))
    result = engine.generate_slots(TUESDAY, [cut], MONDAY_MORNING)
    assigner = StaffAssigner()

    picks = {assigner.assign(result.slot_at(minute)).id for minute in (540, 600, 660, 720)}
    assert picks == {"staff_anna"}


def test_zero_eligible_staff_raises_stale_slot():
    stale = SlotDecision(time="10:00 AM", minute=600, available=False, reason=SlotReason.NO_STAFF)

    with pytest.raises(SlotNoLongerAvailable) as exc:
        StaffAssigner().assign(stale)
    assert exc.value.minute == 600


def test_assign_from_empty_list_raises():
    with pytest.raises(SlotNoLongerAvailable):
        StaffAssigner().assign_from([], "10:00 AM")


def test_revalidate_passes_when_nothing_changed():
    latest = [appointment("staff_anna", "9:00")]
    revalidate_booking(latest, "staff_anna", TUESDAY, 600, 60)


def test_revalidate_detects_booking_taken_since_snapshot():
    latest = [appointment("staff_anna", "10:30", status=AppointmentStatus.PENDING)]

    with pytest.raises(SlotNoLongerAvailable) as exc:
        revalidate_booking(latest, "staff_anna", TUESDAY, 600, 60)
    assert exc.value.staff_id == "staff_anna"
    assert exc.value.date == TUESDAY


def test_revalidate_applies_business_default_buffer():
    latest = [appointment("staff_anna", "9:00", duration=60)]

    revalidate_booking(latest, "staff_anna", TUESDAY, 600, 60)
    with pytest.raises(SlotNoLongerAvailable):
        revalidate_booking(latest, "staff_anna", TUESDAY, 600, 60, default_buffer=15)


def test_revalidate_ignores_the_rescheduled_appointment_itself():
    latest = [appointment("staff_anna", "10:00", id="apt_self")]
    revalidate_booking(latest, "staff_anna", TUESDAY, 615, 60, exclude_appointment_id="apt_self")


def test_revalidate_catches_unassigned_booking():
    latest = [appointment(None, "10:00", id="apt_any")]

    with pytest.raises(SlotNoLongerAvailable):
        revalidate_booking(latest, "staff_anna", TUESDAY, 600, 60)
