from datetime import date

import pytest

from availability.conflicts import ConflictDetector
from availability.constraints import ConflictKind
from helpers import TUESDAY, appointment
from models import AppointmentStatus


def test_overlapping_confirmed_appointment_conflicts():
    detector = ConflictDetector([appointment("staff_anna", "10:00 AM", client_name="Maya")])

    violation = detector.find_conflict("staff_anna", TUESDAY, 570, 60)
    assert violation.constraint_type == ConflictKind.APPOINTMENT
    assert violation.conflicting_id == "apt_staff_anna_10:00 AM"
    assert "Maya" in violation.reason
    assert "10:00 AM" in violation.reason


def test_back_to_back_appointments_do_not_conflict():
    detector = ConflictDetector([appointment("staff_anna", "10:00")])

    assert not detector.has_conflict("staff_anna", TUESDAY, 540, 60)
    assert not detector.has_conflict("staff_anna", TUESDAY, 660, 60)


@pytest.mark.parametrize("status, blocks", [
    (AppointmentStatus.CONFIRMED, True),
    (AppointmentStatus.PENDING, True),
    (AppointmentStatus.CANCELLED, False),
    (AppointmentStatus.COMPLETED, False),
    (AppointmentStatus.DID_NOT_SHOW, False),
])
def test_only_confirmed_and_pending_block(status, blocks):
    detector = ConflictDetector([appointment("staff_anna", "10:00", status=status)])
    assert detector.has_conflict("staff_anna", TUESDAY, 600, 30) == blocks


def test_other_staff_can_hold_overlapping_appointments():
    detector = ConflictDetector([appointment("staff_ben", "10:00")])
    assert not detector.has_conflict("staff_anna", TUESDAY, 600, 60)


def test_other_dates_are_ignored():
    detector = ConflictDetector([appointment("staff_anna", "10:00", day=date(2024, 1, 3))])
    assert not detector.has_conflict("staff_anna", TUESDAY, 600, 60)


def test_appointment_occupies_its_own_buffer():
    detector = ConflictDetector([appointment("staff_anna", "10:00", duration=60, buffer_time=15)])

    assert detector.has_conflict("staff_anna", TUESDAY, 660, 30)
    assert not detector.has_conflict("staff_anna", TUESDAY, 675, 30)


def test_legacy_appointment_without_buffer_uses_business_default():
    legacy = appointment("staff_anna", "10:00", duration=60)
    assert legacy.buffer_time is None

    assert not ConflictDetector([legacy]).has_conflict("staff_anna", TUESDAY, 660, 30)
    assert ConflictDetector([legacy], default_buffer=10).has_conflict("staff_anna", TUESDAY, 660, 30)


def test_explicit_zero_buffer_is_not_replaced_by_default():
    apt = appointment("staff_anna", "10:00", duration=60, buffer_time=0)
    assert not ConflictDetector([apt], default_buffer=10).has_conflict("staff_anna", TUESDAY, 660, 30)


def test_moved_appointment_is_excluded_from_its_own_check():
    apt = appointment("staff_anna", "10:00", id="apt_moving")
    detector = ConflictDetector([apt])

    assert detector.has_conflict("staff_anna", TUESDAY, 630, 60)
    assert not detector.has_conflict("staff_anna", TUESDAY, 630, 60, exclude_appointment_id="apt_moving")


def test_conflicts_for_lists_every_clash():
    detector = ConflictDetector([
        appointment("staff_anna", "9:00 AM", duration=30),
        appointment("staff_anna", "10:00 AM", duration=30),
        appointment("staff_anna", "2:00 PM", duration=30),
    ])

    clashes = detector.conflicts_for("staff_anna", TUESDAY, 540, 120)
    assert [a.time for a in clashes] == [540, 600]


def test_unassigned_appointment_clashes_for_every_staff_member():
    detector = ConflictDetector([appointment(None, "10:00", id="apt_any")])

    for staff_id in ("staff_anna", "staff_ben"):
        violation = detector.find_conflict(staff_id, TUESDAY, 600, 60)
        assert violation.conflicting_id == "apt_any"
        assert violation.staff_id == staff_id
    assert not detector.has_conflict("staff_anna", TUESDAY, 660, 60)


def test_cancelled_unassigned_appointment_does_not_block():
    detector = ConflictDetector([appointment(None, "10:00", status=AppointmentStatus.CANCELLED)])
    assert not detector.has_conflict("staff_anna", TUESDAY, 600, 60)
