"""
Document adapter for the Salon Availability Engine.

Turns raw business/location/staff/service/appointment/blocked-time
documents (camelCase, as stored by the booking app) into validated engine
models, and resolves the legacy booking-policy field names into one
BookingPolicy so the engine never sees the fallback chain.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Type, TypeVar

import pytz
from dateutil import parser as date_parser
from pydantic import BaseModel, ValidationError

from availability.config import EngineSettings, get_settings
from availability.errors import InvalidInput
from availability.policy import to_business_time
from models import (
    Appointment,
    BlockedTimeRange,
    BookingPolicy,
    BusinessSnapshot,
    Location,
    Service,
    StaffMember,
)
from models.service import DEFAULT_SERVICE_DURATION

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _first_present(*values):
    """
    First value that is actually set. None and empty strings fall through;
    an explicit 0 is a real setting and is kept.
    """
    for value in values:
        if value is None or value == "":
            continue
        return value
    return None


def resolve_booking_policy(business: Dict[str, Any], settings: Optional[EngineSettings] = None) -> BookingPolicy:
    """
    Resolve the business document into one BookingPolicy.

    Precedence (first present wins):
    - min notice: bookingPolicy.minNoticeHours > minBookingNoticeHours > settings default
    - max advance: bookingPolicy.maxAdvanceMonths (calendar months)
                   > maxAdvanceBookingDays (days) > settings default days
    - interval: bookingTimeInterval > settings default
    - buffer: bufferTime > settings default
    - timezone: timezone > settings default
    """
    settings = settings or get_settings()
    policy_doc = business.get("bookingPolicy") or {}

    min_notice = _first_present(
        policy_doc.get("minNoticeHours"),
        business.get("minBookingNoticeHours"),
        settings.DEFAULT_MIN_NOTICE_HOURS,
    )

    months = _first_present(policy_doc.get("maxAdvanceMonths"))
    days = _first_present(business.get("maxAdvanceBookingDays"), settings.DEFAULT_MAX_ADVANCE_DAYS)

    interval = _first_present(business.get("bookingTimeInterval"), settings.DEFAULT_BOOKING_INTERVAL)
    buffer = _first_present(business.get("bufferTime"), settings.DEFAULT_BUFFER_MINUTES)
    timezone = _first_present(business.get("timezone"), settings.DEFAULT_TIMEZONE)

    try:
        return BookingPolicy(
            min_notice_hours=min_notice,
            max_advance_months=months,
            max_advance_days=days,
            booking_time_interval=interval,
            holidays=parse_holidays(business.get("holidays") or [], timezone),
            default_buffer_minutes=buffer,
            timezone=timezone,
        )
    except ValidationError as e:
        raise InvalidInput(f"Invalid booking policy: {e}") from e


def parse_date(value: Any, timezone: Optional[str] = None) -> date:
    """
    Accepts date, datetime (Firestore timestamps are datetimes), ISO strings,
    and {'seconds': ...} / {'_seconds': ...} timestamp dicts.
    """
    if isinstance(value, datetime):
        return to_business_time(value, timezone).date()
    if isinstance(value, date):
        return value
    if isinstance(value, dict):
        seconds = _first_present(value.get("seconds"), value.get("_seconds"))
        if seconds is None:
            raise InvalidInput(f"Unrecognised timestamp document: {value!r}")
        return parse_date(datetime.fromtimestamp(seconds, tz=pytz.utc), timezone)
    if isinstance(value, str):
        try:
            parsed = date_parser.isoparse(value)
        except ValueError as e:
            raise InvalidInput(f"Unparsable date: {value!r}") from e
        return parse_date(parsed, timezone)
    raise InvalidInput(f"Unparsable date: {value!r}")


def parse_holidays(entries: Iterable[Any], timezone: Optional[str] = None) -> FrozenSet[date]:
    holidays = set()
    for entry in entries:
        raw = entry.get("date") if isinstance(entry, dict) and "date" in entry else entry
        holidays.add(parse_date(raw, timezone))
    return frozenset(holidays)


def _normalize_hours(hours: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Weekday keys are matched case-insensitively ('Monday' == 'monday')."""
    return {str(day).lower(): value for day, value in (hours or {}).items()}


def location_from_document(doc: Dict[str, Any]) -> Location:
    return _build(Location, {
        "id": doc.get("id"),
        "name": doc.get("name") or "",
        "hours": _normalize_hours(doc.get("hours")),
    })


def staff_from_document(doc: Dict[str, Any]) -> StaffMember:
    breaks = [
        {**b, "day": str(b.get("day", "")).lower()}
        for b in (doc.get("breaks") or [])
    ]
    return _build(StaffMember, {
        "id": doc.get("id"),
        "name": doc.get("name") or "",
        "location_id": doc.get("locationId") or None,
        "working_hours": _normalize_hours(doc.get("workingHours")),
        "breaks": breaks,
        "services": doc.get("services"),
        "status": doc.get("status") or "active",
        "is_back_of_house": bool(doc.get("isBackOfHouse", False)),
    })


def service_from_document(doc: Dict[str, Any], default_duration: int = DEFAULT_SERVICE_DURATION) -> Service:
    return _build(Service, {
        "id": doc.get("id"),
        "name": doc.get("name") or "",
        "duration": _first_present(doc.get("duration"), default_duration),
        "buffer_time": doc.get("bufferTime"),
        "category": doc.get("category") or "",
        "price": doc.get("price") or 0,
        "deposit_amount": doc.get("depositAmount"),
    })


def appointment_from_document(
    doc: Dict[str, Any],
    timezone: Optional[str] = None,
    default_duration: int = DEFAULT_SERVICE_DURATION
) -> Appointment:
    return _build(Appointment, {
        "id": doc.get("id"),
        "staff_id": doc.get("staffId") or None,
        "location_id": doc.get("locationId") or None,
        "date": parse_date(doc.get("date"), timezone),
        "time": doc.get("time"),
        "duration": _first_present(doc.get("duration"), default_duration),
        "buffer_time": doc.get("bufferTime"),
        "status": doc.get("status") or "confirmed",
        "client_name": doc.get("clientName") or "",
    })


def blocked_time_from_document(doc: Dict[str, Any], timezone: Optional[str] = None) -> BlockedTimeRange:
    return _build(BlockedTimeRange, {
        "id": doc.get("id") or "",
        "staff_id": doc.get("staffId"),
        "start_date": parse_date(doc.get("startDate"), timezone),
        "end_date": parse_date(doc.get("endDate"), timezone),
        "start_time": doc.get("startTime"),
        "end_time": doc.get("endTime"),
        "reason": doc.get("reason") or "",
    })


def _build(model_class: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model_class(**data)
    except ValidationError as e:
        raise InvalidInput(f"Invalid {model_class.__name__} document {data.get('id')!r}: {e}") from e


def _convert_lenient(docs: Iterable[Dict[str, Any]], converter: Callable[[Dict[str, Any]], M]) -> List[M]:
    """Catalogue documents: skip broken ones so one bad record cannot take the booking page down."""
    valid_items = []
    for i, doc in enumerate(docs):
        try:
            valid_items.append(converter(doc))
        except InvalidInput as e:
            logger.warning(f"Skipping invalid document {i}: {e}")
            continue
    return valid_items


def load_snapshot(data: Dict[str, Any], settings: Optional[EngineSettings] = None) -> BusinessSnapshot:
    """
    Build a BusinessSnapshot from one JSON-like bundle:
    {business, location, staff, services, appointments, blockedTimes}.

    Staff and services are converted leniently. Appointments and blocked
    ranges are strict: a booking with an unparsable time is a data bug,
    and silently dropping it would open a double-booking.
    """
    settings = settings or get_settings()
    business = data.get("business") or {}
    policy = resolve_booking_policy(business, settings)
    duration = settings.DEFAULT_SERVICE_DURATION

    location_doc = data.get("location")
    if not location_doc:
        raise InvalidInput("Snapshot has no location")

    snapshot = BusinessSnapshot(
        location=location_from_document(location_doc),
        staff=_convert_lenient(data.get("staff") or [], staff_from_document),
        services=_convert_lenient(
            data.get("services") or [], lambda doc: service_from_document(doc, duration)
        ),
        appointments=[
            appointment_from_document(doc, policy.timezone, duration)
            for doc in data.get("appointments") or []
        ],
        blocked_times=[
            blocked_time_from_document(doc, policy.timezone)
            for doc in data.get("blockedTimes") or []
        ],
        policy=policy,
    )

    logger.info(
        f"Loaded snapshot: {len(snapshot.staff)} staff, {len(snapshot.services)} services, "
        f"{len(snapshot.appointments)} appointments, {len(snapshot.blocked_times)} blocked ranges"
    )
    return snapshot
