"""
Date-level booking policy.

Answers "may this calendar day be booked at all?" before any slot is
walked: minimum notice, maximum advance and holiday closures.
"""

import logging
from datetime import date as date_type, datetime, time as time_type, timedelta
from typing import Optional

import pytz
from dateutil.relativedelta import relativedelta

from models import BookingPolicy, PolicyDecision, PolicyReason

logger = logging.getLogger(__name__)


def to_business_time(now: datetime, timezone: Optional[str]) -> datetime:
    """
    Naive wall-clock 'now' in the business's zone.
    Naive inputs are assumed to already be business wall-clock time.
    """
    if now.tzinfo is None:
        return now
    if timezone:
        now = now.astimezone(pytz.timezone(timezone))
    return now.replace(tzinfo=None)


class PolicyGate:
    """
    Evaluates minimum notice, maximum advance and holidays for a date.
    """

    def __init__(self, policy: BookingPolicy):
        self.policy = policy

    def evaluate(self, day: date_type, now: datetime) -> PolicyDecision:
        """
        Master check. Order: too-soon, too-far, holiday.
        """
        now = to_business_time(now, self.policy.timezone)
        today = datetime.combine(now.date(), time_type(0, 0))
        candidate = datetime.combine(day, time_type(0, 0))

        min_bookable = today + timedelta(hours=self.policy.min_notice_hours)
        max_bookable = today + self._max_advance()

        if candidate < min_bookable:
            return PolicyDecision(
                reason=PolicyReason.TOO_SOON,
                message=f"Bookings require {self._format_hours()} hours advance notice",
                min_bookable=min_bookable,
                max_bookable=max_bookable,
            )

        if candidate > max_bookable:
            return PolicyDecision(
                reason=PolicyReason.TOO_FAR,
                message=f"Bookings can be made up to {self._describe_max_advance()} in advance",
                min_bookable=min_bookable,
                max_bookable=max_bookable,
            )

        if day in self.policy.holidays:
            return PolicyDecision(
                reason=PolicyReason.HOLIDAY,
                message="This date is a holiday/closure day and not available for booking",
                min_bookable=min_bookable,
                max_bookable=max_bookable,
            )

        return PolicyDecision(
            reason=PolicyReason.OK,
            min_bookable=min_bookable,
            max_bookable=max_bookable,
        )

    def earliest_instant(self, now: datetime) -> datetime:
        """First wall-clock instant a slot may start at."""
        now = to_business_time(now, self.policy.timezone)
        return now + timedelta(hours=self.policy.min_notice_hours)

    def _max_advance(self):
        # Calendar months when configured; the day count is the legacy form
        if self.policy.max_advance_months is not None:
            return relativedelta(months=self.policy.max_advance_months)
        return timedelta(days=self.policy.max_advance_days)

    def _describe_max_advance(self) -> str:
        if self.policy.max_advance_months is not None:
            return f"{self.policy.max_advance_months} months"
        return f"{self.policy.max_advance_days} days"

    def _format_hours(self) -> str:
        hours = self.policy.min_notice_hours
        return str(int(hours)) if float(hours).is_integer() else str(hours)
