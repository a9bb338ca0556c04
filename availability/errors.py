"""
Error taxonomy for the Availability Engine.

Unavailability (too soon, no staff, clashing appointment...) is a normal
outcome and is returned as data. Only the classes below are ever raised.
"""


class AvailabilityError(Exception):
    """Base class for every error raised by the engine."""


class InvalidInput(AvailabilityError, ValueError):
    """
    Malformed input: unparsable time strings, empty service carts,
    broken documents. This is a data-integrity bug upstream, not a
    scheduling outcome, so it aborts the computation.
    """


class SlotNoLongerAvailable(AvailabilityError):
    """
    Raised at commit time when the slot chosen from a snapshot no longer
    holds against the latest data (another booking won the race).
    """

    def __init__(self, message: str, staff_id=None, date=None, minute=None):
        super().__init__(message)
        self.staff_id = staff_id
        self.date = date
        self.minute = minute
