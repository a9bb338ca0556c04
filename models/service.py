"""
Service catalogue models and the service cart.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from availability.errors import InvalidInput

DEFAULT_SERVICE_DURATION = 60


class Service(BaseModel):
    """A bookable treatment."""
    id: str = Field(description="Unique identifier")
    name: str = Field(default="")
    duration: int = Field(default=DEFAULT_SERVICE_DURATION, gt=0, description="Minutes")
    buffer_time: int = Field(default=0, ge=0, description="Cleanup/transition minutes after the service")
    category: str = Field(default="")
    price: float = Field(default=0.0, ge=0)

    # Deposits are carried for the booking flow; the engine never reads them
    deposit_amount: Optional[float] = Field(default=None, ge=0)

    @field_validator('duration', mode='before')
    @classmethod
    def default_duration(cls, v):
        return DEFAULT_SERVICE_DURATION if v is None else v

    @field_validator('buffer_time', mode='before')
    @classmethod
    def default_buffer(cls, v):
        return 0 if v is None else v


@dataclass(frozen=True)
class ServiceCart:
    """
    Ordered set of services booked together as one appointment.

    Durations add up; the buffer is applied once (the largest one wins),
    because cleanup happens once regardless of how many services ran.
    """
    services: Tuple[Service, ...]

    def __post_init__(self):
        if not self.services:
            raise InvalidInput("Service cart cannot be empty")

    @classmethod
    def of(cls, services: Iterable[Service]) -> "ServiceCart":
        return cls(tuple(services))

    @property
    def service_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.services)

    @property
    def total_duration(self) -> int:
        return sum(s.duration for s in self.services)

    @property
    def effective_buffer(self) -> int:
        return max(s.buffer_time for s in self.services)

    @property
    def span(self) -> int:
        """Minutes a booking of this cart occupies, buffer included."""
        return self.total_duration + self.effective_buffer
