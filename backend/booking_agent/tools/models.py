from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class BusyInterval(BaseModel):
    """A reserved range [start, end) during which nothing else may be booked."""

    model_config = ConfigDict(frozen=True)

    label: str
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _end_after_start(self) -> "BusyInterval":
        if self.end <= self.start:
            raise ValueError(f"Busy interval '{self.label}' must end after it starts")
        return self


class ResolutionKind(str, Enum):
    AVAILABLE = "available"
    ALTERNATIVE = "alternative"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    OUTSIDE_HOURS = "outside_hours"
    WEEKEND = "weekend"


class Resolution(BaseModel):
    """
    Outcome of resolving one desired timestamp.

    Exactly one of the three shapes is produced:
    - available: the requested timestamp is confirmed as is
    - alternative: the nearest bookable slot found by the search
    - rejected: the request breaks the weekday/hours policy
    """

    model_config = ConfigDict(frozen=True)

    kind: ResolutionKind
    timestamp: Optional[datetime] = None
    reason: Optional[RejectionReason] = None

    @model_validator(mode="after")
    def _consistent_shape(self) -> "Resolution":
        if self.kind is ResolutionKind.REJECTED:
            if self.reason is None or self.timestamp is not None:
                raise ValueError("A rejected resolution carries a reason and no timestamp")
        elif self.timestamp is None or self.reason is not None:
            raise ValueError(f"An {self.kind.value} resolution carries a timestamp and no reason")
        return self

    @classmethod
    def available(cls, timestamp: datetime) -> "Resolution":
        return cls(kind=ResolutionKind.AVAILABLE, timestamp=timestamp)

    @classmethod
    def alternative(cls, timestamp: datetime) -> "Resolution":
        return cls(kind=ResolutionKind.ALTERNATIVE, timestamp=timestamp)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "Resolution":
        return cls(kind=ResolutionKind.REJECTED, reason=reason)

    @property
    def is_offer(self) -> bool:
        return self.kind is not ResolutionKind.REJECTED
