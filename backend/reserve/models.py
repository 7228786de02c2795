from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from typing import Optional, Union


class ReservationStatus(StrEnum):
    PENDING = "pending"
    COMMITTED = "committed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RequestDescriptor:
    """Caller-supplied reservation fields, exactly as received.

    ``day`` may be a date, ISO text or a weekday name and ``time`` may be a time
    or text such as ``"7:00 PM"``; the validator resolves both.
    """

    name: str
    guests: int
    email: str
    phone: str
    day: Union[date, str]
    time: Union[time, str]
    instructions: Optional[str] = None


@dataclass(frozen=True)
class NormalizedDescriptor:
    name: str
    guests: int
    email: str
    phone: str
    phone_digits: str
    day: date
    time: time
    instructions: Optional[str] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ", 1)[0]

    @property
    def last_name(self) -> str:
        parts = self.name.split(" ", 1)
        return parts[1].strip() if len(parts) == 2 else ""


@dataclass(frozen=True, order=True)
class SlotKey:
    day: date
    time: time

    @classmethod
    def for_descriptor(cls, descriptor: NormalizedDescriptor) -> "SlotKey":
        return cls(day=descriptor.day, time=descriptor.time)

    def __str__(self) -> str:
        return f"{self.day.isoformat()}T{self.time.strftime('%H:%M')}"


@dataclass(frozen=True)
class ReservationRecord:
    reservation_id: str
    descriptor: NormalizedDescriptor
    committed_at: datetime

    @property
    def slot(self) -> SlotKey:
        return SlotKey.for_descriptor(self.descriptor)

    @property
    def guests(self) -> int:
        return self.descriptor.guests
