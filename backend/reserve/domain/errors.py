from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import SlotKey


class FieldErrorCode(StrEnum):
    INVALID_NAME = "InvalidName"
    INVALID_GUEST_COUNT = "InvalidGuestCount"
    INVALID_EMAIL = "InvalidEmail"
    INVALID_PHONE = "InvalidPhone"
    INVALID_DAY = "InvalidDay"
    INVALID_TIME = "InvalidTime"
    INSTRUCTIONS_TOO_LONG = "InstructionsTooLong"


@dataclass(frozen=True)
class FieldError:
    """One malformed field. Returned as a value, never raised."""

    code: FieldErrorCode
    field: str
    message: str


class ReservationError(Exception):
    """Base class for reservation domain errors."""


class SlotFullError(ReservationError):
    def __init__(self, slot: "SlotKey", requested: int, remaining: int) -> None:
        super().__init__(f"slot {slot} cannot take {requested} guests ({remaining} remaining)")
        self.slot = slot
        self.requested = requested
        self.remaining = remaining


class ReservationNotFoundError(ReservationError):
    pass


class LedgerInvariantError(ReservationError):
    """The ledger reached a state that should be impossible; fatal to the operation."""


class CapacityConfigError(ReservationError, ValueError):
    pass
