"""Terminal results of a submission.

A submission ends in exactly one of: ``Committed``, ``Rejected(ValidationFailed)``
or ``Rejected(Conflict)``. None of them can move to another state; a rejected
request has to be submitted again as a new descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Tuple, Union

from ..models import ReservationRecord, SlotKey
from .errors import FieldError, FieldErrorCode


class OutcomeStatus(StrEnum):
    COMMITTED = "committed"
    REJECTED = "rejected"


class RejectionKind(StrEnum):
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class ValidationFailed:
    errors: Tuple[FieldError, ...]

    kind = RejectionKind.VALIDATION_FAILED

    @property
    def codes(self) -> set[FieldErrorCode]:
        return {error.code for error in self.errors}


@dataclass(frozen=True)
class Conflict:
    slot: SlotKey
    requested_guests: int
    remaining_capacity: int

    kind = RejectionKind.CONFLICT


RejectionCause = Union[ValidationFailed, Conflict]


@dataclass(frozen=True)
class Committed:
    record: ReservationRecord

    status = OutcomeStatus.COMMITTED

    @property
    def committed(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    cause: RejectionCause

    status = OutcomeStatus.REJECTED

    @property
    def committed(self) -> bool:
        return False


Outcome = Union[Committed, Rejected]
