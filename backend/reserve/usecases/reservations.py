from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time
from typing import Any, Callable, Optional, Union

from ..config import Settings
from ..domain.errors import SlotFullError
from ..domain.outcome import Committed, Conflict, Outcome, Rejected, ValidationFailed
from ..domain.repositories import SlotLedger
from ..domain.validation import validate
from ..models import ReservationRecord, ReservationStatus, RequestDescriptor, SlotKey
from ..utils.audit_log import emit_audit_log
from ..utils.time import utc_now, venue_now

logger = logging.getLogger(__name__)


def build_descriptor(
    name: str,
    guests: int,
    email: str,
    phone: str,
    day: Union[date, str],
    time: Union[time, str],
    instructions: Optional[str] = None,
) -> RequestDescriptor:
    """Bundle the seven reservation fields. Performs no validation."""
    return RequestDescriptor(
        name=name,
        guests=guests,
        email=email,
        phone=phone,
        day=day,
        time=time,
        instructions=instructions,
    )


class BookingEngine:
    """Validates requests and commits them against a slot ledger.

    The engine is the only writer to its ledger. `clock` returns the venue's
    current naive wall-clock time and `id_factory` produces reservation ids;
    both are injectable so tests can pin them.
    """

    def __init__(
        self,
        ledger: SlotLedger,
        settings: Settings,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.ledger = ledger
        self.settings = settings
        self._clock = clock or (lambda: venue_now(settings.tz))
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    def submit(self, descriptor: RequestDescriptor) -> Outcome:
        result = validate(descriptor, settings=self.settings, now=self._clock())
        if isinstance(result, list):
            outcome: Outcome = Rejected(ValidationFailed(tuple(result)))
            logger.info("Rejected reservation for %r: %s", descriptor.name, ", ".join(e.code for e in result))
            self._audit_rejection(outcome, slot=None, guests=None)
            return outcome

        slot = SlotKey.for_descriptor(result)
        pending = ReservationRecord(
            reservation_id=self._id_factory(),
            descriptor=result,
            committed_at=utc_now(),
        )
        try:
            record = self.ledger.try_commit(slot, result.guests, pending)
        except SlotFullError as exc:
            outcome = Rejected(Conflict(slot=slot, requested_guests=exc.requested, remaining_capacity=exc.remaining))
            logger.info("Slot %s full: requested %d, %d remaining", slot, exc.requested, exc.remaining)
            self._audit_rejection(outcome, slot=slot, guests=result.guests)
            return outcome

        logger.info("Committed reservation %s for %d guests at %s", record.reservation_id, record.guests, slot)
        self._audit(
            action="reservation.committed",
            reservation_id=record.reservation_id,
            slot=str(slot),
            guests=record.guests,
            status_from=ReservationStatus.PENDING,
            status_to=ReservationStatus.COMMITTED,
        )
        return Committed(record)

    def cancel(self, reservation_id: str) -> ReservationRecord:
        """Release a committed reservation. Raises ReservationNotFoundError for unknown ids."""
        record = self.ledger.release(reservation_id)
        logger.info("Cancelled reservation %s at %s", reservation_id, record.slot)
        self._audit(
            action="reservation.cancelled",
            reservation_id=reservation_id,
            slot=str(record.slot),
            guests=record.guests,
            status_from=ReservationStatus.COMMITTED,
            status_to=ReservationStatus.CANCELLED,
        )
        return record

    def get_reservation(self, reservation_id: str) -> ReservationRecord | None:
        return self.ledger.get(reservation_id)

    def _audit_rejection(self, outcome: Rejected, *, slot: Optional[SlotKey], guests: Optional[int]) -> None:
        cause = outcome.cause
        extra: dict[str, object]
        if isinstance(cause, Conflict):
            extra = {"remaining": cause.remaining_capacity}
        else:
            extra = {"errors": sorted(cause.codes)}
        self._audit(
            action="reservation.rejected",
            reservation_id=None,
            slot=str(slot) if slot is not None else None,
            guests=guests,
            status_from=ReservationStatus.PENDING,
            status_to=ReservationStatus.REJECTED,
            message=cause.kind,
            extra=extra,
        )

    def _audit(self, **fields: Any) -> None:
        # Runs after the ledger decision; a failed audit line must not change the outcome.
        try:
            emit_audit_log(**fields)
        except RuntimeError:
            logger.exception("Audit log failed for %s %s", fields.get("action"), fields.get("reservation_id") or "")


def make_reservation(
    engine: BookingEngine,
    name: str,
    guests: int,
    email: str,
    phone: str,
    day: Union[date, str],
    time: Union[time, str],
    instructions: Optional[str] = None,
) -> Outcome:
    return engine.submit(build_descriptor(name, guests, email, phone, day, time, instructions))
