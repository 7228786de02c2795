import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..deps import get_engine
from ..domain.errors import LedgerInvariantError, ReservationNotFoundError
from ..domain.outcome import Committed, Conflict, ValidationFailed
from ..schemas import ReservationCreate, ReservationRead, conflict_detail, validation_detail
from ..usecases.reservations import BookingEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationCreate,
    engine: BookingEngine = Depends(get_engine),
) -> ReservationRead:
    try:
        outcome = engine.submit(payload.to_descriptor())
    except LedgerInvariantError:
        logger.exception("Ledger invariant violated while booking")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="booking failed")

    if isinstance(outcome, Committed):
        return ReservationRead.from_record(outcome.record)
    cause = outcome.cause
    if isinstance(cause, ValidationFailed):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=validation_detail(list(cause.errors)))
    if isinstance(cause, Conflict):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict_detail(cause))
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="unknown outcome")


@router.get("/{reservation_id}", response_model=ReservationRead)
async def get_reservation(
    reservation_id: str = Path(..., min_length=1),
    engine: BookingEngine = Depends(get_engine),
) -> ReservationRead:
    record = engine.get_reservation(reservation_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    return ReservationRead.from_record(record)


@router.post("/{reservation_id}/cancel", response_model=ReservationRead)
async def cancel_reservation(
    reservation_id: str = Path(..., min_length=1),
    engine: BookingEngine = Depends(get_engine),
) -> ReservationRead:
    try:
        record = engine.cancel(reservation_id)
    except ReservationNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    except LedgerInvariantError:
        logger.exception("Ledger invariant violated while cancelling %s", reservation_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="cancellation failed")
    return ReservationRead.from_record(record)
