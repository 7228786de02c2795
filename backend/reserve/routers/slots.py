import datetime as dt
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_engine
from ..domain.errors import CapacityConfigError
from ..schemas import SlotAvailability, SlotCapacityUpdate
from ..usecases import slots as slot_usecase
from ..usecases.reservations import BookingEngine

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/availability", response_model=List[SlotAvailability])
async def list_availability(
    day: dt.date = Query(..., description="Venue-local date (YYYY-MM-DD)"),
    engine: BookingEngine = Depends(get_engine),
) -> list[SlotAvailability]:
    rows = slot_usecase.list_availability(engine.ledger, engine.settings, day=day)
    return [
        SlotAvailability(
            day=entry["slot"].day,
            time=entry["slot"].time,
            capacity=entry["capacity"],
            reserved=entry["reserved"],
            remaining=entry["remaining"],
        )
        for entry in rows
    ]


@router.put("/capacity", response_model=SlotAvailability)
async def set_capacity(
    payload: SlotCapacityUpdate,
    engine: BookingEngine = Depends(get_engine),
) -> SlotAvailability:
    slot = payload.slot()
    try:
        slot_usecase.configure_capacity(engine.ledger, slot=slot, capacity=payload.capacity)
    except CapacityConfigError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    capacity = engine.ledger.capacity_of(slot)
    reserved = engine.ledger.occupancy_of(slot)
    return SlotAvailability(
        day=slot.day,
        time=slot.time,
        capacity=capacity,
        reserved=reserved,
        remaining=capacity - reserved,
    )
