from datetime import date, datetime, timedelta
from typing import Any, Dict, List

from ..config import Settings
from ..domain.errors import CapacityConfigError
from ..domain.repositories import SlotLedger
from ..models import SlotKey


def slots_for_day(settings: Settings, day: date) -> List[SlotKey]:
    """Slot starts inside the day's operating window, every `slot_interval_minutes`."""
    window = settings.window_for(day)
    if window is None:
        return []
    step = timedelta(minutes=settings.slot_interval_minutes)
    current = datetime.combine(day, window.opens_at)
    closes = datetime.combine(day, window.closes_at)
    slots: List[SlotKey] = []
    while current < closes:
        slots.append(SlotKey(day=day, time=current.time()))
        current += step
    return slots


def list_availability(ledger: SlotLedger, settings: Settings, *, day: date) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for slot in slots_for_day(settings, day):
        capacity = ledger.capacity_of(slot)
        reserved = ledger.occupancy_of(slot)
        items.append(
            {
                "slot": slot,
                "capacity": capacity,
                "reserved": reserved,
                "remaining": max(capacity - reserved, 0),
            }
        )
    return items


def configure_capacity(ledger: SlotLedger, *, slot: SlotKey, capacity: int) -> None:
    if capacity < 1:
        raise CapacityConfigError("capacity must be >= 1")
    ledger.set_capacity(slot, capacity)
