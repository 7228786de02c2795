from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from ..domain.errors import CapacityConfigError, LedgerInvariantError, ReservationNotFoundError
from ..domain.repositories import SlotLedger
from ..domain.services import SlotSnapshot, check_capacity
from ..models import ReservationRecord, SlotKey

logger = logging.getLogger(__name__)


@dataclass
class _SlotEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    capacity: Optional[int] = None
    reserved: int = 0
    records: List[ReservationRecord] = field(default_factory=list)


class InMemorySlotLedger(SlotLedger):
    """Process-local ledger of committed reservations, keyed by slot.

    Each slot has its own lock, so the capacity check, the occupancy increment and
    the record append happen as one step for that slot while other slots proceed
    independently. `_registry_lock` only guards creation of slot entries and the
    reservation-id index.
    """

    def __init__(self, default_capacity: int) -> None:
        if default_capacity < 1:
            raise CapacityConfigError("default_capacity must be >= 1")
        self.default_capacity = default_capacity
        self._registry_lock = threading.Lock()
        self._slots: Dict[SlotKey, _SlotEntry] = {}
        self._index: Dict[str, SlotKey] = {}

    def _entry(self, slot: SlotKey) -> _SlotEntry:
        entry = self._slots.get(slot)
        if entry is not None:
            return entry
        with self._registry_lock:
            return self._slots.setdefault(slot, _SlotEntry())

    def _capacity(self, entry: _SlotEntry) -> int:
        return self.default_capacity if entry.capacity is None else entry.capacity

    def capacity_of(self, slot: SlotKey) -> int:
        entry = self._slots.get(slot)
        if entry is None:
            return self.default_capacity
        return self._capacity(entry)

    def occupancy_of(self, slot: SlotKey) -> int:
        entry = self._slots.get(slot)
        if entry is None:
            return 0
        with entry.lock:
            if entry.reserved < 0:
                raise LedgerInvariantError(f"slot {slot} has negative occupancy {entry.reserved}")
            return entry.reserved

    def set_capacity(self, slot: SlotKey, capacity: int) -> None:
        if capacity < 1:
            raise CapacityConfigError("capacity must be >= 1")
        entry = self._entry(slot)
        with entry.lock:
            if capacity < entry.reserved:
                raise CapacityConfigError(
                    f"capacity {capacity} is below the {entry.reserved} guests already booked for {slot}"
                )
            entry.capacity = capacity
        logger.info("Capacity for %s set to %d", slot, capacity)

    def try_commit(self, slot: SlotKey, guests: int, record: ReservationRecord) -> ReservationRecord:
        if record.slot != slot or record.guests != guests:
            raise LedgerInvariantError("record does not match the slot and guests being committed")
        entry = self._entry(slot)
        with entry.lock:
            snapshot = SlotSnapshot(slot=slot, capacity=self._capacity(entry), reserved=entry.reserved)
            remaining = check_capacity(snapshot, guests=guests)
            with self._registry_lock:
                if record.reservation_id in self._index:
                    raise LedgerInvariantError(f"duplicate reservation id {record.reservation_id}")
                self._index[record.reservation_id] = slot
            entry.records.append(record)
            entry.reserved += guests
        logger.debug("Committed %s to %s (%d remaining)", record.reservation_id, slot, remaining)
        return replace(record)

    def records_for(self, slot: SlotKey) -> List[ReservationRecord]:
        entry = self._slots.get(slot)
        if entry is None:
            return []
        with entry.lock:
            return [replace(record) for record in entry.records]

    def get(self, reservation_id: str) -> ReservationRecord | None:
        slot = self._index.get(reservation_id)
        if slot is None:
            return None
        for record in self.records_for(slot):
            if record.reservation_id == reservation_id:
                return record
        return None

    def release(self, reservation_id: str) -> ReservationRecord:
        slot = self._index.get(reservation_id)
        if slot is None:
            raise ReservationNotFoundError(f"reservation {reservation_id} not found")
        entry = self._entry(slot)
        with entry.lock:
            for position, record in enumerate(entry.records):
                if record.reservation_id == reservation_id:
                    break
            else:
                raise ReservationNotFoundError(f"reservation {reservation_id} not found")
            if entry.reserved - record.guests < 0:
                raise LedgerInvariantError(f"releasing {reservation_id} would make {slot} occupancy negative")
            del entry.records[position]
            entry.reserved -= record.guests
            with self._registry_lock:
                self._index.pop(reservation_id, None)
        return replace(record)
