from __future__ import annotations

from typing import Protocol

from ..models import ReservationRecord, SlotKey


class SlotLedger(Protocol):
    def capacity_of(self, slot: SlotKey) -> int: ...

    def occupancy_of(self, slot: SlotKey) -> int: ...

    def set_capacity(self, slot: SlotKey, capacity: int) -> None: ...

    def try_commit(self, slot: SlotKey, guests: int, record: ReservationRecord) -> ReservationRecord: ...

    def records_for(self, slot: SlotKey) -> list[ReservationRecord]: ...

    def get(self, reservation_id: str) -> ReservationRecord | None: ...

    def release(self, reservation_id: str) -> ReservationRecord: ...
