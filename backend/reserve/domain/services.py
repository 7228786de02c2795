from dataclasses import dataclass

from ..models import SlotKey
from .errors import LedgerInvariantError, SlotFullError


@dataclass(frozen=True)
class SlotSnapshot:
    slot: SlotKey
    capacity: int
    reserved: int

    @property
    def remaining(self) -> int:
        return self.capacity - self.reserved


def check_capacity(snapshot: SlotSnapshot, *, guests: int) -> int:
    """
    Pure capacity decision for one slot.
    Returns remaining capacity after seating `guests` if OK. Raises SlotFullError otherwise,
    or LedgerInvariantError when the snapshot itself is inconsistent.
    """
    if snapshot.capacity < 1:
        raise LedgerInvariantError(f"slot {snapshot.slot} has non-positive capacity {snapshot.capacity}")
    if snapshot.reserved < 0:
        raise LedgerInvariantError(f"slot {snapshot.slot} has negative occupancy {snapshot.reserved}")
    if snapshot.reserved > snapshot.capacity:
        raise LedgerInvariantError(f"slot {snapshot.slot} is overcommitted ({snapshot.reserved}/{snapshot.capacity})")
    if guests <= 0:
        raise LedgerInvariantError("guests must be positive by the time a slot is checked")

    remaining = snapshot.remaining
    if guests > remaining:
        raise SlotFullError(snapshot.slot, requested=guests, remaining=remaining)
    return remaining - guests
