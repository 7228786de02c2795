import pytest
from conftest import DINNER
from reserve.domain.errors import LedgerInvariantError, SlotFullError
from reserve.domain.services import SlotSnapshot, check_capacity


def test_rejects_when_party_exceeds_remaining() -> None:
    snap = SlotSnapshot(slot=DINNER, capacity=4, reserved=3)
    with pytest.raises(SlotFullError) as excinfo:
        check_capacity(snap, guests=2)
    assert excinfo.value.requested == 2
    assert excinfo.value.remaining == 1
    assert excinfo.value.slot == DINNER


def test_accepts_when_within_capacity() -> None:
    snap = SlotSnapshot(slot=DINNER, capacity=4, reserved=1)
    assert check_capacity(snap, guests=2) == 1


def test_accepts_exact_fill() -> None:
    snap = SlotSnapshot(slot=DINNER, capacity=4, reserved=2)
    assert check_capacity(snap, guests=2) == 0


@pytest.mark.parametrize(
    "capacity, reserved",
    [(0, 0), (4, -1), (4, 5)],
)
def test_inconsistent_snapshot_is_an_invariant_error_not_slot_full(capacity: int, reserved: int) -> None:
    snap = SlotSnapshot(slot=DINNER, capacity=capacity, reserved=reserved)
    with pytest.raises(LedgerInvariantError):
        check_capacity(snap, guests=1)


def test_non_positive_guests_never_reach_the_ledger_check() -> None:
    snap = SlotSnapshot(slot=DINNER, capacity=4, reserved=0)
    with pytest.raises(LedgerInvariantError):
        check_capacity(snap, guests=0)
