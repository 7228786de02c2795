from datetime import date, time

import pytest
from conftest import DINNER
from reserve.config import OperatingWindow, Settings
from reserve.domain.errors import CapacityConfigError
from reserve.infrastructure.ledger import InMemorySlotLedger
from reserve.usecases import slots as uc


def _settings() -> Settings:
    window = OperatingWindow(opens_at=time(18, 0), closes_at=time(20, 0))
    return Settings(
        default_slot_capacity=6,
        slot_interval_minutes=30,
        operating_hours={"saturday": window, "sunday": None},
    )


def test_slots_for_day_step_through_window() -> None:
    slots = uc.slots_for_day(_settings(), DINNER.day)
    assert [slot.time for slot in slots] == [time(18, 0), time(18, 30), time(19, 0), time(19, 30)]


def test_closed_day_has_no_slots() -> None:
    assert uc.slots_for_day(_settings(), date(2024, 6, 2)) == []
    assert uc.slots_for_day(_settings(), date(2024, 6, 3)) == []


def test_list_availability_reports_remaining() -> None:
    settings = _settings()
    ledger = InMemorySlotLedger(default_capacity=settings.default_slot_capacity)
    uc.configure_capacity(ledger, slot=DINNER, capacity=4)

    rows = uc.list_availability(ledger, settings, day=DINNER.day)
    by_time = {row["slot"].time: row for row in rows}
    assert by_time[time(19, 0)]["capacity"] == 4
    assert by_time[time(19, 0)]["remaining"] == 4
    assert by_time[time(18, 0)]["capacity"] == 6
    assert all(row["reserved"] == 0 for row in rows)


def test_configure_capacity_rejects_below_one() -> None:
    ledger = InMemorySlotLedger(default_capacity=6)
    with pytest.raises(CapacityConfigError):
        uc.configure_capacity(ledger, slot=DINNER, capacity=0)
