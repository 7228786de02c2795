"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional, Union

import pytest
from reserve.config import Settings
from reserve.infrastructure.ledger import InMemorySlotLedger
from reserve.models import RequestDescriptor, SlotKey
from reserve.usecases.reservations import BookingEngine

# Thursday noon at the venue.
NOW = datetime(2024, 5, 30, 12, 0)
DINNER = SlotKey(day=date(2024, 6, 1), time=time(19, 0))


def make_descriptor(
    name: str = "Jane Smith",
    guests: int = 2,
    email: str = "jane@example.com",
    phone: str = "800-867-5309",
    day: Union[date, str] = DINNER.day,
    at: Union[time, str] = DINNER.time,
    instructions: Optional[str] = None,
) -> RequestDescriptor:
    return RequestDescriptor(
        name=name,
        guests=guests,
        email=email,
        phone=phone,
        day=day,
        time=at,
        instructions=instructions,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(default_slot_capacity=20)


@pytest.fixture
def ledger(settings: Settings) -> InMemorySlotLedger:
    return InMemorySlotLedger(default_capacity=settings.default_slot_capacity)


@pytest.fixture
def engine(ledger: InMemorySlotLedger, settings: Settings) -> BookingEngine:
    return BookingEngine(ledger, settings, clock=lambda: NOW)
