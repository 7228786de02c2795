import json
from datetime import date, time

import pytest
from reserve.config import OperatingWindow, Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = Settings()
    assert settings.default_slot_capacity == 20
    assert settings.max_party_size == 10
    assert settings.max_instructions_length == 500
    assert settings.min_phone_digits == 7
    window = settings.window_for(date(2024, 6, 1))
    assert window == OperatingWindow(opens_at=time(11, 0), closes_at=time(22, 0))


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_SLOT_CAPACITY", "12")
    monkeypatch.setenv("VENUE_TIMEZONE", "America/Chicago")
    monkeypatch.setenv("OPERATING_HOURS", json.dumps({"Friday": "17:00-23:00", "saturday": None}))
    settings = get_settings()
    assert settings.default_slot_capacity == 12
    assert settings.tz.key == "America/Chicago"
    assert settings.window_for(date(2024, 5, 31)) == OperatingWindow(opens_at=time(17, 0), closes_at=time(23, 0))
    assert settings.window_for(date(2024, 6, 1)) is None
    assert settings.window_for(date(2024, 6, 2)) is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"default_slot_capacity": 0},
        {"timezone": "Mars/Olympus"},
        {"operating_hours": {"funday": "11:00-22:00"}},
        {"operating_hours": {"monday": "22:00-11:00"}},
        {"operating_hours": {"monday": "all day"}},
    ],
)
def test_invalid_settings_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_window_is_half_open() -> None:
    window = OperatingWindow.parse("11:00-22:00")
    assert window.contains(time(11, 0))
    assert window.contains(time(21, 59))
    assert not window.contains(time(22, 0))
