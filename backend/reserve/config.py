from functools import lru_cache
import json
import os
from datetime import date, time
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


load_dotenv()

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class OperatingWindow(BaseModel):
    """Half-open window of bookable times for one weekday: opens_at <= t < closes_at."""

    model_config = ConfigDict(frozen=True)

    opens_at: time
    closes_at: time

    @model_validator(mode="after")
    def _check_order(self) -> "OperatingWindow":
        if self.opens_at >= self.closes_at:
            raise ValueError("opens_at must be earlier than closes_at")
        return self

    def contains(self, value: time) -> bool:
        return self.opens_at <= value < self.closes_at

    @classmethod
    def parse(cls, text: str) -> "OperatingWindow":
        opens, sep, closes = text.partition("-")
        if not sep:
            raise ValueError(f"operating window must look like HH:MM-HH:MM, got {text!r}")
        return cls(opens_at=time.fromisoformat(opens.strip()), closes_at=time.fromisoformat(closes.strip()))


def _default_hours() -> Dict[str, Optional[OperatingWindow]]:
    return {day: OperatingWindow(opens_at=time(11, 0), closes_at=time(22, 0)) for day in WEEKDAYS}


class Settings(BaseModel):
    timezone: str = Field(default="UTC")
    default_slot_capacity: int = Field(default=20, ge=1)
    max_party_size: int = Field(default=10, ge=1)
    max_instructions_length: int = Field(default=500, ge=0)
    min_phone_digits: int = Field(default=7, ge=1)
    slot_interval_minutes: int = Field(default=30, ge=1, le=24 * 60)
    # Weekdays missing from the mapping, or mapped to None, are closed.
    operating_hours: Dict[str, Optional[OperatingWindow]] = Field(default_factory=_default_hours)
    log_level: str = Field(default="INFO")

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @field_validator("operating_hours", mode="before")
    @classmethod
    def _parse_hours(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        parsed: Dict[str, Any] = {}
        for key, window in value.items():
            name = str(key).strip().lower()
            if name not in WEEKDAYS:
                raise ValueError(f"unknown weekday {key!r}")
            parsed[name] = OperatingWindow.parse(window) if isinstance(window, str) else window
        return parsed

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def window_for(self, day: date) -> Optional[OperatingWindow]:
        return self.operating_hours.get(WEEKDAYS[day.weekday()])


@lru_cache
def get_settings() -> Settings:
    defaults = Settings.model_fields
    overrides: Dict[str, Any] = {}
    raw_hours = os.getenv("OPERATING_HOURS")
    if raw_hours:
        overrides["operating_hours"] = json.loads(raw_hours)
    return Settings(
        timezone=os.getenv("VENUE_TIMEZONE", defaults["timezone"].default),
        default_slot_capacity=int(os.getenv("DEFAULT_SLOT_CAPACITY", str(defaults["default_slot_capacity"].default))),
        max_party_size=int(os.getenv("MAX_PARTY_SIZE", str(defaults["max_party_size"].default))),
        max_instructions_length=int(
            os.getenv("MAX_INSTRUCTIONS_LENGTH", str(defaults["max_instructions_length"].default))
        ),
        min_phone_digits=int(os.getenv("MIN_PHONE_DIGITS", str(defaults["min_phone_digits"].default))),
        slot_interval_minutes=int(os.getenv("SLOT_INTERVAL_MINUTES", str(defaults["slot_interval_minutes"].default))),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default),
        **overrides,
    )
