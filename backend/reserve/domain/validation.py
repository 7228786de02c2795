"""Field validation and normalization for reservation requests.

``validate`` checks every field on its own and collects all failures, so a
caller can report every problem with a request at once. It has no side effects
and depends only on its arguments.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import List, Optional, Union

from ..config import Settings
from ..models import NormalizedDescriptor, RequestDescriptor
from ..utils.time import parse_day, parse_time_of_day
from .errors import FieldError, FieldErrorCode

_PHONE_CHARS = re.compile(r"^\+?[0-9()\- ]+$")
_NON_DIGIT = re.compile(r"\D")


def validate(
    descriptor: RequestDescriptor,
    *,
    settings: Settings,
    now: datetime,
) -> Union[NormalizedDescriptor, List[FieldError]]:
    """Return the normalized descriptor, or every field error found.

    `now` is the current naive wall-clock time at the venue.
    """
    errors: List[FieldError] = []

    name = _check_name(descriptor.name, errors)
    guests = _check_guests(descriptor.guests, settings, errors)
    email = _check_email(descriptor.email, errors)
    phone = _check_phone(descriptor.phone, settings, errors)
    day = _check_day(descriptor.day, now, errors)
    at = _check_time(descriptor.time, day, now, settings, errors)
    instructions = _check_instructions(descriptor.instructions, settings, errors)

    # Every _check_* that yields None has recorded an error.
    if errors or name is None or guests is None or email is None or phone is None or day is None or at is None:
        return errors
    display, digits = phone
    return NormalizedDescriptor(
        name=name,
        guests=guests,
        email=email,
        phone=display,
        phone_digits=digits,
        day=day,
        time=at,
        instructions=instructions,
    )


def _error(errors: List[FieldError], code: FieldErrorCode, field: str, message: str) -> None:
    errors.append(FieldError(code=code, field=field, message=message))


def _check_name(value: object, errors: List[FieldError]) -> Optional[str]:
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        _error(errors, FieldErrorCode.INVALID_NAME, "name", "Name is required")
        return None
    return name


def _check_guests(value: object, settings: Settings, errors: List[FieldError]) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        _error(errors, FieldErrorCode.INVALID_GUEST_COUNT, "guests", "Guests must be a whole number")
        return None
    if value <= 0:
        _error(errors, FieldErrorCode.INVALID_GUEST_COUNT, "guests", "Guests must be greater than 0")
        return None
    if value > settings.max_party_size:
        _error(
            errors,
            FieldErrorCode.INVALID_GUEST_COUNT,
            "guests",
            f"Parties larger than {settings.max_party_size} guests must be arranged with the venue",
        )
        return None
    return value


def normalize_email(value: str) -> Optional[str]:
    """Lower-case the domain of a syntactically valid address; None when invalid."""
    text = value.strip()
    if not text or any(ch.isspace() for ch in text) or text.count("@") != 1:
        return None
    local, domain = text.split("@")
    labels = domain.split(".")
    if not local or len(labels) < 2 or not all(labels):
        return None
    return f"{local}@{domain.lower()}"


def _check_email(value: object, errors: List[FieldError]) -> Optional[str]:
    email = normalize_email(value) if isinstance(value, str) else None
    if email is None:
        _error(errors, FieldErrorCode.INVALID_EMAIL, "email", f"Invalid email: {value!r}")
    return email


def standardize_phone(value: str, *, min_digits: int = 7) -> Optional[tuple[str, str]]:
    """Return ``(display, canonical)`` for an acceptable phone number, else None.

    The canonical form keeps a leading ``+`` followed by digits only. Ten-digit
    numbers without a country prefix display as ``(800) 867-5309``.
    """
    text = value.strip()
    if not _PHONE_CHARS.match(text):
        return None
    digits = _NON_DIGIT.sub("", text)
    if len(digits) < min_digits:
        return None
    if text.startswith("+"):
        return " ".join(text.split()), "+" + digits
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}", digits
    return " ".join(text.split()), digits


def _check_phone(value: object, settings: Settings, errors: List[FieldError]) -> Optional[tuple[str, str]]:
    phone = standardize_phone(value, min_digits=settings.min_phone_digits) if isinstance(value, str) else None
    if phone is None:
        _error(errors, FieldErrorCode.INVALID_PHONE, "phone", f"Invalid phone number: {value!r}")
    return phone


def _check_day(value: object, now: datetime, errors: List[FieldError]) -> Optional[date]:
    today = now.date()
    try:
        day = parse_day(value, today=today)  # type: ignore[arg-type]
    except ValueError as exc:
        _error(errors, FieldErrorCode.INVALID_DAY, "day", str(exc))
        return None
    if day < today:
        _error(errors, FieldErrorCode.INVALID_DAY, "day", f"{day.isoformat()} is in the past")
        return None
    return day


def _check_time(
    value: object,
    day: Optional[date],
    now: datetime,
    settings: Settings,
    errors: List[FieldError],
) -> Optional[time]:
    try:
        at = parse_time_of_day(value)  # type: ignore[arg-type]
    except ValueError as exc:
        _error(errors, FieldErrorCode.INVALID_TIME, "time", str(exc))
        return None
    if day is None:
        return at

    window = settings.window_for(day)
    if window is None:
        _error(errors, FieldErrorCode.INVALID_TIME, "time", f"Closed on {day.strftime('%A')}")
        return None
    if not window.contains(at):
        _error(
            errors,
            FieldErrorCode.INVALID_TIME,
            "time",
            f"{at.strftime('%H:%M')} is outside opening hours "
            f"{window.opens_at.strftime('%H:%M')}-{window.closes_at.strftime('%H:%M')}",
        )
        return None
    if datetime.combine(day, at) < now.replace(second=0, microsecond=0):
        _error(errors, FieldErrorCode.INVALID_TIME, "time", f"{day.isoformat()} {at.strftime('%H:%M')} is in the past")
        return None
    return at


def _check_instructions(value: object, settings: Settings, errors: List[FieldError]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if len(text) > settings.max_instructions_length:
        _error(
            errors,
            FieldErrorCode.INSTRUCTIONS_TOO_LONG,
            "instructions",
            f"Instructions are limited to {settings.max_instructions_length} characters",
        )
        return None
    return text
