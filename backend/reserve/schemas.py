import datetime as dt
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictInt, field_serializer

from .domain.errors import FieldError
from .domain.outcome import Conflict
from .models import RequestDescriptor, ReservationRecord, SlotKey


class ReservationCreate(BaseModel):
    name: str
    guests: StrictInt
    email: str
    phone: str
    day: Union[dt.date, str] = Field(description="ISO date or weekday name, e.g. 'Friday'")
    time: Union[dt.time, str] = Field(description="e.g. '7:00 PM' or '19:00'")
    instructions: Optional[str] = None

    def to_descriptor(self) -> RequestDescriptor:
        return RequestDescriptor(
            name=self.name,
            guests=self.guests,
            email=self.email,
            phone=self.phone,
            day=self.day,
            time=self.time,
            instructions=self.instructions,
        )


class ReservationRead(BaseModel):
    reservation_id: str
    name: str
    first_name: str
    last_name: str
    guests: int
    email: str
    phone: str
    day: dt.date
    time: dt.time
    instructions: Optional[str]
    committed_at: dt.datetime

    @field_serializer("time")
    def _ser_time(self, value: dt.time) -> str:
        return value.strftime("%H:%M")

    @classmethod
    def from_record(cls, record: ReservationRecord) -> "ReservationRead":
        descriptor = record.descriptor
        return cls(
            reservation_id=record.reservation_id,
            name=descriptor.name,
            first_name=descriptor.first_name,
            last_name=descriptor.last_name,
            guests=descriptor.guests,
            email=descriptor.email,
            phone=descriptor.phone,
            day=descriptor.day,
            time=descriptor.time,
            instructions=descriptor.instructions,
            committed_at=record.committed_at,
        )


class FieldErrorRead(BaseModel):
    code: str
    field: str
    message: str

    @classmethod
    def from_error(cls, error: FieldError) -> "FieldErrorRead":
        return cls(code=str(error.code), field=error.field, message=error.message)


def validation_detail(errors: List[FieldError]) -> Dict[str, Any]:
    return {
        "reason": "validation_failed",
        "errors": [FieldErrorRead.from_error(error).model_dump() for error in errors],
    }


def conflict_detail(conflict: Conflict) -> Dict[str, Any]:
    return {
        "reason": "conflict",
        "slot": str(conflict.slot),
        "requested": conflict.requested_guests,
        "remaining": conflict.remaining_capacity,
    }


class SlotAvailability(BaseModel):
    day: dt.date
    time: dt.time
    capacity: int
    reserved: int
    remaining: int

    @field_serializer("time")
    def _ser_time(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class SlotCapacityUpdate(BaseModel):
    day: dt.date
    time: dt.time
    capacity: int = Field(ge=1)

    def slot(self) -> SlotKey:
        return SlotKey(day=self.day, time=self.time.replace(second=0, microsecond=0, tzinfo=None))
