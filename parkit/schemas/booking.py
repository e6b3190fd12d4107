"""
Booking (ticket) schemas.
"""
import re
from datetime import date as Date, datetime, time as Time, timezone, tzinfo
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, field_serializer, field_validator

from parkit.schemas.money import Money
from parkit.utils.formatting import format_date, format_time, to_iso_instant


class BookingStatus(str, Enum):
    """Booking lifecycle status"""
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def can_transition_to(self, target: "BookingStatus") -> bool:
        """Check the transition table (staying in the same status is always allowed)"""
        return BookingStatus(target) in BOOKING_TRANSITIONS[self]


# Forward-only lifecycle: upcoming -> active -> completed
BOOKING_TRANSITIONS = {
    BookingStatus.UPCOMING: frozenset({
        BookingStatus.UPCOMING,
        BookingStatus.ACTIVE,
        BookingStatus.COMPLETED,
    }),
    BookingStatus.ACTIVE: frozenset({
        BookingStatus.ACTIVE,
        BookingStatus.COMPLETED,
    }),
    BookingStatus.COMPLETED: frozenset({
        BookingStatus.COMPLETED,
    }),
}


def _coerce_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _localize(value: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return value.astimezone()
    return value.replace(tzinfo=tz)


class Booking(BaseModel):
    """Parking booking as held in the tickets list"""
    id: Optional[str] = None
    parking_id: Optional[str] = Field(None, alias="parkingId")
    parking_name: str = Field("", alias="parkingName")
    address: str = ""
    date: Date
    start_time: datetime = Field(..., alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")
    price: Money
    status: BookingStatus
    duration: Optional[str] = None

    class Config:
        populate_by_name = True

    @field_validator("id", "parking_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Optional[str]:
        return _coerce_id(value)

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, value: Any) -> Money:
        return Money.parse(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def aware_instants(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _ensure_aware(value)

    @field_serializer("start_time", "end_time")
    def serialize_instant(self, value: Optional[datetime]) -> Optional[str]:
        return to_iso_instant(value) if value is not None else None

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @property
    def display_date(self) -> str:
        return format_date(self.date)

    @property
    def display_time_range(self) -> str:
        start = format_time(self.start_time)
        if self.end_time is None:
            return start
        return f"{start} - {format_time(self.end_time)}"

    @property
    def display_end_time(self) -> str:
        return format_time(self.end_time, placeholder="In progress")


def sanitize_price_text(text: str) -> str:
    """
    Keep digits and a single decimal point, at most two decimals.
    Mirrors what the price input accepts while typing.
    """
    cleaned = re.sub(r"[^0-9.]", "", text or "")
    parts = cleaned.split(".")
    if len(parts) > 2:
        return parts[0] + "." + "".join(parts[1:])
    if len(parts) == 2 and len(parts[1]) > 2:
        return parts[0] + "." + parts[1][:2]
    return cleaned


class BookingForm(BaseModel):
    """Add/edit booking form input"""
    booking_id: Optional[str] = None
    parking_name: str = ""
    address: str = ""
    date: Optional[Date] = None
    start_time: Optional[Time] = None
    end_time: Optional[Time] = None
    price: str = ""
    status: BookingStatus = BookingStatus.UPCOMING
    duration: str = ""

    @field_validator("booking_id", mode="before")
    @classmethod
    def coerce_booking_id(cls, value: Any) -> Optional[str]:
        return _coerce_id(value)

    @field_validator("price", mode="before")
    @classmethod
    def sanitize_price(cls, value: Any) -> str:
        if value is None:
            return ""
        return sanitize_price_text(str(value))

    @classmethod
    def from_booking(cls, booking: Booking, tz: Optional[tzinfo] = None) -> "BookingForm":
        """
        Pre-fill the form from an existing booking (edit mode).
        The day is taken from the start instant in `tz` (device zone when None);
        older records store `date` as the UTC day.
        """
        start = booking.start_time.astimezone(tz)
        end = booking.end_time.astimezone(tz) if booking.end_time else None
        return cls(
            booking_id=booking.id,
            parking_name=booking.parking_name,
            address=booking.address,
            date=start.date(),
            start_time=start.time(),
            end_time=end.time() if end else None,
            price=str(booking.price.amount),
            status=booking.status,
            duration=booking.duration or "",
        )

    def combine(self, tz: Optional[tzinfo] = None) -> Tuple[datetime, Optional[datetime]]:
        """
        Combine the selected date with the start and end times of day.

        Args:
            tz: Zone the times of day were picked in; None means the device
                zone, with the UTC offset in force on the selected date

        Returns:
            (start instant, end instant or None)
        """
        start = _localize(datetime.combine(self.date, self.start_time), tz)
        end = None
        if self.end_time is not None:
            end = _localize(datetime.combine(self.date, self.end_time), tz)
        return start, end


class QuickReservation(BaseModel):
    """Minimal "book now" payload"""
    parking_id: str = Field(..., alias="parkingId")
    start_time: datetime = Field(..., alias="startTime")
    status: BookingStatus = BookingStatus.ACTIVE

    class Config:
        populate_by_name = True

    @field_validator("parking_id", mode="before")
    @classmethod
    def coerce_parking_id(cls, value: Any) -> str:
        return str(value)

    @field_serializer("start_time")
    def serialize_instant(self, value: datetime) -> str:
        return to_iso_instant(value)
