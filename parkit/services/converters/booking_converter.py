"""
Remote `bookings` records to Booking and back.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List

from parkit.schemas.booking import Booking, BookingStatus
from parkit.services.converters.field_policy import REQUIRED, FieldPolicy, resolve_fields

logger = logging.getLogger(__name__)


def _date_from_start(fields: Dict[str, Any]) -> Any:
    start = fields["start_time"]
    if isinstance(start, datetime):
        return start.date()
    return str(start)[:10]


# Legacy keys (name, location, Date, Price, Duration) come from the
# earlier db.json booking shape.
BOOKING_FIELD_POLICY: FieldPolicy = {
    "id": (("id",), None),
    "parking_id": (("parkingId",), None),
    "parking_name": (("parkingName", "name"), ""),
    "address": (("address", "location"), ""),
    "start_time": (("startTime",), REQUIRED),
    "end_time": (("endTime",), None),
    "date": (("date", "Date"), _date_from_start),
    "price": (("price", "Price"), 0),
    "status": (("status",), BookingStatus.ACTIVE.value),
    "duration": (("duration", "Duration"), None),
}


class BookingConverter:
    """
    Converter between raw booking records and Booking.
    """
    
    @staticmethod
    def to_booking(raw: Dict[str, Any]) -> Booking:
        """
        Convert one raw record.
        
        Raises:
            ValueError: If the record has no start time or invalid values
        """
        fields = resolve_fields(raw, BOOKING_FIELD_POLICY)
        return Booking.model_validate(fields)
    
    @classmethod
    def to_bookings(cls, raw_records: Iterable[Dict[str, Any]]) -> List[Booking]:
        """Convert a collection, skipping records that cannot be read"""
        bookings = []
        for raw in raw_records:
            try:
                bookings.append(cls.to_booking(raw))
            except (ValueError, TypeError) as e:
                logger.warning(
                    "Skipping unreadable booking record",
                    extra={"record_id": raw.get("id"), "error": str(e)}
                )
        return bookings
    
    @staticmethod
    def to_payload(booking: Booking) -> Dict[str, Any]:
        """
        Wire payload for POST/PUT.
        Duration is only sent for active bookings.
        """
        payload = booking.model_dump(mode="json", by_alias=True, exclude_none=True)
        if booking.status != BookingStatus.ACTIVE or not booking.duration:
            payload.pop("duration", None)
        return payload
