from parkit.schemas.money import Money
from parkit.schemas.user import User
from parkit.schemas.parking import ParkingSpot
from parkit.schemas.booking import (
    Booking,
    BookingForm,
    BookingStatus,
    QuickReservation,
    BOOKING_TRANSITIONS
)
from parkit.schemas.notification import Notification, NotificationType, Toast, ToastVariant

__all__ = [
    "Money",
    "User",
    "ParkingSpot",
    "Booking",
    "BookingForm",
    "BookingStatus",
    "QuickReservation",
    "BOOKING_TRANSITIONS",
    "Notification",
    "NotificationType",
    "Toast",
    "ToastVariant"
]
