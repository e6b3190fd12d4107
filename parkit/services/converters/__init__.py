"""
Converters package for normalizing remote store records.
"""
from parkit.services.converters.parking_converter import ParkingConverter, PARKING_FIELD_POLICY
from parkit.services.converters.booking_converter import BookingConverter, BOOKING_FIELD_POLICY

__all__ = [
    "ParkingConverter",
    "PARKING_FIELD_POLICY",
    "BookingConverter",
    "BOOKING_FIELD_POLICY"
]
