from parkit.services.business.booking_service import BookingService, CheckoutBill, checkout_price
from parkit.services.business.auth_service import AuthService, validate_credentials
from parkit.services.business.bookmark_service import BookmarkService

__all__ = [
    "BookingService",
    "CheckoutBill",
    "checkout_price",
    "AuthService",
    "validate_credentials",
    "BookmarkService"
]
