from parkit.exceptions.custom_exceptions import (
    ParkitException,
    RemoteStoreException,
    BookingValidationException,
    InvalidTransitionException,
    LoginValidationException,
    InvalidCredentialsException,
    SessionRequiredException,
    CacheException
)

__all__ = [
    "ParkitException",
    "RemoteStoreException",
    "BookingValidationException",
    "InvalidTransitionException",
    "LoginValidationException",
    "InvalidCredentialsException",
    "SessionRequiredException",
    "CacheException"
]
