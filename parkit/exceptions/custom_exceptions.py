from typing import Optional, Dict


class ParkitException(Exception):
    """Base exception for all parkit client errors"""
    pass


class RemoteStoreException(ParkitException):
    """Exception raised for remote store transport or non-2xx errors"""
    
    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body


class BookingValidationException(ParkitException):
    """Exception raised when a booking form fails client-side validation"""
    
    def __init__(self, title: str, message: str):
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message


class InvalidTransitionException(ParkitException):
    """Exception raised for a disallowed booking status transition"""
    pass


class LoginValidationException(ParkitException):
    """Exception raised when the login form has field errors"""
    
    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class InvalidCredentialsException(ParkitException):
    """Exception raised when no user matches the given email and password"""
    pass


class SessionRequiredException(ParkitException):
    """Exception raised when a signed-in user is required but absent"""
    pass


class CacheException(ParkitException):
    """Exception raised for cache operation errors"""
    pass
