import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from parkit.exceptions import RemoteStoreException

logger = logging.getLogger(__name__)

T = TypeVar('T')


def reports_failure(
    title: str = "Error",
    message: str = "Something went wrong. Please try again.",
    on_failure: Optional[Callable[[Any], None]] = None
):
    """
    Decorator for async screen handlers that talk to the remote store.
    
    A RemoteStoreException is logged and surfaced as an error toast on
    `self.toaster`; the handler then returns None. Nothing is retried.
    
    Args:
        title: Toast title
        message: Toast text
        on_failure: Called with the screen to reset its state (e.g. empty the list)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> Optional[T]:
            try:
                return await func(self, *args, **kwargs)
            except RemoteStoreException as e:
                logger.error(
                    f"{func.__qualname__} failed",
                    extra={"error": str(e), "status_code": e.status_code}
                )
                if on_failure is not None:
                    on_failure(self)
                self.toaster.error(title, message)
                return None
        
        return wrapper
    return decorator


def tracks_flag(flag: str):
    """
    Decorator setting a boolean attribute (e.g. `loading`) while an async handler runs.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> T:
            setattr(self, flag, True)
            try:
                return await func(self, *args, **kwargs)
            finally:
                setattr(self, flag, False)
        
        return wrapper
    return decorator
