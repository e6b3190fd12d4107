"""
Base classes for screen view-models.

A screen holds the state a front end renders (fetched collections,
loading/refreshing flags, modal visibility) and exposes user actions as
coroutines. Collaborators are passed in explicitly.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from parkit.schemas.user import User
from parkit.screens.navigation import Navigator, Route
from parkit.services.notifications import Toaster
from parkit.services.session import SessionContext

logger = logging.getLogger(__name__)


class Screen:
    """Common screen state"""
    
    def __init__(
        self,
        toaster: Toaster,
        navigator: Navigator,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.toaster = toaster
        self.navigator = navigator
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.loading = False
        self.refreshing = False


class ProtectedScreen(Screen):
    """Screen that requires a signed-in user"""
    
    def __init__(self, session: SessionContext, toaster: Toaster, navigator: Navigator, **kwargs):
        super().__init__(toaster, navigator, **kwargs)
        self.session = session
    
    @property
    def user(self) -> Optional[User]:
        return self.session.user
    
    async def ensure_session(self) -> bool:
        """
        Load the session; without one, send the user to the login screen.
        No error is shown for a missing session.
        """
        if await self.session.load() is None:
            logger.info(f"{type(self).__name__}: no session, redirecting to login")
            self.navigator.replace(Route.LOGIN)
            return False
        return True
