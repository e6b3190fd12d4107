"""
Client composition root.
Wires the remote store client, cache, session and screens together.
"""
import logging
from typing import Optional

import httpx

from parkit.core.config import get_settings
from parkit.core.logging import setup_logging
from parkit.exceptions import RemoteStoreException
from parkit.screens import (
    ExploreScreen,
    HomeScreen,
    LoginScreen,
    Navigator,
    NotificationsScreen,
    ProfileScreen,
    TicketsScreen
)
from parkit.services.business import AuthService, BookingService, BookmarkService
from parkit.services.cache import CollectionCache
from parkit.services.external import RemoteStoreClient
from parkit.services.notifications import NotificationInbox, Toaster
from parkit.services.session import KeyValueStore, SessionContext, SessionStore

logger = logging.getLogger(__name__)
settings = get_settings()


class ParkitApp:
    """
    Application container.

    Usage:
        async with ParkitApp() as app:
            login = app.login_screen()
            await login.mount()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        storage_path: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache: Optional[CollectionCache] = None,
        configure_logging: bool = True
    ):
        if configure_logging:
            setup_logging()

        self.cache = cache or CollectionCache()
        self.client = RemoteStoreClient(base_url=base_url, cache=self.cache, transport=transport)
        self.session = SessionContext(SessionStore(KeyValueStore(storage_path)))
        self.toaster = Toaster()
        self.navigator = Navigator()
        self.inbox = NotificationInbox()
        self.bookmarks = BookmarkService()
        self.auth = AuthService(self.client, self.session)

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def start(self):
        logger.info("Starting parkit client", extra={"base_url": self.client.base_url})
        await self.cache.connect()
        await self.session.load()

    async def stop(self):
        logger.info("Shutting down parkit client")
        await self.client.close()

    def login_screen(self) -> LoginScreen:
        return LoginScreen(self.auth, self.toaster, self.navigator)

    def home_screen(self) -> HomeScreen:
        return HomeScreen(self.client, self.session, self.bookmarks, self.toaster, self.navigator)

    def explore_screen(self) -> ExploreScreen:
        # Each screen owns its own copy of fetched data
        return ExploreScreen(self.client, BookingService(self.client), self.toaster, self.navigator)

    def tickets_screen(self) -> TicketsScreen:
        return TicketsScreen(BookingService(self.client), self.toaster, self.navigator)

    def profile_screen(self) -> ProfileScreen:
        return ProfileScreen(self.auth, self.session, self.toaster, self.navigator)

    def notifications_screen(self) -> NotificationsScreen:
        return NotificationsScreen(self.inbox, self.toaster, self.navigator)

    async def health_check(self) -> dict:
        """Remote store reachability and cache status"""
        try:
            await self.client.list_parking(fresh=True)
            remote_ok = True
        except RemoteStoreException as e:
            logger.warning(f"Remote store health check failed: {str(e)}")
            remote_ok = False

        return {
            "status": "healthy" if remote_ok else "degraded",
            "remote_store": remote_ok,
            "cache": await self.cache.health_check(),
            "signed_in": self.session.is_authenticated,
        }
