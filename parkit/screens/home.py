import logging
from typing import List, Optional, Tuple

from parkit.core.config import get_settings
from parkit.schemas.parking import ParkingSpot
from parkit.screens.base import Screen
from parkit.screens.navigation import Navigator, Route
from parkit.services.business import BookmarkService
from parkit.services.converters import ParkingConverter
from parkit.services.external import RemoteStoreClient
from parkit.services.notifications import Toaster
from parkit.services.session import SessionContext
from parkit.utils.decorators import reports_failure
from parkit.utils.formatting import greeting_for

logger = logging.getLogger(__name__)
settings = get_settings()

QUICK_ACTIONS: List[Tuple[str, Route]] = [
    ("Find Parking", Route.EXPLORE),
    ("Bookings", Route.TICKETS),
    ("Saved", Route.BOOKMARKS),
]


def _clear_locations(screen: "HomeScreen"):
    screen.locations = []


class HomeScreen(Screen):
    """
    Greeting, quick actions and the list of available parking.
    Works for guests too: a missing session only changes the greeting.
    """
    
    def __init__(
        self,
        client: RemoteStoreClient,
        session: SessionContext,
        bookmarks: BookmarkService,
        toaster: Toaster,
        navigator: Navigator,
        **kwargs
    ):
        super().__init__(toaster, navigator, **kwargs)
        self.client = client
        self.session = session
        self.bookmarks = bookmarks
        self.locations: List[ParkingSpot] = []
    
    @property
    def greeting(self) -> str:
        return greeting_for(self.clock())
    
    @property
    def display_name(self) -> str:
        user = self.session.user
        return (user.first_name if user else "") or "Guest"
    
    @property
    def avatar_url(self) -> str:
        user = self.session.user
        return (user.avatar_url if user else "") or settings.PLACEHOLDER_AVATAR_URL
    
    async def mount(self):
        self.loading = True
        try:
            if await self.session.load() is None:
                logger.warning("No user found in session storage")
        finally:
            self.loading = False
        await self.fetch_locations()
    
    @reports_failure("Error", "Failed to fetch parking locations.", on_failure=_clear_locations)
    async def fetch_locations(self, fresh: bool = False) -> Optional[List[ParkingSpot]]:
        self.locations = ParkingConverter.to_spots(await self.client.list_parking(fresh=fresh))
        return self.locations
    
    async def refresh(self):
        self.refreshing = True
        try:
            fetched = await self.fetch_locations(fresh=True)
        finally:
            self.refreshing = False
        if fetched is not None:
            self.toaster.success("Refreshed", "Parking locations updated successfully.")
    
    def toggle_bookmark(self, spot: ParkingSpot) -> bool:
        bookmarked = self.bookmarks.toggle(spot)
        if bookmarked:
            self.toaster.success("Bookmark Added", f"{spot.name} has been added to your bookmarks.")
        else:
            self.toaster.info("Bookmark Removed", f"{spot.name} has been removed from your bookmarks.")
        return bookmarked
    
    def is_bookmarked(self, spot: ParkingSpot) -> bool:
        return self.bookmarks.is_bookmarked(spot.id)
    
    @property
    def quick_actions(self) -> List[Tuple[str, Route]]:
        return QUICK_ACTIONS

    def go(self, route: Route):
        self.navigator.push(route)
