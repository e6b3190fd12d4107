import logging
from typing import List, Optional

from parkit.exceptions import RemoteStoreException
from parkit.schemas.booking import Booking
from parkit.schemas.parking import ParkingSpot
from parkit.screens.base import Screen
from parkit.screens.navigation import Navigator
from parkit.services.business import BookingService
from parkit.services.converters import ParkingConverter
from parkit.services.external import RemoteStoreClient
from parkit.services.notifications import Toaster
from parkit.services.search import SearchResult, search
from parkit.utils.decorators import reports_failure, tracks_flag

logger = logging.getLogger(__name__)


def _clear_spots(screen: "ExploreScreen"):
    screen.spots = []
    screen.result = search([], screen.query)


class ExploreScreen(Screen):
    """
    Parking search with a promoted best match and "book now".
    """

    def __init__(
        self,
        client: RemoteStoreClient,
        bookings: BookingService,
        toaster: Toaster,
        navigator: Navigator,
        **kwargs
    ):
        super().__init__(toaster, navigator, **kwargs)
        self.client = client
        self.bookings = bookings
        self.spots: List[ParkingSpot] = []
        self.query = ""
        self.result = SearchResult()
        self.selected_spot: Optional[ParkingSpot] = None
        self.booking_modal_visible = False

    @property
    def filtered_spots(self) -> List[ParkingSpot]:
        return self.result.spots

    @property
    def best_match(self) -> Optional[ParkingSpot]:
        return self.result.best_match

    @property
    def no_results_message(self) -> Optional[str]:
        if not self.result.no_results:
            return None
        return f'No parking spots found for "{self.query}"'

    @tracks_flag("loading")
    async def mount(self):
        await self.fetch_spots()

    @reports_failure("Error", "Failed to fetch parking spots.", on_failure=_clear_spots)
    async def fetch_spots(self, fresh: bool = False) -> Optional[List[ParkingSpot]]:
        self.spots = ParkingConverter.to_spots(await self.client.list_parking(fresh=fresh))
        self.result = search(self.spots, self.query)
        return self.spots

    async def refresh(self):
        self.refreshing = True
        try:
            fetched = await self.fetch_spots(fresh=True)
        finally:
            self.refreshing = False
        if fetched is not None:
            self.toaster.success("Refreshed", "Parking spots updated successfully.")

    def search(self, query: str) -> SearchResult:
        """Re-filter on every keystroke"""
        self.query = query
        self.result = search(self.spots, query)
        return self.result

    def open_booking(self, spot: ParkingSpot):
        self.selected_spot = spot
        self.booking_modal_visible = True

    def close_booking(self):
        self.booking_modal_visible = False
        self.selected_spot = None

    async def confirm_booking(self) -> Optional[Booking]:
        """Reserve the selected spot starting now; the modal stays open on failure"""
        if self.selected_spot is None:
            return None

        try:
            booking = await self.bookings.quick_reserve(self.selected_spot)
        except RemoteStoreException as e:
            logger.error("Error confirming booking", extra={"error": str(e)})
            self.toaster.error("Error", "Failed to confirm booking. Please try again.")
            return None

        self.close_booking()
        self.toaster.success("Booking Confirmed", "Your parking spot has been reserved.")
        return booking
