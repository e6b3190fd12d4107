import logging
from typing import Dict, List, Optional, Tuple

from parkit.exceptions import (
    BookingValidationException,
    InvalidTransitionException,
    RemoteStoreException
)
from parkit.schemas.booking import Booking, BookingForm
from parkit.screens.base import Screen
from parkit.screens.navigation import Navigator
from parkit.services.business import BookingService, CheckoutBill
from parkit.services.business.booking_service import ConfirmPrompt
from parkit.services.notifications import Toaster
from parkit.utils.decorators import reports_failure, tracks_flag

logger = logging.getLogger(__name__)


class TicketsScreen(Screen):
    """
    Ticket history: list, details, add/edit form, checkout and delete.

    Modal flags mirror what is on screen; at most one of them is expected
    to be set at a time but nothing enforces it.
    """

    def __init__(
        self,
        bookings: BookingService,
        toaster: Toaster,
        navigator: Navigator,
        **kwargs
    ):
        super().__init__(toaster, navigator, **kwargs)
        self.bookings = bookings
        self.selected: Optional[Booking] = None
        self.form: Optional[BookingForm] = None
        self.bill: Optional[CheckoutBill] = None
        # (title, message) of the blocking prompt shown for invalid form input
        self.alert: Optional[Tuple[str, str]] = None
        self.details_visible = False
        self.checkout_visible = False
        self.bill_visible = False
        self.form_visible = False

    @property
    def tickets(self) -> List[Booking]:
        return self.bookings.bookings

    @property
    def status_counts(self) -> Dict[str, int]:
        return self.bookings.summary()

    @tracks_flag("loading")
    async def mount(self):
        await self.fetch_tickets()

    @reports_failure("Error", "Failed to load bookings.")
    async def fetch_tickets(self, fresh: bool = False) -> Optional[List[Booking]]:
        return await self.bookings.list(fresh=fresh)

    async def refresh(self):
        self.refreshing = True
        try:
            fetched = await self.fetch_tickets(fresh=True)
        finally:
            self.refreshing = False
        if fetched is not None:
            self.toaster.success("Refreshed", "Bookings updated successfully.")

    def open_details(self, ticket: Booking):
        self.selected = ticket
        self.details_visible = True

    def begin_checkout(self):
        self.details_visible = False
        self.checkout_visible = True

    async def confirm_checkout(self) -> Optional[Booking]:
        if self.selected is None or not self.selected.id:
            return None

        try:
            updated = await self.bookings.checkout(self.selected)
        except InvalidTransitionException as e:
            self.toaster.error("Error", str(e))
            return None
        except RemoteStoreException as e:
            logger.error("Error checking out", extra={"error": str(e)})
            self.toaster.error("Error", "Failed to complete checkout. Please try again.")
            return None

        self.selected = updated
        self.bill = self.bookings.checkout_bill(updated)
        self.checkout_visible = False
        self.bill_visible = True
        self.toaster.success(
            "Checkout Complete",
            f"Successfully checked out from {updated.parking_name}."
        )
        return updated

    def open_add(self):
        now = self.clock().astimezone(self.bookings.tz)
        self.selected = None
        self.alert = None
        self.form = BookingForm(date=now.date(), start_time=now.time().replace(microsecond=0))
        self.form_visible = True

    def open_edit(self, ticket: Booking):
        self.selected = ticket
        self.alert = None
        self.form = BookingForm.from_booking(ticket, tz=self.bookings.tz)
        self.form_visible = True

    async def save(self, form: BookingForm) -> Optional[Booking]:
        """
        Submit the add/edit form. Invalid input sets `alert` and keeps the
        form open; a failed request leaves the ticket list unchanged.
        """
        self.alert = None
        action = "update" if form.booking_id else "add"

        try:
            saved = await self.bookings.save(form)
        except BookingValidationException as e:
            self.alert = (e.title, e.message)
            return None
        except InvalidTransitionException as e:
            self.alert = ("Invalid Status", str(e))
            return None
        except RemoteStoreException as e:
            logger.error("Error saving booking", extra={"error": str(e)})
            self.toaster.error("Error", f"Failed to {action} booking. Please try again.")
            return None

        if form.booking_id:
            self.toaster.success("Booking Updated", f"Successfully updated booking at {form.parking_name}.")
        else:
            self.toaster.success("Booking Added", f"Successfully added booking at {form.parking_name}.")
        self.close_all_modals()
        return saved

    async def delete(self, ticket_id: str, confirm: ConfirmPrompt) -> bool:
        try:
            deleted = await self.bookings.delete(ticket_id, confirm)
        except RemoteStoreException as e:
            logger.error("Error deleting booking", extra={"error": str(e)})
            self.toaster.error("Error", "Failed to delete booking. Please try again.")
            return False

        if deleted:
            self.close_all_modals()
            self.toaster.success("Booking Deleted", "Booking successfully removed.")
        return deleted

    def close_all_modals(self):
        self.details_visible = False
        self.checkout_visible = False
        self.bill_visible = False
        self.form_visible = False
        self.form = None
        self.selected = None
