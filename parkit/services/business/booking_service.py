import inspect
import logging
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import BaseModel

from parkit.core.config import get_settings
from parkit.core.metrics import track_booking_operation
from parkit.exceptions import (
    BookingValidationException,
    InvalidTransitionException,
    RemoteStoreException
)
from parkit.schemas.booking import Booking, BookingForm, BookingStatus, QuickReservation
from parkit.schemas.money import Money
from parkit.schemas.parking import ParkingSpot
from parkit.services.converters import BookingConverter
from parkit.services.external import RemoteStoreClient

logger = logging.getLogger(__name__)
settings = get_settings()

Clock = Callable[[], datetime]
ConfirmPrompt = Callable[[str, str], Union[bool, Awaitable[bool]]]

DELETE_PROMPT_TITLE = "Delete Booking"
DELETE_PROMPT_MESSAGE = "Are you sure you want to delete this parking booking?"


def local_now() -> datetime:
    """Current instant in the device time zone"""
    return datetime.now().astimezone()


def checkout_price() -> Money:
    """Flat placeholder fare charged on checkout"""
    return Money(amount=Decimal(settings.CHECKOUT_PRICE), currency=settings.DEFAULT_CURRENCY)


class CheckoutBill(BaseModel):
    """Receipt shown after checkout"""
    parking_name: str
    date: str
    duration: Optional[str] = None
    base_fee: Money
    service_fee: Money
    total: Money


class BookingService:
    """
    Booking lifecycle controller.

    Owns the in-memory ticket list and keeps it in step with the remote
    store: the server response is the source of truth after every write,
    and a failed write leaves the list untouched.
    """

    def __init__(
        self,
        client: RemoteStoreClient,
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None
    ):
        """
        Args:
            client: Remote store client
            clock: Returns the current instant
            tz: Zone booking forms are filled in; None is the device zone
        """
        self.client = client
        self.clock = clock or local_now
        self.tz = tz
        self.bookings: List[Booking] = []

    def get(self, booking_id: str) -> Optional[Booking]:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        return None

    def validate(self, form: BookingForm, current: Optional[Booking] = None) -> Booking:
        """
        Validate form input and build the booking to send.

        Args:
            form: Add/edit form input
            current: Stored booking being edited, used for the transition check

        Raises:
            BookingValidationException: On missing fields, past dates/times or end before start
            InvalidTransitionException: If the status change is not allowed
        """
        if not form.parking_name or not form.address or form.date is None \
                or form.start_time is None or not form.price:
            raise BookingValidationException("Missing Information", "Please fill in all required fields.")

        try:
            price = Money.parse(form.price)
        except ValueError:
            raise BookingValidationException("Invalid Price", "Please enter a valid price.")

        now = self.clock()
        start, end = form.combine(self.tz)

        if form.date < now.astimezone(self.tz).date():
            raise BookingValidationException("Invalid Date", "The selected date cannot be in the past.")

        if form.status != BookingStatus.COMPLETED and start < now:
            raise BookingValidationException(
                "Invalid Start Time",
                "Start time cannot be in the past for active or upcoming bookings."
            )

        if end is not None and end <= start:
            raise BookingValidationException("Invalid End Time", "End time must be after start time.")

        if current is not None:
            if not current.status.can_transition_to(form.status):
                raise InvalidTransitionException(
                    f"Cannot change status from {current.status.value} to {form.status.value}"
                )
            # Keep the stored unit (e.g. /hr) when the amount was not edited
            if current.price.amount == price.amount:
                price = current.price

        return Booking(
            id=form.booking_id,
            parking_id=current.parking_id if current else None,
            parking_name=form.parking_name,
            address=form.address,
            date=form.date,
            start_time=start,
            end_time=end,
            price=price,
            status=form.status,
            duration=form.duration if form.status == BookingStatus.ACTIVE and form.duration else None,
        )

    def _from_response(self, record: Any, sent: Booking) -> Booking:
        """Prefer the server echo; fall back to what was sent if it is unreadable"""
        if isinstance(record, dict):
            try:
                return BookingConverter.to_booking(record)
            except (ValueError, TypeError) as e:
                logger.warning(f"Unreadable booking in server response: {str(e)}")
                if record.get("id") is not None and sent.id is None:
                    return sent.model_copy(update={"id": str(record["id"])})
        return sent

    def _replace(self, booking_id: str, booking: Booking):
        self.bookings = [booking if item.id == booking_id else item for item in self.bookings]

    async def list(self, fresh: bool = False) -> List[Booking]:
        """
        Fetch all bookings and replace the in-memory list.
        On failure the list falls back to empty and the error propagates.
        """
        try:
            records = await self.client.list_bookings(fresh=fresh)
        except RemoteStoreException:
            self.bookings = []
            raise

        self.bookings = BookingConverter.to_bookings(records)
        logger.info(f"Loaded {len(self.bookings)} bookings")
        return self.bookings

    async def create(self, form: BookingForm) -> Booking:
        """Validate, POST and prepend the created booking"""
        booking = self.validate(form)

        try:
            record = await self.client.create_booking(BookingConverter.to_payload(booking))
        except RemoteStoreException:
            track_booking_operation("create", success=False)
            raise

        created = self._from_response(record, booking)
        self.bookings = [created] + self.bookings
        track_booking_operation("create", success=True)
        logger.info("Booking created", extra={"booking_id": created.id, "status": created.status.value})
        return created

    async def update(self, form: BookingForm) -> Booking:
        """Validate, PUT and replace the matching booking"""
        if not form.booking_id:
            raise BookingValidationException("Missing Information", "Only saved bookings can be updated.")

        booking = self.validate(form, current=self.get(form.booking_id))

        try:
            record = await self.client.update_booking(form.booking_id, BookingConverter.to_payload(booking))
        except RemoteStoreException:
            track_booking_operation("update", success=False)
            raise

        updated = self._from_response(record, booking)
        self._replace(form.booking_id, updated)
        track_booking_operation("update", success=True)
        logger.info("Booking updated", extra={"booking_id": form.booking_id, "status": updated.status.value})
        return updated

    async def save(self, form: BookingForm) -> Booking:
        """Create or update depending on whether the form carries an id"""
        if form.booking_id:
            return await self.update(form)
        return await self.create(form)

    async def checkout(self, booking: Booking) -> Booking:
        """
        End a session: status completed, end time now, flat checkout price.

        Raises:
            BookingValidationException: If the booking was never saved
            InvalidTransitionException: If the booking is already completed
            RemoteStoreException: If the update fails
        """
        if not booking.id:
            raise BookingValidationException("Missing Information", "Only saved bookings can be checked out.")

        if booking.status == BookingStatus.COMPLETED:
            raise InvalidTransitionException(f"Booking {booking.id} is already checked out")

        checked_out = booking.model_copy(update={
            "status": BookingStatus.COMPLETED,
            "end_time": self.clock(),
            "price": checkout_price(),
        })

        try:
            record = await self.client.update_booking(booking.id, BookingConverter.to_payload(checked_out))
        except RemoteStoreException:
            track_booking_operation("checkout", success=False)
            raise

        updated = self._from_response(record, checked_out)
        self._replace(booking.id, updated)
        track_booking_operation("checkout", success=True)
        logger.info("Booking checked out", extra={"booking_id": booking.id})
        return updated

    async def delete(self, booking_id: str, confirm: ConfirmPrompt) -> bool:
        """
        Ask for confirmation, DELETE, then drop the booking from the list.

        Args:
            booking_id: Booking to delete
            confirm: Blocking prompt (title, message) -> bool, sync or async

        Returns:
            False if the user declined, True once deleted
        """
        answer = confirm(DELETE_PROMPT_TITLE, DELETE_PROMPT_MESSAGE)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            logger.debug("Booking deletion declined", extra={"booking_id": booking_id})
            return False

        try:
            await self.client.delete_booking(booking_id)
        except RemoteStoreException:
            track_booking_operation("delete", success=False)
            raise

        for index, booking in enumerate(self.bookings):
            if booking.id == booking_id:
                self.bookings = self.bookings[:index] + self.bookings[index + 1:]
                break

        track_booking_operation("delete", success=True)
        logger.info("Booking deleted", extra={"booking_id": booking_id})
        return True

    async def quick_reserve(self, spot: ParkingSpot) -> Booking:
        """
        "Book now": POST a minimal active reservation starting now.
        """
        now = self.clock()
        reservation = QuickReservation(parking_id=spot.id, start_time=now)

        try:
            record = await self.client.create_booking(
                reservation.model_dump(mode="json", by_alias=True)
            )
        except RemoteStoreException:
            track_booking_operation("quick_reserve", success=False)
            raise

        sent = Booking(
            parking_id=spot.id,
            parking_name=spot.name,
            address=spot.address,
            date=now.date(),
            start_time=now,
            price=spot.price,
            status=BookingStatus.ACTIVE,
        )
        created = self._from_response(record, sent)
        self.bookings = [created] + self.bookings
        track_booking_operation("quick_reserve", success=True)
        logger.info("Quick reservation created", extra={"parking_id": spot.id})
        return created

    def checkout_bill(self, booking: Booking) -> CheckoutBill:
        return CheckoutBill(
            parking_name=booking.parking_name,
            date=booking.display_date,
            duration=booking.duration,
            base_fee=Money(amount=Decimal(settings.CHECKOUT_BASE_FEE), currency=settings.DEFAULT_CURRENCY),
            service_fee=Money(amount=Decimal(settings.CHECKOUT_SERVICE_FEE), currency=settings.DEFAULT_CURRENCY),
            total=checkout_price(),
        )

    def summary(self) -> Dict[str, int]:
        """Booking counts per status"""
        counts = {status.value: 0 for status in BookingStatus}
        for booking in self.bookings:
            counts[booking.status.value] += 1
        return counts
