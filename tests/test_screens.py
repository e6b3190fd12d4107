"""Tests for the screen view-models."""

from datetime import date, time, timezone

import httpx
import pytest

from parkit.schemas.booking import BookingForm, BookingStatus
from parkit.schemas.notification import ToastVariant
from parkit.schemas.user import User
from parkit.screens import (
    ExploreScreen,
    HomeScreen,
    LoginScreen,
    NotificationsScreen,
    ProfileScreen,
    Route,
    TicketsScreen
)
from parkit.services.business import BookingService, BookmarkService
from parkit.services.external import RemoteStoreClient
from parkit.services.notifications import NotificationInbox

from tests.conftest import BASE_URL, NOW, USERS, fixed_clock


@pytest.mark.asyncio
async def test_login_success_navigates_home(auth_service, toaster, navigator):
    screen = LoginScreen(auth_service, toaster, navigator)
    await screen.mount()

    assert await screen.submit("jane@example.com", "secret123") is True
    assert navigator.current == Route.HOME
    assert screen.loading is False


@pytest.mark.asyncio
async def test_login_shows_field_and_credential_errors(auth_service, toaster, navigator):
    screen = LoginScreen(auth_service, toaster, navigator)
    await screen.mount()

    assert await screen.submit("jane", "123") is False
    assert screen.errors["email"] == "Email is invalid"
    assert screen.errors["password"] == "Password must be at least 6 characters"

    assert await screen.submit("jane@example.com", "wrong-password") is False
    assert screen.errors["credentials"] == "Invalid email or password"
    assert navigator.current == Route.LOGIN


@pytest.mark.asyncio
async def test_login_mount_failure(auth_service, toaster, navigator, remote_store):
    remote_store.fail("GET", "users")
    screen = LoginScreen(auth_service, toaster, navigator)

    await screen.mount()

    assert screen.errors["credentials"] == "Failed to fetch users. Please try again."


@pytest.mark.asyncio
async def test_home_for_guest(client, session, toaster, navigator):
    screen = HomeScreen(client, session, BookmarkService(), toaster, navigator, clock=fixed_clock)
    await screen.mount()

    assert screen.display_name == "Guest"
    assert screen.greeting == "Good Morning"
    assert [spot.id for spot in screen.locations] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_home_for_signed_in_user(client, session, toaster, navigator):
    await session.begin(User.model_validate(USERS[0]))
    screen = HomeScreen(client, session, BookmarkService(), toaster, navigator)

    await screen.mount()

    assert screen.display_name == "Jane"
    assert screen.avatar_url == "https://img.test/jane.png"


@pytest.mark.asyncio
async def test_home_fetch_failure_clears_and_toasts(client, session, toaster, navigator, remote_store):
    screen = HomeScreen(client, session, BookmarkService(), toaster, navigator)
    await screen.mount()
    remote_store.fail("GET", "parking", status=None)

    await screen.refresh()

    assert screen.locations == []
    assert screen.refreshing is False
    assert toaster.latest.variant == ToastVariant.ERROR
    assert toaster.latest.message == "Failed to fetch parking locations."


@pytest.mark.asyncio
async def test_home_refresh_and_bookmarks(client, session, toaster, navigator):
    screen = HomeScreen(client, session, BookmarkService(), toaster, navigator)
    await screen.refresh()

    assert toaster.latest.title == "Refreshed"

    spot = screen.locations[0]
    assert screen.toggle_bookmark(spot) is True
    assert screen.is_bookmarked(spot)
    assert toaster.latest.title == "Bookmark Added"
    assert screen.toggle_bookmark(spot) is False
    assert toaster.latest.title == "Bookmark Removed"


@pytest.mark.asyncio
async def test_explore_search_and_book_now(client, booking_service, toaster, navigator, remote_store):
    screen = ExploreScreen(client, booking_service, toaster, navigator)
    await screen.mount()

    screen.search("westside")
    assert screen.best_match.id == "2"
    assert screen.no_results_message is None

    screen.open_booking(screen.best_match)
    booking = await screen.confirm_booking()

    assert booking.id == "100"
    assert screen.booking_modal_visible is False
    assert toaster.latest.title == "Booking Confirmed"
    assert remote_store.bodies[-1]["parkingId"] == "2"


@pytest.mark.asyncio
async def test_explore_no_results_and_failed_booking(client, booking_service, toaster, navigator, remote_store):
    screen = ExploreScreen(client, booking_service, toaster, navigator)
    await screen.mount()

    screen.search("airport")
    assert screen.filtered_spots == []
    assert screen.no_results_message == 'No parking spots found for "airport"'

    remote_store.fail("POST", "bookings")
    screen.open_booking(screen.spots[0])

    assert await screen.confirm_booking() is None
    assert screen.booking_modal_visible is True
    assert toaster.latest.message == "Failed to confirm booking. Please try again."


@pytest.mark.asyncio
async def test_tickets_checkout_flow(booking_service, toaster, navigator):
    screen = TicketsScreen(booking_service, toaster, navigator, clock=fixed_clock)
    await screen.mount()

    screen.open_details(booking_service.get("1"))
    screen.begin_checkout()
    updated = await screen.confirm_checkout()

    assert updated.status == BookingStatus.COMPLETED
    assert screen.bill_visible is True
    assert screen.bill.total.format() == "$5.00"
    assert toaster.latest.message == "Successfully checked out from Central City Parking."
    assert screen.status_counts["completed"] == 2


@pytest.mark.asyncio
async def test_tickets_invalid_form_sets_alert(booking_service, toaster, navigator, remote_store):
    screen = TicketsScreen(booking_service, toaster, navigator, clock=fixed_clock)
    await screen.mount()
    screen.open_add()

    assert screen.form.date == NOW.date()

    form = screen.form.model_copy(update={
        "parking_name": "Harbor View Parking",
        "address": "9 Dock Rd",
        "price": "4.00",
        "start_time": time(11, 0),
        "end_time": time(10, 0),
    })

    assert await screen.save(form) is None
    assert screen.alert == ("Invalid End Time", "End time must be after start time.")
    assert screen.form_visible is True
    assert remote_store.count("POST", "/bookings") == 0


@pytest.mark.asyncio
async def test_tickets_add_and_delete(booking_service, toaster, navigator):
    screen = TicketsScreen(booking_service, toaster, navigator, clock=fixed_clock)
    await screen.mount()

    saved = await screen.save(BookingForm(
        parking_name="Harbor View Parking",
        address="9 Dock Rd",
        date=date(2030, 1, 20),
        start_time=time(8, 0),
        price="4.00",
    ))

    assert saved.id == "100"
    assert toaster.latest.title == "Booking Added"
    assert screen.form_visible is False
    assert screen.tickets[0].id == "100"

    assert await screen.delete("100", lambda title, message: True) is True
    assert toaster.latest.title == "Booking Deleted"
    assert [ticket.id for ticket in screen.tickets] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_tickets_fetch_failure_toasts(booking_service, toaster, navigator, remote_store):
    remote_store.fail("GET", "bookings")
    screen = TicketsScreen(booking_service, toaster, navigator)

    await screen.mount()

    assert screen.tickets == []
    assert screen.loading is False
    assert toaster.latest.message == "Failed to load bookings."


@pytest.mark.asyncio
async def test_profile_without_session_redirects(auth_service, session, toaster, navigator):
    navigator.push(Route.PROFILE)
    screen = ProfileScreen(auth_service, session, toaster, navigator)

    assert await screen.mount() is False
    assert navigator.current == Route.LOGIN
    assert toaster.toasts == []


@pytest.mark.asyncio
async def test_profile_menu_and_logout(auth_service, session, toaster, navigator):
    await auth_service.login("jane@example.com", "secret123")
    navigator.push(Route.PROFILE)
    screen = ProfileScreen(auth_service, session, toaster, navigator)

    assert await screen.mount() is True
    assert screen.display_name == "Jane Doe"

    screen.select("history")
    assert navigator.current == Route.TICKETS
    navigator.back()

    screen.select("logout")
    assert screen.logout_modal_visible is True
    assert await screen.logout() is True
    assert navigator.current == Route.LOGIN
    assert session.user is None

    with pytest.raises(KeyError):
        screen.select("settings")


def test_notifications_screen(toaster, navigator):
    navigator.push(Route.NOTIFICATIONS)
    screen = NotificationsScreen(NotificationInbox(), toaster, navigator)

    assert screen.unread_count == 2
    assert screen.open("1") is True
    assert screen.unread_count == 1
    assert screen.open("missing") is False

    screen.mark_all_read()
    assert screen.unread_count == 0
    assert toaster.latest.title == "All notifications marked as read"
    assert screen.back() == Route.LOGIN


@pytest.mark.asyncio
async def test_home_quick_actions_navigate(client, session, toaster, navigator):
    screen = HomeScreen(client, session, BookmarkService(), toaster, navigator)

    label, route = screen.quick_actions[0]
    screen.go(route)

    assert label == "Find Parking"
    assert navigator.current == Route.EXPLORE


@pytest.mark.asyncio
async def test_tickets_edit_prefills_form(booking_service, toaster, navigator):
    screen = TicketsScreen(booking_service, toaster, navigator, clock=fixed_clock)
    await screen.mount()

    screen.open_edit(booking_service.get("2"))

    assert screen.form_visible is True
    assert screen.form.booking_id == "2"
    assert screen.form.start_time == time(10, 0)
    assert screen.form.end_time == time(12, 0)
    assert screen.form.price == "6.00"

    updated = await screen.save(screen.form.model_copy(update={"status": BookingStatus.ACTIVE}))

    assert updated.status == BookingStatus.ACTIVE
    assert toaster.latest.title == "Booking Updated"
    assert screen.form is None


@pytest.mark.asyncio
async def test_tickets_save_with_non_object_echo(toaster, navigator):
    """Test a create answered with a JSON array keeps the booking that was sent."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=[{"id": 1}])

    async with RemoteStoreClient(base_url=BASE_URL, transport=httpx.MockTransport(handler)) as client:
        service = BookingService(client, clock=fixed_clock, tz=timezone.utc)
        screen = TicketsScreen(service, toaster, navigator, clock=fixed_clock)

        saved = await screen.save(BookingForm(
            parking_name="Harbor View Parking",
            address="9 Dock Rd",
            date=date(2030, 1, 20),
            start_time=time(8, 0),
            price="4.00",
        ))

    assert saved is not None
    assert saved.parking_name == "Harbor View Parking"
    assert screen.tickets == [saved]
    assert toaster.latest.title == "Booking Added"


@pytest.mark.asyncio
@pytest.mark.parametrize("collection", ["parking", "bookings"])
async def test_failed_refresh_shows_only_error(client, booking_service, toaster, navigator, remote_store, collection):
    remote_store.fail("GET", collection)
    if collection == "parking":
        screen = ExploreScreen(client, booking_service, toaster, navigator)
    else:
        screen = TicketsScreen(booking_service, toaster, navigator)

    await screen.refresh()

    assert [toast.variant for toast in toaster.toasts] == [ToastVariant.ERROR]
    assert screen.refreshing is False
