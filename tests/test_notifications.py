"""Tests for the notification inbox and toasts."""

from parkit.schemas.notification import ToastVariant
from parkit.services.notifications import NotificationInbox, Toaster


def test_seeded_inbox_has_two_unread():
    inbox = NotificationInbox()
    assert len(inbox.notifications) == 3
    assert inbox.unread_count == 2


def test_mark_all_read():
    inbox = NotificationInbox()
    inbox.mark_all_read()
    assert inbox.unread_count == 0
    assert all(notification.read for notification in inbox.notifications)


def test_toasts_are_collected_and_dismissed():
    toaster = Toaster()
    first = toaster.success("Saved", "All good")
    toaster.error("Error", "Something failed")

    assert toaster.latest.variant == ToastVariant.ERROR
    toaster.dismiss()
    assert toaster.latest == first
    toaster.dismiss(first)
    assert toaster.toasts == []
    toaster.dismiss()


def test_refresh_keeps_local_notifications():
    inbox = NotificationInbox()
    inbox.mark_read("2")
    assert len(inbox.refresh()) == 3
    assert inbox.unread_count == 1
