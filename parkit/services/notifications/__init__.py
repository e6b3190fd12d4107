from parkit.services.notifications.notification_service import NotificationInbox, Toaster

__all__ = ["NotificationInbox", "Toaster"]
