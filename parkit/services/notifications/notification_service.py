"""
Notification Service.
Holds the local notification inbox and the transient toast messages
shown after user actions.
"""
import logging
from typing import List, Optional

from parkit.schemas.notification import Notification, NotificationType, Toast, ToastVariant

logger = logging.getLogger(__name__)


def default_notifications() -> List[Notification]:
    """Seed inbox content (the inbox has no remote collection)"""
    return [
        Notification(
            id="1",
            title="Parking session started",
            message="Your parking session at Central City Parking has begun.",
            time="10 min ago",
            type=NotificationType.INFO,
            read=False,
        ),
        Notification(
            id="2",
            title="Time almost up",
            message="Your parking session ends in 15 minutes. Consider extending.",
            time="1 hour ago",
            type=NotificationType.WARNING,
            read=False,
        ),
        Notification(
            id="3",
            title="Payment successful",
            message="Your payment of $12.50 for Harbor View Parking was successful.",
            time="3 hours ago",
            type=NotificationType.PAYMENT,
            read=True,
        ),
    ]


class NotificationInbox:
    """
    Local notification inbox.
    """
    
    def __init__(self, notifications: Optional[List[Notification]] = None):
        self.notifications = notifications if notifications is not None else default_notifications()
    
    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.read)
    
    def mark_all_read(self) -> None:
        self.notifications = [
            notification.model_copy(update={"read": True})
            for notification in self.notifications
        ]
        logger.info("Marked all notifications as read")
    
    def refresh(self) -> List[Notification]:
        """Nothing to fetch: the inbox has no remote collection"""
        logger.debug("Notification inbox refreshed", extra={"count": len(self.notifications)})
        return self.notifications
    
    def mark_read(self, notification_id: str) -> bool:
        """Mark one notification as read; returns False if the id is unknown"""
        for index, notification in enumerate(self.notifications):
            if notification.id == notification_id:
                self.notifications[index] = notification.model_copy(update={"read": True})
                return True
        return False


class Toaster:
    """
    Collects transient user-visible messages.
    Every toast is logged; error toasts at warning level.
    """
    
    def __init__(self):
        self.toasts: List[Toast] = []
    
    def show(self, title: str, message: str = "", variant: ToastVariant = ToastVariant.INFO) -> Toast:
        toast = Toast(title=title, message=message, variant=variant)
        self.toasts.append(toast)
        
        log = logger.warning if variant == ToastVariant.ERROR else logger.info
        log(f"Toast: {title}", extra={"toast_message": message, "variant": variant.value})
        return toast
    
    def success(self, title: str, message: str = "") -> Toast:
        return self.show(title, message, ToastVariant.SUCCESS)
    
    def error(self, title: str, message: str = "") -> Toast:
        return self.show(title, message, ToastVariant.ERROR)
    
    def info(self, title: str, message: str = "") -> Toast:
        return self.show(title, message, ToastVariant.INFO)
    
    @property
    def latest(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None
    
    def dismiss(self, toast: Optional[Toast] = None) -> None:
        """Dismiss one toast, or the latest one"""
        if not self.toasts:
            return
        if toast is None:
            self.toasts.pop()
        elif toast in self.toasts:
            self.toasts.remove(toast)
