from typing import List

from parkit.schemas.notification import Notification
from parkit.screens.base import Screen
from parkit.screens.navigation import Navigator, Route
from parkit.services.notifications import NotificationInbox, Toaster


class NotificationsScreen(Screen):
    """Local notification inbox"""

    def __init__(self, inbox: NotificationInbox, toaster: Toaster, navigator: Navigator, **kwargs):
        super().__init__(toaster, navigator, **kwargs)
        self.inbox = inbox

    @property
    def notifications(self) -> List[Notification]:
        return self.inbox.notifications

    @property
    def unread_count(self) -> int:
        return self.inbox.unread_count

    def mark_all_read(self):
        self.inbox.mark_all_read()
        self.toaster.info("All notifications marked as read")

    def open(self, notification_id: str) -> bool:
        return self.inbox.mark_read(notification_id)

    async def refresh(self):
        self.inbox.refresh()
        self.toaster.success("Refreshed!", "Notifications updated.")

    def back(self) -> Route:
        return self.navigator.back()
