import logging
from typing import List, NamedTuple, Optional

from parkit.screens.base import ProtectedScreen
from parkit.screens.navigation import Navigator, Route
from parkit.services.business import AuthService
from parkit.services.notifications import Toaster
from parkit.services.session import SessionContext

logger = logging.getLogger(__name__)


class MenuItem(NamedTuple):
    id: str
    title: str
    route: Optional[Route]


MENU_ITEMS: List[MenuItem] = [
    MenuItem("history", "History", Route.TICKETS),
    MenuItem("saved", "Saved", Route.BOOKMARKS),
    MenuItem("logout", "Logout", None),
]


class ProfileScreen(ProtectedScreen):
    """Signed-in user's profile and logout"""

    def __init__(
        self,
        auth: AuthService,
        session: SessionContext,
        toaster: Toaster,
        navigator: Navigator,
        **kwargs
    ):
        super().__init__(session, toaster, navigator, **kwargs)
        self.auth = auth
        self.logout_modal_visible = False

    @property
    def menu_items(self) -> List[MenuItem]:
        return MENU_ITEMS

    @property
    def display_name(self) -> str:
        return self.user.full_name if self.user else ""

    async def mount(self) -> bool:
        self.loading = True
        try:
            return await self.ensure_session()
        finally:
            self.loading = False

    def select(self, item_id: str):
        for item in MENU_ITEMS:
            if item.id != item_id:
                continue
            if item.route is None:
                self.logout_modal_visible = True
            else:
                self.navigator.push(item.route)
            return
        raise KeyError(item_id)

    async def logout(self) -> bool:
        try:
            await self.auth.logout()
        except OSError as e:
            logger.error("Error during logout", extra={"error": str(e)})
            self.toaster.error("Error", "Failed to log out. Please try again.")
            return False

        self.logout_modal_visible = False
        self.navigator.replace(Route.LOGIN)
        return True
