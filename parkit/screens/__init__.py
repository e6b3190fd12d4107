from parkit.screens.navigation import Navigator, Route
from parkit.screens.login import LoginScreen
from parkit.screens.home import HomeScreen
from parkit.screens.explore import ExploreScreen
from parkit.screens.tickets import TicketsScreen
from parkit.screens.profile import ProfileScreen
from parkit.screens.notifications import NotificationsScreen

__all__ = [
    "Navigator",
    "Route",
    "LoginScreen",
    "HomeScreen",
    "ExploreScreen",
    "TicketsScreen",
    "ProfileScreen",
    "NotificationsScreen"
]
