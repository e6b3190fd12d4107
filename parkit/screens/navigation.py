import logging
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class Route(str, Enum):
    LOGIN = "/login"
    HOME = "/home"
    EXPLORE = "/explore"
    TICKETS = "/tickets"
    PROFILE = "/profile"
    NOTIFICATIONS = "/notifications"
    BOOKMARKS = "/bookmarks"


class Navigator:
    """Route history shared by the screens"""
    
    def __init__(self, initial: Route = Route.LOGIN):
        self.stack: List[Route] = [initial]
    
    @property
    def current(self) -> Route:
        return self.stack[-1]
    
    def push(self, route: Route):
        logger.debug(f"Navigate to {route.value}")
        self.stack.append(route)
    
    def replace(self, route: Route):
        logger.debug(f"Replace route with {route.value}")
        self.stack[-1] = route
    
    def back(self) -> Route:
        if len(self.stack) > 1:
            self.stack.pop()
        return self.current
