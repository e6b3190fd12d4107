import logging
from typing import Dict, List

from parkit.exceptions import (
    InvalidCredentialsException,
    LoginValidationException,
    RemoteStoreException
)
from parkit.schemas.user import User
from parkit.screens.base import Screen
from parkit.screens.navigation import Navigator, Route
from parkit.services.business import AuthService
from parkit.services.notifications import Toaster

logger = logging.getLogger(__name__)


def empty_errors() -> Dict[str, str]:
    return {"email": "", "password": "", "credentials": ""}


class LoginScreen(Screen):
    """Email/password sign-in"""
    
    def __init__(self, auth: AuthService, toaster: Toaster, navigator: Navigator, **kwargs):
        super().__init__(toaster, navigator, **kwargs)
        self.auth = auth
        self.users: List[User] = []
        self.errors = empty_errors()
    
    async def mount(self):
        """Fetch the user list once when the screen opens"""
        try:
            self.users = await self.auth.fetch_users()
        except RemoteStoreException as e:
            logger.error("Error fetching users", extra={"error": str(e)})
            self.errors["credentials"] = "Failed to fetch users. Please try again."
    
    async def submit(self, email: str, password: str) -> bool:
        """
        Sign in and go to the home screen.
        
        Returns:
            True on success; otherwise `errors` explains why
        """
        self.errors = empty_errors()
        self.loading = True
        try:
            await self.auth.login(email, password, users=self.users)
        except LoginValidationException as e:
            self.errors.update(e.errors)
            return False
        except InvalidCredentialsException:
            self.errors["credentials"] = "Invalid email or password"
            return False
        except OSError as e:
            logger.error("Error during login", extra={"error": str(e)})
            self.errors["credentials"] = "An error occurred. Please try again."
            return False
        finally:
            self.loading = False
        
        self.navigator.push(Route.HOME)
        return True
