"""
Login and logout against the remote `users` collection.
Credentials are matched client-side by exact email and password equality.
"""
import logging
import re
from typing import Dict, List, Optional

from pydantic import ValidationError

from parkit.exceptions import InvalidCredentialsException, LoginValidationException
from parkit.schemas.user import User
from parkit.services.external import RemoteStoreClient
from parkit.services.session import SessionContext

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6


def validate_credentials(email: str, password: str) -> Dict[str, str]:
    """Field errors for the login form (empty dict when valid)"""
    errors = {}
    
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(email):
        errors["email"] = "Email is invalid"
    
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    
    return errors


class AuthService:
    """Signs users in and out of the SessionContext"""
    
    def __init__(self, client: RemoteStoreClient, session: SessionContext):
        self.client = client
        self.session = session
    
    async def fetch_users(self) -> List[User]:
        """Fetch the user collection, skipping unreadable records"""
        users = []
        for raw in await self.client.list_users():
            try:
                users.append(User.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "Skipping unreadable user record",
                    extra={"record_id": raw.get("id") if isinstance(raw, dict) else None, "error": str(e)}
                )
        return users
    
    async def login(self, email: str, password: str, users: Optional[List[User]] = None) -> User:
        """
        Validate the form, find the exact (email, password) match and begin a session.
        
        Args:
            email: Email as typed
            password: Password as typed
            users: Previously fetched users; fetched now when omitted
        
        Raises:
            LoginValidationException: If the form has field errors
            InvalidCredentialsException: If no user matches
            RemoteStoreException: If the users cannot be fetched
        """
        errors = validate_credentials(email, password)
        if errors:
            raise LoginValidationException(errors)
        
        if users is None:
            users = await self.fetch_users()
        
        user = next(
            (candidate for candidate in users
             if candidate.email == email and candidate.password == password),
            None
        )
        if user is None:
            logger.info("Login rejected: no matching credentials")
            raise InvalidCredentialsException("Invalid email or password")
        
        await self.session.begin(user)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user
    
    async def logout(self):
        user_id = str(self.session.user.id) if self.session.user else None
        await self.session.end()
        logger.info("User signed out", extra={"user_id": user_id})
