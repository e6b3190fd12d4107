"""
On-device session storage.

KeyValueStore is a small string key-value file (the device storage
primitive). SessionStore keeps exactly one record in it: the signed-in
user. SessionContext is what screens receive; it owns the session
lifecycle (begin on login, end on logout, load at protected screen entry).
"""
import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from parkit.core.config import get_settings
from parkit.exceptions import SessionRequiredException
from parkit.schemas.user import User

logger = logging.getLogger(__name__)
settings = get_settings()


class KeyValueStore:
    """
    String key-value storage persisted as a JSON object on disk.
    File access runs in a worker thread; writes are serialized and
    replace the file atomically.
    """
    
    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or settings.SESSION_STORE_PATH)
        self._lock = asyncio.Lock()
    
    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {str(e)}")
            return {}
        return data if isinstance(data, dict) else {}
    
    def _write_all(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)
    
    async def get_item(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)
    
    async def set_item(self, key: str, value: str):
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)
    
    async def remove_item(self, key: str):
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if key in data:
                del data[key]
                await asyncio.to_thread(self._write_all, data)


class SessionStore:
    """Persists the current user as one JSON-serialized record under a fixed key"""
    
    def __init__(self, storage: Optional[KeyValueStore] = None, key: Optional[str] = None):
        self.storage = storage or KeyValueStore()
        self.key = key or settings.SESSION_KEY
    
    async def set(self, user: User):
        await self.storage.set_item(self.key, json.dumps(user.to_record()))
        logger.info("Stored session user", extra={"user_id": str(user.id)})
    
    async def get(self) -> Optional[User]:
        """Return the stored user, or None if absent or unreadable"""
        raw = await self.storage.get_item(self.key)
        if raw is None:
            return None
        
        try:
            return User.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session record: {str(e)}")
            return None
    
    async def clear(self):
        await self.storage.remove_item(self.key)
        logger.info("Cleared session user")


class SessionContext:
    """
    Explicit session passed to every screen that needs the signed-in user.
    """
    
    def __init__(self, store: Optional[SessionStore] = None):
        self.store = store or SessionStore()
        self.user: Optional[User] = None
    
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
    
    async def begin(self, user: User) -> User:
        """Start a session after a successful login"""
        await self.store.set(user)
        self.user = user
        return user
    
    async def end(self):
        """End the session (logout)"""
        await self.store.clear()
        self.user = None
    
    async def load(self) -> Optional[User]:
        """Read the persisted session (protected screen entry)"""
        self.user = await self.store.get()
        return self.user
    
    def require_user(self) -> User:
        """
        Raises:
            SessionRequiredException: If nobody is signed in
        """
        if self.user is None:
            raise SessionRequiredException("A signed-in user is required")
        return self.user
