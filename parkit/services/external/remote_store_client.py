"""
Client for the remote store: a JSON-backed REST service exposing the
`users`, `parking` and `bookings` collections.

No pagination, no server-side filtering, no retries, no auth headers.
"""
import httpx
import logging
import time
from typing import Any, Dict, List, Optional, Union
from parkit.core.config import get_settings
from parkit.core.metrics import track_remote_request
from parkit.exceptions import RemoteStoreException
from parkit.services.cache import CollectionCache

logger = logging.getLogger(__name__)
settings = get_settings()

USERS = "users"
PARKING = "parking"
BOOKINGS = "bookings"

RecordId = Union[int, str]


class RemoteStoreClient:
    """
    Thin CRUD client over the remote store collections.
    
    Any transport failure or non-2xx status raises RemoteStoreException;
    callers decide whether to reset or keep their state.
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        cache: Optional[CollectionCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip('/')
        self.timeout = timeout or settings.API_TIMEOUT
        self.cache = cache
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
    
    async def __aenter__(self):
        """Async context manager entry"""
        await self._ensure_client()
        if self.cache:
            await self.cache.connect()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
    
    async def _ensure_client(self):
        """Ensure HTTP client is initialized"""
        if not self._client:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport
            )
    
    async def _request(
        self,
        method: str,
        collection: str,
        record_id: Optional[RecordId] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform one request and decode its JSON body.
        
        Raises:
            RemoteStoreException: On transport errors, non-2xx status or a non-JSON body
        """
        await self._ensure_client()
        
        path = f"/{collection}" if record_id is None else f"/{collection}/{record_id}"
        started = time.perf_counter()
        
        try:
            logger.debug(f"{method} {path}", extra={"collection": collection})
            response = await self._client.request(method, path, json=payload)
            response.raise_for_status()
        
        except httpx.HTTPStatusError as e:
            track_remote_request(method, collection, str(e.response.status_code), time.perf_counter() - started)
            logger.error(
                f"HTTP error on {method} {path}: {e.response.status_code}",
                extra={"response": e.response.text}
            )
            raise RemoteStoreException(
                f"{method} {path} failed with status {e.response.status_code}",
                method=method,
                path=path,
                status_code=e.response.status_code,
                body=e.response.text
            )
        
        except httpx.HTTPError as e:
            track_remote_request(method, collection, "network_error", time.perf_counter() - started)
            logger.error(
                f"Network error on {method} {path}: {str(e)}",
                extra={"error_type": type(e).__name__}
            )
            raise RemoteStoreException(f"{method} {path} failed: {str(e)}", method=method, path=path)
        
        track_remote_request(method, collection, str(response.status_code), time.perf_counter() - started)
        
        if method == "DELETE" or not response.content:
            return None
        
        try:
            return response.json()
        except ValueError:
            logger.error(f"Invalid JSON from {method} {path}", extra={"response": response.text})
            raise RemoteStoreException(
                f"{method} {path} returned invalid JSON",
                method=method,
                path=path,
                status_code=response.status_code,
                body=response.text
            )
    
    async def list(self, collection: str, fresh: bool = False) -> List[Dict[str, Any]]:
        """
        GET a whole collection.
        
        Args:
            collection: Resource type
            fresh: Bypass the collection cache (pull-to-refresh)
        """
        if self.cache and not fresh:
            cached = await self.cache.get(collection)
            if cached is not None:
                return cached
        
        records = await self._request("GET", collection)
        if not isinstance(records, list):
            raise RemoteStoreException(
                f"GET /{collection} did not return a list",
                method="GET",
                path=f"/{collection}"
            )
        
        logger.info(f"Fetched {len(records)} records from {collection}")
        
        if self.cache:
            await self.cache.set(collection, records)
        return records
    
    async def create(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new record; the server assigns the id and echoes the record"""
        record = await self._request("POST", collection, payload=payload)
        await self._invalidate(collection)
        record_id = record.get("id") if isinstance(record, dict) else None
        logger.info(f"Created record in {collection}", extra={"record_id": record_id})
        return record
    
    async def update(self, collection: str, record_id: RecordId, payload: Dict[str, Any]) -> Dict[str, Any]:
        """PUT a full record; the server echoes the updated record"""
        record = await self._request("PUT", collection, record_id=record_id, payload=payload)
        await self._invalidate(collection)
        logger.info(f"Updated record in {collection}", extra={"record_id": str(record_id)})
        return record
    
    async def delete(self, collection: str, record_id: RecordId) -> None:
        """DELETE a record"""
        await self._request("DELETE", collection, record_id=record_id)
        await self._invalidate(collection)
        logger.info(f"Deleted record from {collection}", extra={"record_id": str(record_id)})
    
    async def _invalidate(self, collection: str):
        if self.cache:
            await self.cache.invalidate(collection)
    
    async def list_users(self, fresh: bool = False) -> List[Dict[str, Any]]:
        return await self.list(USERS, fresh=fresh)
    
    async def list_parking(self, fresh: bool = False) -> List[Dict[str, Any]]:
        return await self.list(PARKING, fresh=fresh)
    
    async def list_bookings(self, fresh: bool = False) -> List[Dict[str, Any]]:
        return await self.list(BOOKINGS, fresh=fresh)
    
    async def create_booking(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.create(BOOKINGS, payload)
    
    async def update_booking(self, booking_id: RecordId, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.update(BOOKINGS, booking_id, payload)
    
    async def delete_booking(self, booking_id: RecordId) -> None:
        await self.delete(BOOKINGS, booking_id)
    
    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
        if self.cache:
            await self.cache.disconnect()
