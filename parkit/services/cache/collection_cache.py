import redis.asyncio as redis
import json
import logging
from typing import Any, List, Optional
from parkit.core.config import get_settings
from parkit.core.metrics import track_cache_lookup
from parkit.exceptions import CacheException

logger = logging.getLogger(__name__)
settings = get_settings()

KNOWN_COLLECTIONS = ("users", "parking", "bookings")


class CollectionCache:
    """
    Redis-based cache of whole remote collections, keyed by resource type.
    Every write through the remote store client invalidates the written
    collection, so list screens agree after a mutation.
    """
    
    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl: Optional[int] = None,
        enabled: Optional[bool] = None,
        client: Optional[redis.Redis] = None
    ):
        self.redis_url = redis_url or settings.REDIS_URL
        self.ttl = ttl or settings.CACHE_TTL_SECONDS
        self.enabled = settings.ENABLE_COLLECTION_CACHE if enabled is None else enabled
        self._client: Optional[redis.Redis] = client
    
    async def connect(self):
        """Initialize Redis connection"""
        if not self.enabled:
            logger.info("Collection cache disabled via configuration")
            return
        
        if self._client is not None:
            return
        
        try:
            self._client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            await self._client.ping()
            logger.info("Successfully connected to Redis cache")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {str(e)}")
            self._client = None
            # Don't raise exception - cache is optional
    
    async def disconnect(self):
        """Close Redis connection"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from Redis cache")
    
    @staticmethod
    def _cache_key(collection: str) -> str:
        return f"collection:{collection}"
    
    async def get(self, collection: str) -> Optional[List[Any]]:
        """
        Retrieve a cached collection.
        
        Returns:
            The raw records or None if not cached/cache disabled
        """
        if not self.enabled or not self._client:
            return None
        
        try:
            key = self._cache_key(collection)
            cached_value = await self._client.get(key)
            
            track_cache_lookup(collection, hit=cached_value is not None)
            if cached_value:
                logger.debug(f"Cache HIT for {collection}", extra={"key": key})
                return json.loads(cached_value)
            
            logger.debug(f"Cache MISS for {collection}", extra={"key": key})
            return None
            
        except Exception as e:
            logger.warning(f"Error retrieving from cache: {str(e)}")
            return None  # Fail gracefully
    
    async def set(self, collection: str, records: List[Any], ttl: Optional[int] = None):
        """
        Store a collection with TTL.
        
        Args:
            collection: Resource type ("users", "parking", "bookings")
            records: Raw records as returned by the remote store
            ttl: Time-to-live in seconds (default: from settings)
        """
        if not self.enabled or not self._client:
            return
        
        try:
            key = self._cache_key(collection)
            ttl = ttl or self.ttl
            await self._client.setex(key, ttl, json.dumps(records))
            logger.debug(f"Cached collection {collection}", extra={"key": key, "ttl": ttl})
        except Exception as e:
            logger.warning(f"Error storing in cache: {str(e)}")
    
    async def invalidate(self, collection: str):
        """Drop a cached collection after a write"""
        if not self.enabled or not self._client:
            return
        
        try:
            await self._client.delete(self._cache_key(collection))
            logger.debug(f"Invalidated cache entry for {collection}")
        except Exception as e:
            logger.warning(f"Error deleting from cache: {str(e)}")
    
    async def clear_all(self):
        """Clear every cached collection"""
        if not self.enabled or not self._client:
            return
        
        try:
            keys = [self._cache_key(collection) for collection in KNOWN_COLLECTIONS]
            await self._client.delete(*keys)
            logger.info("Cleared all collection caches")
        except Exception as e:
            logger.error(f"Error clearing all caches: {str(e)}")
            raise CacheException(f"Failed to clear all caches: {str(e)}")
    
    async def health_check(self) -> bool:
        """
        Check if Redis cache is healthy.
        
        Returns:
            True if cache is operational, False otherwise
        """
        if not self.enabled:
            return True  # Cache disabled is not an error
        
        if not self._client:
            return False
        
        try:
            await self._client.ping()
            return True
        except Exception as e:
            logger.error(f"Cache health check failed: {str(e)}")
            return False
