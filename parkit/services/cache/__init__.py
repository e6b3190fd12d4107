from parkit.services.cache.collection_cache import CollectionCache

__all__ = ["CollectionCache"]
