from parkit.services.external.remote_store_client import RemoteStoreClient

__all__ = ["RemoteStoreClient"]
