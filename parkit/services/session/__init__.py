from parkit.services.session.session_store import KeyValueStore, SessionStore, SessionContext

__all__ = ["KeyValueStore", "SessionStore", "SessionContext"]
