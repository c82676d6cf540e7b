"""Database package — store connection manager, session dependency, Base."""
from vendor_api.db.base import (
    Base,
    ConnectionState,
    StoreConnection,
    get_db,
    get_store,
)

__all__ = ["Base", "ConnectionState", "StoreConnection", "get_db", "get_store"]
