"""
Storage Services
================
Object storage clients and the read-only storage facade.
"""

from image_storage.services.storage.object_store import (
    ObjectStore,
    AuthenticatedObjectStore,
    UnauthenticatedObjectStore,
    create_object_store,
)
from image_storage.services.storage.facade import (
    StorageFacade,
    storage_facade,
    get_key,
)

__all__ = [
    "ObjectStore",
    "AuthenticatedObjectStore",
    "UnauthenticatedObjectStore",
    "create_object_store",
    "StorageFacade",
    "storage_facade",
    "get_key",
]
