"""
Storage Dependencies
====================
FastAPI dependency providing the storage facade to routes.
"""

from image_storage.services.storage import StorageFacade, storage_facade


def get_storage_facade() -> StorageFacade:
    """Return the process-wide storage facade"""
    return storage_facade
