"""
Data Models
===========
Pydantic models for data validation and serialization.
"""

from image_storage.models.storage import (
    FileInfo,
    StoredFile,
    ObjectEntry,
    ListingPage,
    FolderSize,
    FolderListing,
    FileExistence,
)


__all__ = [
    "FileInfo",
    "StoredFile",
    "ObjectEntry",
    "ListingPage",
    "FolderSize",
    "FolderListing",
    "FileExistence",
]
