"""
Storage Models
==============
Pydantic models for object metadata, object content and listing pages.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FileInfo(BaseModel):
    """Object metadata returned by a head lookup"""
    key: str = Field(..., description="Object key in the bucket")
    size: int = Field(default=0, description="Object size in bytes")
    content_type: Optional[str] = Field(default=None, description="MIME type")
    etag: Optional[str] = Field(default=None, description="Entity tag")
    last_modified: Optional[datetime] = Field(default=None)
    metadata: Dict[str, str] = Field(default_factory=dict, description="User metadata")

    @classmethod
    def from_response(cls, key: str, response: Dict[str, Any]) -> "FileInfo":
        """Build from a head_object / get_object response"""
        return cls(
            key=key,
            size=response.get("ContentLength") or 0,
            content_type=response.get("ContentType"),
            etag=response.get("ETag"),
            last_modified=response.get("LastModified"),
            metadata=response.get("Metadata") or {},
        )


class StoredFile(FileInfo):
    """Object metadata plus its body"""
    content: bytes = Field(default=b"", exclude=True)


class ObjectEntry(BaseModel):
    """Single object matched by a listing"""
    key: str
    size: int = 0


class ListingPage(BaseModel):
    """One page of a list_objects_v2 call"""
    objects: List[ObjectEntry] = Field(default_factory=list)
    common_prefixes: List[str] = Field(default_factory=list)
    next_continuation_token: Optional[str] = None
    is_truncated: bool = False

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "ListingPage":
        """Build from a raw list_objects_v2 response"""
        return cls(
            objects=[
                ObjectEntry(key=item.get("Key", ""), size=item.get("Size") or 0)
                for item in response.get("Contents") or []
            ],
            common_prefixes=[
                item["Prefix"]
                for item in response.get("CommonPrefixes") or []
                if item.get("Prefix")
            ],
            next_continuation_token=response.get("NextContinuationToken"),
            is_truncated=bool(response.get("IsTruncated")),
        )

    @property
    def total_size(self) -> int:
        """Sum of object sizes on this page"""
        return sum(entry.size for entry in self.objects)


class FolderSize(BaseModel):
    """Aggregate size response"""
    prefix: str
    size_bytes: int


class FolderListing(BaseModel):
    """Immediate sub-folder names response"""
    prefix: str
    folders: List[str] = Field(default_factory=list)


class FileExistence(BaseModel):
    """Existence check response"""
    key: str
    exists: bool
