"""
Storage Endpoints
=================
Read-only access to the image bucket.

Endpoints:
- GET /storage/info - Object metadata
- GET /storage/file - Object content
- GET /storage/exists - Existence check
- GET /storage/folder-size - Total size of everything under a folder
- GET /storage/folders - Immediate sub-folders of a folder
"""

from datetime import timezone
from email.utils import format_datetime

from fastapi import APIRouter, Depends, Query, Response, status

from image_storage.api.dependencies.storage import get_storage_facade
from image_storage.models.storage import (
    FileExistence,
    FileInfo,
    FolderListing,
    FolderSize,
)
from image_storage.services.storage import StorageFacade

router = APIRouter()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@router.get(
    "/info",
    response_model=FileInfo,
    status_code=status.HTTP_200_OK,
    summary="Get object metadata",
    responses={404: {"description": "Object not found"}},
)
async def get_file_info(
    key: str = Query(..., min_length=1, description="Object key"),
    storage: StorageFacade = Depends(get_storage_facade),
):
    return await storage.get_file_info(key)


@router.get(
    "/file",
    status_code=status.HTTP_200_OK,
    summary="Download an object",
    responses={404: {"description": "Object not found"}},
)
async def get_file(
    key: str = Query(..., min_length=1, description="Object key"),
    storage: StorageFacade = Depends(get_storage_facade),
):
    """
    Download Object

    Returns the raw object body with its stored content type.
    """
    stored = await storage.get_file(key)

    headers = {}
    if stored.etag:
        headers["ETag"] = stored.etag
    if stored.last_modified:
        headers["Last-Modified"] = format_datetime(
            stored.last_modified.astimezone(timezone.utc), usegmt=True
        )

    return Response(
        content=stored.content,
        media_type=stored.content_type or DEFAULT_CONTENT_TYPE,
        headers=headers,
    )


@router.get(
    "/exists",
    response_model=FileExistence,
    status_code=status.HTTP_200_OK,
    summary="Check whether an object exists",
)
async def file_exists(
    key: str = Query(..., min_length=1, description="Object key"),
    storage: StorageFacade = Depends(get_storage_facade),
):
    exists = await storage.file_exists(key)
    return FileExistence(key=key, exists=exists)


@router.get(
    "/folder-size",
    response_model=FolderSize,
    status_code=status.HTTP_200_OK,
    summary="Total size of a folder",
)
async def get_folder_size(
    prefix: str = Query(..., min_length=1, description="Folder key"),
    storage: StorageFacade = Depends(get_storage_facade),
):
    """
    Folder Size

    Sums the size of every object under ``prefix/``, across all listing pages.
    """
    size = await storage.get_folder_size(prefix)
    return FolderSize(prefix=prefix, size_bytes=size)


@router.get(
    "/folders",
    response_model=FolderListing,
    status_code=status.HTTP_200_OK,
    summary="List immediate sub-folders",
)
async def list_folders(
    prefix: str = Query(..., min_length=1, description="Folder key"),
    storage: StorageFacade = Depends(get_storage_facade),
):
    folders = await storage.list_folders(prefix)
    return FolderListing(prefix=prefix, folders=folders)
