"""
Storage Facade
==============
Read-only view over the image bucket: metadata lookup, content fetch,
existence checks, recursive folder size and one-level folder listing.

Listings are paged with continuation tokens; ``IsTruncated`` decides
whether another page is requested and the token is what resumes it.
"""

from typing import AsyncIterator, List, Optional, Set

from botocore.exceptions import ClientError

from image_storage.core.config import settings
from image_storage.core.exceptions import (
    StorageObjectNotFoundException,
    StoragePaginationException,
)
from image_storage.core.logging_config import get_logger
from image_storage.models.storage import FileInfo, ListingPage, StoredFile
from image_storage.services.storage.object_store import (
    ObjectStore,
    create_object_store,
)


logger = get_logger(__name__)


DELIMITER = "/"
NOT_FOUND_ERROR_CODES = {"404", "NoSuchKey", "NotFound"}


def get_key(*parts: str) -> str:
    """Join path segments into a storage key"""
    return DELIMITER.join(parts)


def is_not_found_error(error: ClientError) -> bool:
    """Check whether a botocore error means the object does not exist"""
    response = error.response or {}
    status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    code = str(response.get("Error", {}).get("Code", ""))
    return status_code == 404 or code in NOT_FOUND_ERROR_CODES


def folder_name(common_prefix: str) -> str:
    """Last path segment of a common prefix (``a/b/c/`` -> ``c``)"""
    return common_prefix.rstrip(DELIMITER).rsplit(DELIMITER, 1)[-1]


class StorageFacade:
    """
    Storage Facade

    Wraps an ObjectStore and reshapes its responses.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    @property
    def bucket_name(self) -> str:
        return self.store.bucket_name

    async def get_file_info(self, key: str) -> FileInfo:
        """
        Get object metadata

        Args:
            key: Object key

        Returns:
            FileInfo: Object metadata

        Raises:
            StorageObjectNotFoundException: If the object does not exist
            ClientError: For any other storage failure
        """
        try:
            response = await self.store.head_object(key)
        except ClientError as e:
            if is_not_found_error(e):
                raise StorageObjectNotFoundException(key) from e
            logger.error(f"Storage head failed for {key}: {e}")
            raise

        return FileInfo.from_response(key, response)

    async def get_file(self, key: str) -> StoredFile:
        """
        Get object content and metadata

        Args:
            key: Object key

        Returns:
            StoredFile: Object metadata and body

        Raises:
            StorageObjectNotFoundException: If the object does not exist
            ClientError: For any other storage failure
        """
        try:
            response = await self.store.get_object(key)
        except ClientError as e:
            if is_not_found_error(e):
                raise StorageObjectNotFoundException(key) from e
            logger.error(f"Storage get failed for {key}: {e}")
            raise

        info = FileInfo.from_response(key, response)
        return StoredFile(**info.model_dump(), content=response.get("Body") or b"")

    async def file_exists(self, key: str) -> bool:
        """
        Check whether an object exists

        Only a not-found response maps to False; other failures propagate.
        """
        try:
            await self.get_file_info(key)
        except StorageObjectNotFoundException:
            return False
        return True

    async def iter_pages(
        self,
        folder: str,
        delimiter: Optional[str] = None,
    ) -> AsyncIterator[ListingPage]:
        """
        Iterate over every listing page under ``folder + "/"``

        Args:
            folder: Folder key (without trailing delimiter)
            delimiter: Grouping delimiter, None for a flat recursive listing

        Yields:
            ListingPage: Pages in arrival order

        Raises:
            StoragePaginationException: If the store hands out a continuation token it already sent
        """
        prefix = f"{folder}{DELIMITER}"
        token: Optional[str] = None
        seen_tokens: Set[str] = set()
        page_count = 0

        while True:
            response = await self.store.list_objects_v2(
                prefix,
                delimiter=delimiter,
                continuation_token=token,
            )
            page = ListingPage.from_response(response)
            page_count += 1
            logger.debug(
                f"Listed page {page_count} under {prefix}: "
                f"{len(page.objects)} objects, {len(page.common_prefixes)} prefixes"
            )

            yield page

            if not page.is_truncated:
                break
            if not page.next_continuation_token:
                logger.warning(
                    f"Listing under {prefix} is truncated but returned no continuation token"
                )
                break
            if page.next_continuation_token in seen_tokens:
                raise StoragePaginationException(prefix, page.next_continuation_token)

            token = page.next_continuation_token
            seen_tokens.add(token)

    async def get_folder_size(self, folder: str) -> int:
        """
        Total size in bytes of every object under a folder

        Args:
            folder: Folder key (without trailing delimiter)

        Returns:
            int: Sum of object sizes across all pages
        """
        total = 0
        async for page in self.iter_pages(folder):
            total += page.total_size

        logger.info(f"Folder size computed: {folder} = {total} bytes")
        return total

    async def list_folders(self, folder: str) -> List[str]:
        """
        Names of the folders directly inside a folder

        Args:
            folder: Folder key (without trailing delimiter)

        Returns:
            List[str]: Sub-folder names in page-arrival order
        """
        folders: List[str] = []
        async for page in self.iter_pages(folder, delimiter=DELIMITER):
            # only keep the folder paths (those ending with the delimiter)
            folders.extend(
                folder_name(prefix)
                for prefix in page.common_prefixes
                if prefix.endswith(DELIMITER)
            )

        logger.info(f"Listed {len(folders)} folders under {folder}")
        return folders


# Global storage facade instance
storage_facade = StorageFacade(create_object_store(settings))
