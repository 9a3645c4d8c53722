"""
Object Store Clients
====================
S3-compatible clients exposing the three calls the storage facade needs:
head_object, get_object and list_objects_v2.

Two flavours share one capability set:
- AuthenticatedObjectStore signs requests (SigV4) with the default AWS
  credential chain (env vars, shared config, instance profile, ...)
- UnauthenticatedObjectStore sends requests unsigned, for public buckets
"""

from typing import Any, Dict, Optional, Protocol

import aioboto3
from botocore import UNSIGNED
from botocore.config import Config

from image_storage.core.config import Settings
from image_storage.core.logging_config import get_logger


logger = get_logger(__name__)


class ObjectStore(Protocol):
    """Capability set required by the storage facade"""

    bucket_name: str

    async def head_object(self, key: str) -> Dict[str, Any]:
        ...

    async def get_object(self, key: str) -> Dict[str, Any]:
        ...

    async def list_objects_v2(
        self,
        prefix: str,
        delimiter: Optional[str] = None,
        continuation_token: Optional[str] = None,
        max_keys: Optional[int] = None,
    ) -> Dict[str, Any]:
        ...


class S3ObjectStore:
    """
    S3 Object Store

    Opens a short-lived aioboto3 client per call. Subclasses choose how
    requests are signed through ``signature_version``.
    """

    signature_version: Any = "s3v4"

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        region_name: Optional[str] = None,
        force_path_style: bool = False,
        session: Optional[aioboto3.Session] = None,
    ):
        self.bucket_name = bucket_name
        self.endpoint_url = endpoint_url
        self.region_name = region_name
        self.force_path_style = force_path_style
        self.session = session or aioboto3.Session()

    def _client_config(self) -> Config:
        """Build the botocore client config (signing + addressing style)"""
        s3_options = {"addressing_style": "path"} if self.force_path_style else None
        return Config(signature_version=self.signature_version, s3=s3_options)

    def _client(self):
        """Create an async S3 client context manager"""
        return self.session.client(
            "s3",
            endpoint_url=self.endpoint_url,
            region_name=self.region_name,
            config=self._client_config(),
        )

    async def head_object(self, key: str) -> Dict[str, Any]:
        """
        Fetch object metadata

        Args:
            key: Object key

        Returns:
            Dict[str, Any]: Raw head_object response
        """
        async with self._client() as s3_client:
            return await s3_client.head_object(Bucket=self.bucket_name, Key=key)

    async def get_object(self, key: str) -> Dict[str, Any]:
        """
        Fetch an object, reading its body fully

        Args:
            key: Object key

        Returns:
            Dict[str, Any]: Raw get_object response with ``Body`` as bytes
        """
        async with self._client() as s3_client:
            response = await s3_client.get_object(Bucket=self.bucket_name, Key=key)

            async with response["Body"] as stream:
                response["Body"] = await stream.read()

            return response

    async def list_objects_v2(
        self,
        prefix: str,
        delimiter: Optional[str] = None,
        continuation_token: Optional[str] = None,
        max_keys: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Fetch one page of a prefix listing

        Args:
            prefix: Key prefix to list under
            delimiter: Grouping character for common prefixes
            continuation_token: Token from the previous page
            max_keys: Page size limit

        Returns:
            Dict[str, Any]: Raw list_objects_v2 response
        """
        params: Dict[str, Any] = {"Bucket": self.bucket_name, "Prefix": prefix}
        if delimiter:
            params["Delimiter"] = delimiter
        if continuation_token:
            params["ContinuationToken"] = continuation_token
        if max_keys is not None:
            params["MaxKeys"] = max_keys

        async with self._client() as s3_client:
            return await s3_client.list_objects_v2(**params)


class AuthenticatedObjectStore(S3ObjectStore):
    """Signs every request with SigV4 using the default credential chain"""

    signature_version = "s3v4"


class UnauthenticatedObjectStore(S3ObjectStore):
    """Issues requests without signing them"""

    signature_version = UNSIGNED


def create_object_store(config: Settings) -> ObjectStore:
    """
    Select the object store client for the configured auth style

    Args:
        config: Application settings

    Returns:
        ObjectStore: Authenticated client for SIGV4, unauthenticated otherwise
    """
    store_class = (
        AuthenticatedObjectStore
        if config.storage_signed_requests
        else UnauthenticatedObjectStore
    )

    logger.bind(
        endpoint=config.IMAGE_STORAGE_ENDPOINT,
        force_path_style=config.IMAGE_STORAGE_FORCE_PATH_STYLE,
    ).info(f"Using {store_class.__name__} for bucket {config.IMAGE_STORAGE_BUCKET}")

    return store_class(
        bucket_name=config.IMAGE_STORAGE_BUCKET,
        endpoint_url=config.IMAGE_STORAGE_ENDPOINT,
        region_name=config.IMAGE_STORAGE_REGION,
        force_path_style=config.IMAGE_STORAGE_FORCE_PATH_STYLE,
    )
