"""
Tests for the S3 object store clients
"""
from typing import get_type_hints
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore import UNSIGNED

from image_storage.core.config import Settings
from image_storage.services.storage import (
    AuthenticatedObjectStore,
    ObjectStore,
    UnauthenticatedObjectStore,
    create_object_store,
)


@pytest.fixture
def s3_client():
    """Mock aiobotocore S3 client"""
    return AsyncMock()


@pytest.fixture
def mock_session(s3_client):
    """Mock aioboto3 session whose client() is an async context manager"""
    session = MagicMock()
    client_context = MagicMock()
    client_context.__aenter__.return_value = s3_client
    client_context.__aexit__.return_value = False
    session.client.return_value = client_context
    return session


def client_config(mock_session):
    return mock_session.client.call_args.kwargs["config"]


# ============================================================================
# CLIENT CONFIGURATION
# ============================================================================

@pytest.mark.asyncio
async def test_authenticated_store_signs_with_sigv4(mock_session, s3_client):
    store = AuthenticatedObjectStore("images", session=mock_session)

    await store.head_object("a/b")

    args = mock_session.client.call_args
    assert args.args == ("s3",)
    assert client_config(mock_session).signature_version == "s3v4"


@pytest.mark.asyncio
async def test_unauthenticated_store_is_unsigned(mock_session, s3_client):
    store = UnauthenticatedObjectStore("images", session=mock_session)

    await store.head_object("a/b")

    assert client_config(mock_session).signature_version is UNSIGNED


@pytest.mark.asyncio
async def test_endpoint_and_path_style(mock_session, s3_client):
    store = UnauthenticatedObjectStore(
        "images",
        endpoint_url="http://minio:9000",
        region_name="us-east-1",
        force_path_style=True,
        session=mock_session,
    )

    await store.head_object("a/b")

    kwargs = mock_session.client.call_args.kwargs
    assert kwargs["endpoint_url"] == "http://minio:9000"
    assert kwargs["region_name"] == "us-east-1"
    assert client_config(mock_session).s3 == {"addressing_style": "path"}


@pytest.mark.asyncio
async def test_virtual_host_style_by_default(mock_session, s3_client):
    store = AuthenticatedObjectStore("images", session=mock_session)

    await store.head_object("a/b")

    assert client_config(mock_session).s3 is None


# ============================================================================
# OPERATIONS
# ============================================================================

@pytest.mark.asyncio
async def test_head_object(mock_session, s3_client):
    s3_client.head_object.return_value = {"ContentLength": 42}
    store = AuthenticatedObjectStore("images", session=mock_session)

    response = await store.head_object("a/b.img")

    assert response == {"ContentLength": 42}
    s3_client.head_object.assert_awaited_once_with(Bucket="images", Key="a/b.img")


@pytest.mark.asyncio
async def test_get_object_reads_body(mock_session, s3_client):
    """Test the streaming body is read inside the client context"""
    stream = MagicMock()
    stream.read = AsyncMock(return_value=b"image-bytes")
    body = MagicMock()
    body.__aenter__.return_value = stream
    body.__aexit__.return_value = False
    s3_client.get_object.return_value = {"Body": body, "ContentType": "image/png"}
    store = AuthenticatedObjectStore("images", session=mock_session)

    response = await store.get_object("a/logo.png")

    assert response["Body"] == b"image-bytes"
    assert response["ContentType"] == "image/png"
    s3_client.get_object.assert_awaited_once_with(Bucket="images", Key="a/logo.png")


@pytest.mark.asyncio
async def test_list_objects_v2_first_page(mock_session, s3_client):
    s3_client.list_objects_v2.return_value = {"IsTruncated": False}
    store = AuthenticatedObjectStore("images", session=mock_session)

    await store.list_objects_v2("a/")

    s3_client.list_objects_v2.assert_awaited_once_with(Bucket="images", Prefix="a/")


@pytest.mark.asyncio
async def test_list_objects_v2_with_all_params(mock_session, s3_client):
    s3_client.list_objects_v2.return_value = {"IsTruncated": False}
    store = AuthenticatedObjectStore("images", session=mock_session)

    await store.list_objects_v2(
        "a/", delimiter="/", continuation_token="tok", max_keys=1
    )

    s3_client.list_objects_v2.assert_awaited_once_with(
        Bucket="images",
        Prefix="a/",
        Delimiter="/",
        ContinuationToken="tok",
        MaxKeys=1,
    )


# ============================================================================
# CLIENT SELECTION
# ============================================================================

def test_create_object_store_sigv4():
    config = Settings(
        _env_file=None,
        IMAGE_STORAGE_BUCKET="images",
        IMAGE_STORAGE_AUTH_STYLE="SIGV4",
        IMAGE_STORAGE_ENDPOINT="https://s3.example.com",
        IMAGE_STORAGE_FORCE_PATH_STYLE=True,
    )

    store = create_object_store(config)

    assert isinstance(store, AuthenticatedObjectStore)
    assert store.bucket_name == "images"
    assert store.endpoint_url == "https://s3.example.com"
    assert store.force_path_style is True


@pytest.mark.parametrize("auth_style", ["NONE", "anonymous"])
def test_create_object_store_unsigned(auth_style):
    config = Settings(
        _env_file=None,
        IMAGE_STORAGE_BUCKET="public-images",
        IMAGE_STORAGE_AUTH_STYLE=auth_style,
    )

    store = create_object_store(config)

    assert isinstance(store, UnauthenticatedObjectStore)
    assert store.bucket_name == "public-images"


def test_create_object_store_returns_capability_set():
    """Test the factory is typed against the ObjectStore protocol"""
    assert get_type_hints(create_object_store)["return"] is ObjectStore
