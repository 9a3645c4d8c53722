"""
Shared test fixtures
"""
import os

# Must be set before image_storage.core.config is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("IMAGE_STORAGE_BUCKET", "test-bucket")
os.environ.setdefault("IMAGE_STORAGE_AUTH_STYLE", "NONE")

from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from image_storage.services.storage import StorageFacade


def make_client_error(code: str, status_code: int, operation: str = "HeadObject") -> ClientError:
    """Build a botocore ClientError the way the SDK raises it"""
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} error"},
            "ResponseMetadata": {"HTTPStatusCode": status_code},
        },
        operation,
    )


def listing_response(sizes=(), prefixes=(), token=None, truncated=False, folder="folder"):
    """Build a raw list_objects_v2 response"""
    response = {
        "Contents": [
            {"Key": f"{folder}/object-{i}", "Size": size}
            for i, size in enumerate(sizes)
        ],
        "CommonPrefixes": [{"Prefix": prefix} for prefix in prefixes],
        "IsTruncated": truncated,
    }
    if token:
        response["NextContinuationToken"] = token
    return response


class FakeObjectStore:
    """In-memory ObjectStore returning scripted listing pages"""

    def __init__(self, objects=None, pages=None, errors=None, bucket_name="test-bucket"):
        self.bucket_name = bucket_name
        self.objects = objects or {}
        self.pages = list(pages or [])
        self.errors = errors or {}
        self.list_calls = []

    def _lookup(self, key, operation):
        if key in self.errors:
            raise self.errors[key]
        if key not in self.objects:
            raise make_client_error("404", 404, operation)
        return self.objects[key]

    async def head_object(self, key):
        obj = self._lookup(key, "HeadObject")
        return {
            "ContentLength": len(obj["body"]),
            "ContentType": obj.get("content_type", "application/octet-stream"),
            "ETag": obj.get("etag", '"etag"'),
            "LastModified": obj.get(
                "last_modified", datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
            ),
            "Metadata": obj.get("metadata", {}),
        }

    async def get_object(self, key):
        response = await self.head_object(key)
        response["Body"] = self.objects[key]["body"]
        return response

    async def list_objects_v2(self, prefix, delimiter=None, continuation_token=None, max_keys=None):
        self.list_calls.append({
            "prefix": prefix,
            "delimiter": delimiter,
            "continuation_token": continuation_token,
            "max_keys": max_keys,
        })
        page = self.pages[len(self.list_calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def fake_store():
    """Empty fake store; tests fill in objects and pages"""
    return FakeObjectStore(
        objects={
            "images/raspberrypi3/2.0.0/image.img": {
                "body": b"\x00" * 16,
                "content_type": "application/octet-stream",
                "metadata": {"device-type": "raspberrypi3"},
            },
            "images/raspberrypi3/2.0.0/logo.svg": {
                "body": b"<svg/>",
                "content_type": "image/svg+xml",
            },
        }
    )


@pytest.fixture
def facade(fake_store):
    return StorageFacade(fake_store)
