"""
Custom Exceptions
=================
Application-specific exception classes.
"""

from fastapi import HTTPException, status


class StorageException(HTTPException):
    """Base object storage exception"""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class StorageObjectNotFoundException(StorageException):
    """Object does not exist in the bucket"""
    def __init__(self, key: str):
        self.key = key
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Object not found: {key}",
        )


class StoragePaginationException(StorageException):
    """Listing pagination cannot make progress"""
    def __init__(self, prefix: str, continuation_token: str):
        self.prefix = prefix
        self.continuation_token = continuation_token
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Storage listing for '{prefix}' returned a repeated continuation token",
        )
