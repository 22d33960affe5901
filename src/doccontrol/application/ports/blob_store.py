"""Blob store port - file bytes live outside the database."""

from typing import Protocol


class BlobStore(Protocol):
    """Port for object storage. Every method may raise StorageUnavailable."""

    async def put(self, key: str, data: bytes, content_type: str) -> str: ...

    async def get(self, locator: str) -> bytes: ...

    async def signed_url(self, locator: str, expires_in: int) -> str: ...
