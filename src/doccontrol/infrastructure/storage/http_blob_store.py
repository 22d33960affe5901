"""Blob store over an HTTP object-storage API (Supabase storage style endpoints)."""

import logging
from urllib.parse import quote

import httpx

from doccontrol.domain.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


class HttpBlobStore:
    """Objects live in one bucket; the locator is the object path inside it.

    Every transport error or non-2xx response is raised as StorageUnavailable.
    """

    def __init__(
        self,
        base_url: str,
        bucket: str,
        service_key: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        headers = {"Authorization": f"Bearer {service_key}"} if service_key else {}
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    async def close(self) -> None:
        await self._client.aclose()

    def _object_url(self, prefix: str, locator: str) -> str:
        return f"{self._base_url}/{prefix}/{self._bucket}/{quote(locator)}"

    async def _request(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        headers = dict(self._headers)
        headers.update(kwargs.pop("headers", None) or {})
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StorageUnavailable(
                f"Storage returned {e.response.status_code} for {method} {url}"
            ) from e
        except httpx.HTTPError as e:
            raise StorageUnavailable(f"Storage request failed: {e}") from e
        return response

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Upload (upsert) data under key. Returns the locator."""
        await self._request(
            "POST",
            self._object_url("object", key),
            content=data,
            headers={
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "true",
            },
        )
        logger.debug("Stored %d bytes at %s", len(data), key)
        return key

    async def get(self, locator: str) -> bytes:
        response = await self._request("GET", self._object_url("object", locator))
        return response.content

    async def signed_url(self, locator: str, expires_in: int) -> str:
        """Time-limited download URL for locator."""
        response = await self._request(
            "POST",
            self._object_url("object/sign", locator),
            json={"expiresIn": expires_in},
        )
        signed = response.json().get("signedURL")
        if not signed:
            raise StorageUnavailable(f"Storage did not return a signed URL for {locator}")
        if signed.startswith("http"):
            return signed
        return f"{self._base_url}/{signed.lstrip('/')}"
