"""Blob upload with bounded retry."""

import asyncio
import logging

from doccontrol.application.ports import BlobStore
from doccontrol.domain.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


def storage_key(document_id: object, version_number: int, file_name: str) -> str:
    """Object key for a revision: <document>/v<n>/<file name>."""
    return f"{document_id}/v{version_number}/{file_name}"


async def put_with_retry(
    blob_store: BlobStore,
    key: str,
    data: bytes,
    content_type: str,
    *,
    attempts: int = 3,
    backoff_seconds: float = 0.5,
) -> str:
    """Upload data, retrying StorageUnavailable up to attempts times. Re-uploading a key is idempotent."""
    attempt = 1
    while True:
        try:
            return await blob_store.put(key, data, content_type)
        except StorageUnavailable as e:
            if attempt >= attempts:
                logger.warning("Upload of %s failed after %d attempts: %s", key, attempt, e)
                raise
            logger.warning("Upload of %s failed (attempt %d/%d): %s", key, attempt, attempts, e)
            if backoff_seconds:
                await asyncio.sleep(backoff_seconds * attempt)
            attempt += 1
