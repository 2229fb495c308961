"""Batch operations built on top of any storage gateway."""
import asyncio
from typing import Iterable

from .protocols import StorageGateway
from ..exceptions import StorageError
from ..logging import get_logger

logger = get_logger('blobpanel.storage')


async def delete_many(gateway: StorageGateway, urls: Iterable[str]) -> int:
    """
    Delete several blobs concurrently.
    
    All deletes are issued before any is awaited. If one fails the whole
    call fails with ``StorageError``; deletes already issued still run
    to completion.
    
    Returns:
        Number of blobs deleted
    """
    targets = list(urls)
    if not targets:
        return 0
    results = await asyncio.gather(
        *(gateway.delete(url) for url in targets),
        return_exceptions=True
    )
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        logger.error(f"Failed to delete {len(failures)} of {len(targets)} blobs")
        first = failures[0]
        if isinstance(first, StorageError):
            raise first
        raise StorageError(f"Failed to delete blobs: {first}") from first
    logger.info(f"Deleted {len(targets)} blobs")
    return len(targets)
