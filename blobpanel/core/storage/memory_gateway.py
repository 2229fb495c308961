"""
In-memory storage gateway.

Keeps blobs in a dict. Used for tests, demos and offline CLI runs.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Union

from .models import StoredObject, BlobEntry, BlobListing
from ..exceptions import StorageError, BlobNotFoundError


@dataclass
class _StoredBlob:
    data: bytes
    content_type: Optional[str]
    uploaded_at: datetime


FailurePolicy = Union[bool, Callable[[str], bool]]


class MemoryGateway:
    """
    Dict-backed gateway.
    
    Records every ``store`` call in ``store_calls`` so tests can assert
    how often the gateway was contacted.
    
    Args:
        base_url: Prefix for generated blob URLs
        store_delay: Seconds each store call sleeps before completing
        fail_on_store: True to fail every store, or a predicate on the path
    """
    
    def __init__(
        self,
        base_url: str = 'memory://blob',
        store_delay: float = 0.0,
        fail_on_store: FailurePolicy = False
    ):
        self.base_url = base_url.rstrip('/')
        self.store_delay = store_delay
        self.fail_on_store = fail_on_store
        self.store_calls: List[str] = []
        self._blobs: Dict[str, _StoredBlob] = {}
    
    def __len__(self) -> int:
        return len(self._blobs)
    
    def __contains__(self, path: str) -> bool:
        return path in self._blobs
    
    def url_for(self, path: str) -> str:
        """Returns the URL a path is served from."""
        return f"{self.base_url}/{path}"
    
    def read(self, path: str) -> bytes:
        """Returns stored bytes for a path."""
        if path not in self._blobs:
            raise BlobNotFoundError(self.url_for(path))
        return self._blobs[path].data
    
    def _path_from_url(self, url: str) -> str:
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            raise BlobNotFoundError(url)
        return url[len(prefix):]
    
    def _should_fail(self, path: str) -> bool:
        if callable(self.fail_on_store):
            return bool(self.fail_on_store(path))
        return bool(self.fail_on_store)
    
    def _entry(self, path: str) -> BlobEntry:
        blob = self._blobs[path]
        return BlobEntry(
            url=self.url_for(path),
            path=path,
            size_bytes=len(blob.data),
            uploaded_at=blob.uploaded_at,
            content_type=blob.content_type
        )
    
    async def store(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> StoredObject:
        self.store_calls.append(path)
        if self.store_delay:
            await asyncio.sleep(self.store_delay)
        if self._should_fail(path):
            raise StorageError(f"Simulated store failure for {path}", 500)
        self._blobs[path] = _StoredBlob(
            data=bytes(data),
            content_type=content_type,
            uploaded_at=datetime.now(timezone.utc)
        )
        return StoredObject(url=self.url_for(path), path=path)
    
    async def delete(self, url: str) -> None:
        path = self._path_from_url(url)
        if path not in self._blobs:
            raise BlobNotFoundError(url)
        del self._blobs[path]
    
    async def list(
        self,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> BlobListing:
        paths = sorted(
            p for p in self._blobs if not prefix or p.startswith(prefix)
        )
        offset = int(cursor) if cursor else 0
        end = len(paths) if limit is None else offset + limit
        page = paths[offset:end]
        next_cursor = str(end) if end < len(paths) else None
        return BlobListing(
            entries=[self._entry(p) for p in page],
            next_cursor=next_cursor
        )
    
    async def head(self, url: str) -> BlobEntry:
        path = self._path_from_url(url)
        if path not in self._blobs:
            raise BlobNotFoundError(url)
        return self._entry(path)
