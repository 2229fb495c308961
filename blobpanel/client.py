"""
BlobPanel - High-level async client for blob file management.

Example:
    >>> async with BlobPanel() as panel:
    ...     result = await panel.upload("receipt.png")
    ...     for entry in await panel.list_files():
    ...         print(entry.path)
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .core.logging import get_logger
from .core.storage import (
    BlobStoreConfig,
    BlobEntry,
    HttpBlobGateway,
    StorageGateway,
    UrlSigner,
    delete_many,
)
from .core.upload import (
    UploadFacade,
    UploadRequest,
    UploadConstraints,
    UploadResult,
    ProgressConfig,
    GENERIC_PRESET,
)
from .core.upload.coordinator import SuccessCallback, ErrorCallback
from .core.upload.progress import ProgressCallback, ProgressTracker


class BlobPanel:
    """
    File manager over a storage gateway.
    
    Keeps a local, newest-first cache of known blobs in ``files``: uploads
    are prepended, deletes are removed, ``list_files()`` replaces it.
    
    Args:
        gateway: Storage gateway; an HttpBlobGateway from ``config`` otherwise
        config: Blob store configuration (environment if not provided)
        signing_secret: Secret enabling sign_url()
        on_success / on_error / on_progress: Upload callbacks
        progress_config: Heartbeat timing
    """
    
    DEFAULT_LIST_LIMIT = 100
    
    def __init__(
        self,
        gateway: Optional[StorageGateway] = None,
        *,
        config: Optional[BlobStoreConfig] = None,
        signing_secret: Optional[Union[str, bytes]] = None,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        progress_config: Optional[ProgressConfig] = None
    ):
        self._logger = get_logger('blobpanel.client')
        self._owns_gateway = gateway is None
        self._gateway = gateway or HttpBlobGateway(config or BlobStoreConfig.from_env())
        self._signer = UrlSigner(signing_secret) if signing_secret else None
        self._uploads = UploadFacade(
            self._gateway,
            on_success=on_success,
            on_error=on_error,
            on_progress=on_progress,
            progress_config=progress_config
        )
        self._files: List[BlobEntry] = []
    
    async def __aenter__(self) -> 'BlobPanel':
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def close(self) -> None:
        """Close the gateway if this client created it."""
        if self._owns_gateway and hasattr(self._gateway, 'close'):
            await self._gateway.close()
    
    @property
    def gateway(self) -> StorageGateway:
        return self._gateway
    
    @property
    def uploads(self) -> UploadFacade:
        return self._uploads
    
    @property
    def files(self) -> List[BlobEntry]:
        """Locally cached blobs, newest first."""
        return list(self._files)
    
    def _remember(self, request: UploadRequest, result: UploadResult) -> None:
        self._files.insert(0, BlobEntry(
            url=result.remote_url,
            path=result.stored_path,
            size_bytes=request.size_bytes,
            uploaded_at=datetime.now(timezone.utc),
            content_type=request.mime_type
        ))
    
    async def upload(
        self,
        source: Union[UploadRequest, str, Path],
        folder: Optional[str] = None,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """
        Upload one file (a request or a local path) with the preset for its type.
        
        Raises:
            ValidationError: If the file violates the preset
            UploadError: If the gateway call fails
        """
        if isinstance(source, UploadRequest):
            request = source
        else:
            request = await UploadRequest.from_path(source)
        result = await self._uploads.upload(request, folder=folder, progress=progress)
        self._remember(request, result)
        return result
    
    async def upload_files(
        self,
        requests: Sequence[UploadRequest],
        constraints: Optional[UploadConstraints] = None,
        progress: Optional[ProgressTracker] = None
    ) -> List[UploadResult]:
        """Upload a batch, all or nothing; invalid files are skipped."""
        results = await self._uploads.upload_files(requests, constraints, progress)
        valid = self._uploads.coordinator.filter_valid(
            requests, constraints or GENERIC_PRESET
        )
        for request, result in zip(valid, results):
            self._remember(request, result)
        return results
    
    async def delete(self, url: str) -> None:
        """Delete one blob."""
        await self._gateway.delete(url)
        self._files = [f for f in self._files if f.url != url]
        self._logger.info(f"Deleted {url}")
    
    async def delete_many(self, urls: Sequence[str]) -> int:
        """Delete several blobs concurrently; fails as a whole on any error."""
        count = await delete_many(self._gateway, urls)
        removed = set(urls)
        self._files = [f for f in self._files if f.url not in removed]
        return count
    
    async def list_files(
        self,
        prefix: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT
    ) -> List[BlobEntry]:
        """Fetch one page of blobs and replace the local cache with it."""
        listing = await self._gateway.list(prefix=prefix, limit=limit)
        self._files = sorted(
            listing.entries, key=lambda e: e.uploaded_at, reverse=True
        )
        return self.files
    
    async def refresh(self) -> List[BlobEntry]:
        """Reload the cache without a prefix."""
        return await self.list_files()
    
    async def info(self, url: str) -> BlobEntry:
        """Fetch metadata for one blob."""
        return await self._gateway.head(url)
    
    def sign_url(self, path: str, expires_in: int = UrlSigner.DEFAULT_EXPIRES_IN) -> str:
        """
        Create an expiring signed URL.
        
        Raises:
            RuntimeError: If no signing secret was configured
        """
        if self._signer is None:
            raise RuntimeError("No signing secret configured")
        return self._signer.sign(path, expires_in)
