"""
Protocol definitions for storage gateways.

The upload orchestrator depends only on this interface; concrete
gateways are injected by the caller.
"""
from typing import Protocol, Optional

from .models import StoredObject, BlobEntry, BlobListing


class StorageGateway(Protocol):
    """Remote object storage reachable by URL."""
    
    async def store(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> StoredObject:
        """
        Store bytes under a path.
        
        Args:
            path: Destination pathname
            data: File content
            content_type: Optional MIME type
            
        Returns:
            Stored object location
            
        Raises:
            StorageError: On any transport or service fault
        """
        ...
    
    async def delete(self, url: str) -> None:
        """
        Delete a blob by URL.
        
        Raises:
            StorageError: If the blob does not exist or the service is unreachable
        """
        ...
    
    async def list(
        self,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> BlobListing:
        """List blobs, optionally filtered by path prefix."""
        ...
    
    async def head(self, url: str) -> BlobEntry:
        """
        Fetch blob metadata.
        
        Raises:
            BlobNotFoundError: If the blob does not exist
        """
        ...
