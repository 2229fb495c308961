"""
Data models for storage gateways.

Uses frozen dataclasses; gateway results are immutable once produced.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional, List


@dataclass(frozen=True)
class StoredObject:
    """
    Location of a freshly stored blob.
    
    Attributes:
        url: Public URL of the blob
        path: Path (pathname) the blob was stored under
    """
    url: str
    path: str


@dataclass(frozen=True)
class BlobEntry:
    """
    Metadata about a stored blob.
    
    Attributes:
        url: Public URL
        path: Stored pathname
        size_bytes: Size in bytes
        uploaded_at: Upload timestamp (UTC)
        content_type: MIME type, when the service reports one
    """
    url: str
    path: str
    size_bytes: int
    uploaded_at: datetime
    content_type: Optional[str] = None
    
    @property
    def name(self) -> str:
        """Last segment of the stored path."""
        return self.path.rsplit('/', 1)[-1]
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlobEntry':
        """
        Create from an API payload.
        
        Accepts both the service's camelCase keys and snake_case keys.
        """
        uploaded_at = data.get('uploadedAt', data.get('uploaded_at'))
        if isinstance(uploaded_at, str):
            uploaded_at = datetime.fromisoformat(uploaded_at.replace('Z', '+00:00'))
        elif uploaded_at is None:
            uploaded_at = datetime.fromtimestamp(0, tz=timezone.utc)
        return cls(
            url=data['url'],
            path=data.get('pathname', data.get('path', '')),
            size_bytes=int(data.get('size', data.get('size_bytes', 0))),
            uploaded_at=uploaded_at,
            content_type=data.get('contentType', data.get('content_type'))
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the service's payload format."""
        result = {
            'url': self.url,
            'pathname': self.path,
            'size': self.size_bytes,
            'uploadedAt': self.uploaded_at.isoformat(),
        }
        if self.content_type is not None:
            result['contentType'] = self.content_type
        return result


@dataclass(frozen=True)
class BlobListing:
    """
    One page of a blob listing.
    
    Attributes:
        entries: Blobs on this page
        next_cursor: Opaque cursor for the next page, None on the last page
    """
    entries: List[BlobEntry] = field(default_factory=list)
    next_cursor: Optional[str] = None
    
    @property
    def has_more(self) -> bool:
        """Returns True if another page is available."""
        return self.next_cursor is not None
