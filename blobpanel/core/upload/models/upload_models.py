"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Iterable, FrozenSet, Union
import mimetypes


DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_MIME_TYPE = 'application/octet-stream'


def guess_mime_type(file_name: str) -> str:
    """Guess a MIME type from a file name, falling back to octet-stream."""
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class UploadRequest:
    """
    A file the caller wants to upload.
    
    Attributes:
        file_name: Original file name
        size_bytes: Declared size in bytes (validated before any read)
        mime_type: MIME type reported for the file
        destination_folder: Optional folder overriding the constraints' folder
        data: File content handed to the gateway
    
    Example:
        >>> request = UploadRequest.from_bytes("logo.png", b"...", "image/png")
        >>> request.size_bytes
        3
    """
    file_name: str
    size_bytes: int
    mime_type: str
    destination_folder: Optional[str] = None
    data: bytes = field(default=b'', repr=False)
    
    def __post_init__(self):
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes must be >= 0, got {self.size_bytes}")
        if not self.file_name:
            raise ValueError("file_name must not be empty")
    
    @property
    def is_image(self) -> bool:
        """Returns True for image/* MIME types."""
        return self.mime_type.startswith('image/')
    
    @classmethod
    def from_bytes(
        cls,
        file_name: str,
        data: bytes,
        mime_type: Optional[str] = None,
        destination_folder: Optional[str] = None
    ) -> 'UploadRequest':
        """Create a request from in-memory content."""
        return cls(
            file_name=file_name,
            size_bytes=len(data),
            mime_type=mime_type or guess_mime_type(file_name),
            destination_folder=destination_folder,
            data=data
        )
    
    @classmethod
    async def from_path(
        cls,
        file_path: Union[str, Path],
        mime_type: Optional[str] = None,
        destination_folder: Optional[str] = None
    ) -> 'UploadRequest':
        """
        Create a request from a local file.
        
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
            OSError: If the file cannot be read
        """
        from ..services import FileValidator, AsyncFileReader
        
        path, size = FileValidator().validate(file_path)
        data = await AsyncFileReader().read_file(path)
        return cls(
            file_name=path.name,
            size_bytes=size,
            mime_type=mime_type or guess_mime_type(path.name),
            destination_folder=destination_folder,
            data=data
        )
    
    def with_data(self, data: bytes, mime_type: Optional[str] = None) -> 'UploadRequest':
        """Return a copy carrying new content (size follows the content)."""
        return replace(
            self,
            data=data,
            size_bytes=len(data),
            mime_type=mime_type or self.mime_type
        )


@dataclass(frozen=True)
class UploadConstraints:
    """
    Limits applied to every file before upload.
    
    Attributes:
        max_size_bytes: Size ceiling in bytes (inclusive)
        allowed_mime_patterns: Exact MIME types or ``"prefix/*"`` wildcards;
            an empty set rejects every file
        destination_folder: Folder stored paths are prefixed with
    """
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES
    allowed_mime_patterns: FrozenSet[str] = frozenset({'image/*'})
    destination_folder: Optional[str] = None
    
    def __post_init__(self):
        if self.max_size_bytes < 0:
            raise ValueError(f"max_size_bytes must be >= 0, got {self.max_size_bytes}")
        if isinstance(self.allowed_mime_patterns, str):
            raise TypeError("allowed_mime_patterns must be a collection, not a string")
        object.__setattr__(
            self, 'allowed_mime_patterns', frozenset(self.allowed_mime_patterns)
        )
    
    def replace(
        self,
        max_size_bytes: Optional[int] = None,
        allowed_mime_patterns: Optional[Iterable[str]] = None,
        destination_folder: Optional[str] = None
    ) -> 'UploadConstraints':
        """Return a copy with every non-None argument applied."""
        return UploadConstraints(
            max_size_bytes=self.max_size_bytes if max_size_bytes is None else max_size_bytes,
            allowed_mime_patterns=(
                self.allowed_mime_patterns
                if allowed_mime_patterns is None
                else frozenset(allowed_mime_patterns)
            ),
            destination_folder=(
                self.destination_folder
                if destination_folder is None
                else destination_folder
            )
        )


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.
    
    Attributes:
        remote_url: URL the file is reachable at
        stored_path: Path the gateway stored the file under
        original_file_name: File name as supplied by the caller
    """
    remote_url: str
    stored_path: str
    original_file_name: str
