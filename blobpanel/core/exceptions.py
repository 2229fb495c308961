"""
Custom exceptions for blob upload and storage operations.

This module defines the error taxonomy shared by the upload orchestrator
and the storage gateways.
"""
from enum import Enum
from typing import Optional, Any


class BlobPanelError(Exception):
    """Base exception for all blobpanel errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (HTTP status, if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationErrorKind(str, Enum):
    """Reasons a file is rejected before reaching the gateway."""
    SIZE_EXCEEDED = 'size_exceeded'
    UNSUPPORTED_TYPE = 'unsupported_type'


class ValidationError(BlobPanelError):
    """
    Raised when a file violates the configured upload constraints.
    
    Always raised client-side, before any network call.
    """
    
    kind: ValidationErrorKind
    
    def __init__(self, message: str, file_name: Optional[str] = None) -> None:
        self.file_name = file_name
        super().__init__(message)
    
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.file_name == other.file_name
        )
    
    def __hash__(self) -> int:
        return hash((type(self), self.message, self.file_name))


class FileTooLargeError(ValidationError):
    """File size is above the configured ceiling."""
    
    kind = ValidationErrorKind.SIZE_EXCEEDED
    
    def __init__(
        self,
        file_name: str,
        size_bytes: int,
        max_size_bytes: int
    ) -> None:
        self.size_bytes = size_bytes
        self.max_size_bytes = max_size_bytes
        max_mb = round(max_size_bytes / (1024 * 1024))
        super().__init__(
            f"File {file_name!r} is {size_bytes} bytes; "
            f"files must be smaller than {max_mb}MB",
            file_name=file_name
        )


class UnsupportedTypeError(ValidationError):
    """File MIME type matches none of the allowed patterns."""
    
    kind = ValidationErrorKind.UNSUPPORTED_TYPE
    
    def __init__(self, file_name: str, mime_type: str) -> None:
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type {mime_type!r} for {file_name!r}",
            file_name=file_name
        )


class StorageError(BlobPanelError):
    """Exception raised by a storage gateway on any transport or service fault."""
    pass


class BlobNotFoundError(StorageError):
    """Exception raised when a blob does not exist."""
    
    def __init__(self, url: str, error_code: Optional[int] = 404) -> None:
        self.url = url
        super().__init__(f"Blob not found: {url}", error_code)


class UploadErrorKind(str, Enum):
    """Reasons an upload fails after validation."""
    GATEWAY_FAILURE = 'gateway_failure'


class UploadError(BlobPanelError):
    """
    Exception raised when the storage gateway fails to store a file.
    
    The underlying exception is available as ``cause`` (and ``__cause__``).
    Never retried automatically.
    """
    
    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        file_names: Optional[list] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            cause: Underlying gateway exception
            file_names: Names of the files involved in the failed call
        """
        self.kind = UploadErrorKind.GATEWAY_FAILURE
        self.cause = cause
        self.file_names = list(file_names or [])
        error_code = getattr(cause, 'error_code', None)
        super().__init__(message, error_code)
