"""
Upload constraint checks.

Pure functions: no I/O, no hidden state.
"""
from typing import Optional

from .models import UploadRequest, UploadConstraints
from ..exceptions import ValidationError, FileTooLargeError, UnsupportedTypeError


def matches_mime(mime_type: str, pattern: str) -> bool:
    """
    Check a MIME type against one allow-list pattern.
    
    ``"image/*"`` matches any type whose part before ``/`` is ``image``;
    any other pattern requires exact equality.
    
    Example:
        >>> matches_mime("image/png", "image/*")
        True
        >>> matches_mime("image/png", "image/jpeg")
        False
    """
    if pattern.endswith('/*'):
        return mime_type.startswith(pattern[:-1])
    return mime_type == pattern


class UploadValidator:
    """Validates upload requests against constraints."""
    
    def validate(
        self,
        request: UploadRequest,
        constraints: UploadConstraints
    ) -> None:
        """
        Validate a request.
        
        Size is checked before type.
        
        Raises:
            FileTooLargeError: If size_bytes exceeds max_size_bytes
            UnsupportedTypeError: If the MIME type matches no allowed pattern
        """
        if request.size_bytes > constraints.max_size_bytes:
            raise FileTooLargeError(
                request.file_name,
                request.size_bytes,
                constraints.max_size_bytes
            )
        
        if not any(
            matches_mime(request.mime_type, pattern)
            for pattern in constraints.allowed_mime_patterns
        ):
            raise UnsupportedTypeError(request.file_name, request.mime_type)
    
    def check(
        self,
        request: UploadRequest,
        constraints: UploadConstraints
    ) -> Optional[ValidationError]:
        """Same as validate() but returns the error instead of raising it."""
        try:
            self.validate(request, constraints)
        except ValidationError as e:
            return e
        return None
    
    def is_valid(
        self,
        request: UploadRequest,
        constraints: UploadConstraints
    ) -> bool:
        """Returns True if the request passes every constraint."""
        return self.check(request, constraints) is None
