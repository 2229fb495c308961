"""Upload models."""
from .upload_models import (
    UploadRequest,
    UploadConstraints,
    UploadResult,
    DEFAULT_MAX_SIZE_BYTES,
    guess_mime_type
)

__all__ = [
    'UploadRequest',
    'UploadConstraints',
    'UploadResult',
    'DEFAULT_MAX_SIZE_BYTES',
    'guess_mime_type'
]
