"""
BlobPanel - Async Python library for validated blob file uploads.

Usage:
    >>> from blobpanel import BlobPanel, UploadRequest
    >>>
    >>> async with BlobPanel() as panel:
    ...     request = UploadRequest.from_bytes("logo.png", data, "image/png")
    ...     result = await panel.upload(request)
    ...     print(result.remote_url)
"""
import logging
from .client import BlobPanel

# Uploads
from .core.upload import (
    UploadFacade,
    UploadCoordinator,
    UploadValidator,
    UploadRequest,
    UploadConstraints,
    UploadResult,
    ProgressConfig,
    ProgressTracker,
    IMAGE_PRESET,
    DOCUMENT_PRESET,
    GENERIC_PRESET,
    preset_for
)

# Storage
from .core.storage import (
    BlobStoreConfig,
    TimeoutConfig,
    StorageGateway,
    HttpBlobGateway,
    MemoryGateway,
    StoredObject,
    BlobEntry,
    BlobListing,
    UrlSigner
)

# Errors
from .core.exceptions import (
    BlobPanelError,
    ValidationError,
    ValidationErrorKind,
    FileTooLargeError,
    UnsupportedTypeError,
    UploadError,
    UploadErrorKind,
    StorageError,
    BlobNotFoundError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for blobpanel modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'blobpanel',
        'blobpanel.client',
        'blobpanel.upload',
        'blobpanel.upload.coordinator',
        'blobpanel.upload.file',
        'blobpanel.storage',
        'blobpanel.storage.http',
        'blobpanel.images',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'BlobPanel',
    'UploadFacade',
    'UploadCoordinator',
    'UploadValidator',
    'UploadRequest',
    'UploadConstraints',
    'UploadResult',
    'ProgressConfig',
    'ProgressTracker',
    'IMAGE_PRESET',
    'DOCUMENT_PRESET',
    'GENERIC_PRESET',
    'preset_for',
    'BlobStoreConfig',
    'TimeoutConfig',
    'StorageGateway',
    'HttpBlobGateway',
    'MemoryGateway',
    'StoredObject',
    'BlobEntry',
    'BlobListing',
    'UrlSigner',
    'BlobPanelError',
    'ValidationError',
    'ValidationErrorKind',
    'FileTooLargeError',
    'UnsupportedTypeError',
    'UploadError',
    'UploadErrorKind',
    'StorageError',
    'BlobNotFoundError',
    'setup_logging',
]
