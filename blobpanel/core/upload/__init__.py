"""
Upload module.

Validates files against size and MIME constraints, stores them through an
injected storage gateway and reports cosmetic progress.
"""
from .facade import UploadFacade
from .coordinator import UploadCoordinator
from .models import UploadRequest, UploadConstraints, UploadResult
from .validation import UploadValidator, matches_mime
from .progress import ProgressConfig, ProgressTracker
from .paths import StoredPathBuilder
from .presets import (
    GENERIC_PRESET,
    IMAGE_PRESET,
    DOCUMENT_PRESET,
    DOCUMENT_MIME_TYPES,
    IMAGE_TARGETS,
    ImageTarget,
    preset_for
)

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',
    'UploadValidator',
    'matches_mime',
    
    # Models
    'UploadRequest',
    'UploadConstraints',
    'UploadResult',
    
    # Progress
    'ProgressConfig',
    'ProgressTracker',
    'StoredPathBuilder',
    
    # Presets
    'GENERIC_PRESET',
    'IMAGE_PRESET',
    'DOCUMENT_PRESET',
    'DOCUMENT_MIME_TYPES',
    'IMAGE_TARGETS',
    'ImageTarget',
    'preset_for',
]
