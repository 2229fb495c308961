"""
Upload policy presets.

Presets are plain UploadConstraints layered on top of the generic
validator and coordinator.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .models import UploadConstraints

MB = 1024 * 1024

IMAGE_FOLDER = 'images'
DOCUMENT_FOLDER = 'documents'

DOCUMENT_MIME_TYPES = frozenset({
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'text/plain',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
})

GENERIC_PRESET = UploadConstraints()

IMAGE_PRESET = UploadConstraints(
    max_size_bytes=5 * MB,
    allowed_mime_patterns=frozenset({'image/*'}),
    destination_folder=IMAGE_FOLDER
)

DOCUMENT_PRESET = UploadConstraints(
    max_size_bytes=50 * MB,
    allowed_mime_patterns=DOCUMENT_MIME_TYPES,
    destination_folder=DOCUMENT_FOLDER
)


def preset_for(
    mime_type: str,
    max_size_bytes: Optional[int] = None,
    allowed_mime_patterns: Optional[Iterable[str]] = None,
    destination_folder: Optional[str] = None
) -> UploadConstraints:
    """
    Pick the image or document preset for a MIME type.
    
    Non-None arguments override the preset's values.
    """
    base = IMAGE_PRESET if mime_type.startswith('image/') else DOCUMENT_PRESET
    return base.replace(
        max_size_bytes=max_size_bytes,
        allowed_mime_patterns=allowed_mime_patterns,
        destination_folder=destination_folder
    )


@dataclass(frozen=True)
class ImageTarget:
    """
    Named destination for images.
    
    Attributes:
        folder: Folder images are stored in
        max_width: Downscale wider images to this width
        max_height: Downscale taller images to this height
    """
    folder: str
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    
    @property
    def resizes(self) -> bool:
        return self.max_width is not None or self.max_height is not None


IMAGE_TARGETS: Dict[str, ImageTarget] = {
    'profiles': ImageTarget('profiles', max_width=500, max_height=500),
    'platforms': ImageTarget('platforms', max_width=200, max_height=200),
    'receipts': ImageTarget('receipts'),
    'blog': ImageTarget('blog'),
}
