"""Image downscaling with Pillow."""
import io
from typing import Optional, Tuple

from PIL import Image

from .logging import get_logger

logger = get_logger('blobpanel.images')

_FORMAT_MIME = {
    'JPEG': 'image/jpeg',
    'PNG': 'image/png',
    'GIF': 'image/gif',
    'WEBP': 'image/webp',
}


def image_size(data: bytes) -> Tuple[int, int]:
    """Returns (width, height) of an encoded image."""
    with Image.open(io.BytesIO(data)) as img:
        return img.size


def downscale(
    data: bytes,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    quality: int = 85
) -> Tuple[bytes, str]:
    """
    Shrink an image to fit inside max_width x max_height.
    
    Aspect ratio is preserved and images are never enlarged. Images that
    already fit are returned unchanged.
    
    Args:
        data: Encoded image bytes
        max_width: Width limit in pixels (None for no limit)
        max_height: Height limit in pixels (None for no limit)
        quality: JPEG/WEBP quality for re-encoded output
        
    Returns:
        Tuple of (image bytes, MIME type)
        
    Raises:
        ValueError: If data is not a readable image
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Not a readable image: {e}") from e
    
    fmt = img.format or 'PNG'
    mime_type = _FORMAT_MIME.get(fmt, Image.MIME.get(fmt, 'application/octet-stream'))
    width, height = img.size
    limit_w = max_width or width
    limit_h = max_height or height
    
    if width <= limit_w and height <= limit_h:
        return data, mime_type
    
    img.thumbnail((limit_w, limit_h), Image.Resampling.LANCZOS)
    if fmt not in _FORMAT_MIME:
        fmt, mime_type = 'PNG', 'image/png'
    if fmt == 'JPEG' and img.mode not in ('RGB', 'L'):
        img = img.convert('RGB')
    
    out = io.BytesIO()
    save_kwargs = {'quality': quality} if fmt in ('JPEG', 'WEBP') else {}
    img.save(out, format=fmt, **save_kwargs)
    logger.debug(f"Downscaled image {width}x{height} -> {img.size[0]}x{img.size[1]}")
    return out.getvalue(), mime_type
