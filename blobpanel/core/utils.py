"""Helpers for presenting stored files."""
from typing import Iterable, List, Optional

from .storage.models import BlobEntry

SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB', 'TB')

CATEGORIES = ('image', 'video', 'audio', 'pdf', 'document', 'other')

_DOCUMENT_HINTS = ('word', 'excel', 'spreadsheet', 'document', 'msword', 'text/')


def format_file_size(size_bytes: int) -> str:
    """
    Human readable size, base 1024.
    
    Example:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size_bytes <= 0:
        return '0 Bytes'
    exponent = 0
    value = float(size_bytes)
    while value >= 1024 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    value = round(value, 2)
    # 1.50 -> 1.5, 2.00 -> 2
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {SIZE_UNITS[exponent]}"


def content_category(content_type: Optional[str]) -> str:
    """Map a MIME type to one of CATEGORIES."""
    if not content_type:
        return 'other'
    if content_type.startswith('image/'):
        return 'image'
    if content_type.startswith('video/'):
        return 'video'
    if content_type.startswith('audio/'):
        return 'audio'
    if content_type == 'application/pdf':
        return 'pdf'
    if any(hint in content_type for hint in _DOCUMENT_HINTS):
        return 'document'
    return 'other'


def filter_entries(
    entries: Iterable[BlobEntry],
    search: Optional[str] = None,
    category: Optional[str] = None
) -> List[BlobEntry]:
    """
    Filter blobs by a case-insensitive path search and a content category.
    
    Args:
        entries: Blobs to filter
        search: Substring the path must contain
        category: One of CATEGORIES, or None/'all' for every category
    """
    if category is not None and category != 'all' and category not in CATEGORIES:
        raise ValueError(f"Unknown category {category!r}; expected one of {CATEGORIES}")
    needle = search.lower() if search else None
    result = []
    for entry in entries:
        if needle and needle not in entry.path.lower():
            continue
        if category and category != 'all' and content_category(entry.content_type) != category:
            continue
        result.append(entry)
    return result
