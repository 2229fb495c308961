"""Pytest fixtures for blobpanel tests."""
import io

import pytest
from PIL import Image

from blobpanel.core.storage import MemoryGateway
from blobpanel.core.upload import UploadRequest, UploadConstraints, ProgressConfig

MB = 1024 * 1024


def _make_request(
    file_name: str = "photo.png",
    size_bytes: int = 1000,
    mime_type: str = "image/png",
    destination_folder=None
) -> UploadRequest:
    """Build a request with a declared size and a small payload."""
    return UploadRequest(
        file_name=file_name,
        size_bytes=size_bytes,
        mime_type=mime_type,
        destination_folder=destination_folder,
        data=b"x" * min(size_bytes, 32)
    )


def _png_bytes(width: int, height: int, color=(200, 30, 30)) -> bytes:
    """Encode a solid-color PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def gateway():
    """Empty in-memory gateway."""
    return MemoryGateway()


@pytest.fixture
def failing_gateway():
    """Gateway whose every store call fails."""
    return MemoryGateway(fail_on_store=True)


@pytest.fixture
def fast_progress():
    """Heartbeat timing short enough for tests."""
    return ProgressConfig(tick_interval=0.01, tick_step=10, tick_ceiling=90, reset_delay=0.05)


@pytest.fixture
def image_constraints():
    """1 MiB, images only, stored under uploads/."""
    return UploadConstraints(
        max_size_bytes=1 * MB,
        allowed_mime_patterns={"image/*"},
        destination_folder="uploads"
    )


@pytest.fixture
def make_request():
    """Factory for upload requests with a declared size."""
    return _make_request


@pytest.fixture
def png_bytes():
    """Factory for encoded PNG images."""
    return _png_bytes
