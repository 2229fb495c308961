"""
Upload facade.

Provides a simplified interface for file uploads.
Follows Facade Pattern - hides presets, image handling and the coordinator.
"""
from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

from .coordinator import UploadCoordinator, SuccessCallback, ErrorCallback
from .models import UploadRequest, UploadConstraints, UploadResult
from .presets import (
    IMAGE_PRESET,
    DOCUMENT_PRESET,
    GENERIC_PRESET,
    IMAGE_TARGETS,
    ImageTarget,
)
from .progress import ProgressConfig, ProgressTracker, ProgressCallback
from ..images import downscale
from ..storage.protocols import StorageGateway


class UploadFacade:
    """
    Simplified interface for blob uploads.
    
    This is the main entry point for uploading files. Images and documents
    get their own presets; batches use the generic constraints.
    
    Example:
        >>> from blobpanel.core.upload import UploadFacade
        >>> uploader = UploadFacade(gateway)
        >>> result = await uploader.upload_path("receipt.png")
        >>> print(result.remote_url)
    """
    
    def __init__(
        self,
        gateway: StorageGateway,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        progress_config: Optional[ProgressConfig] = None,
        log_level: Optional[int] = None
    ):
        """
        Initialize upload facade.
        
        Args:
            gateway: Storage gateway
            on_success: Called after each successful single upload
            on_error: Called after each failed gateway call
            on_progress: Receives progress percentages
            progress_config: Heartbeat timing
            log_level: Optional level for the 'blobpanel.upload' logger
        """
        self._logger = logging.getLogger('blobpanel.upload')
        if log_level is not None:
            self._logger.setLevel(log_level)
        
        self._coordinator = UploadCoordinator(
            gateway=gateway,
            on_success=on_success,
            on_error=on_error,
            on_progress=on_progress,
            progress_config=progress_config
        )
    
    @property
    def coordinator(self) -> UploadCoordinator:
        return self._coordinator
    
    async def upload(
        self,
        request: UploadRequest,
        folder: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """
        Upload a file using the preset matching its MIME type.
        
        image/* files go through upload_image(), everything else through
        upload_document().
        """
        if request.is_image:
            return await self.upload_image(
                request, folder=folder, max_size_bytes=max_size_bytes, progress=progress
            )
        return await self.upload_document(
            request, folder=folder, max_size_bytes=max_size_bytes, progress=progress
        )
    
    async def upload_image(
        self,
        request: UploadRequest,
        target: Optional[Union[str, ImageTarget]] = None,
        folder: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """
        Upload an image.
        
        Args:
            request: Image to upload
            target: Named target ('profiles', 'platforms', ...) or ImageTarget;
                targets with max dimensions downscale the image first
            folder: Folder override
            max_size_bytes: Size ceiling override (default 5 MiB)
            progress: Optional tracker
            
        Raises:
            ValidationError: If the original image violates the constraints
            UploadError: If the gateway call fails
        """
        if isinstance(target, str):
            target = IMAGE_TARGETS.get(target, ImageTarget(target))
        constraints = IMAGE_PRESET.replace(
            max_size_bytes=max_size_bytes,
            destination_folder=folder or (target.folder if target else None)
        )
        # Limits apply to the file as the user picked it
        self._coordinator.validator.validate(request, constraints)
        
        if target is not None and target.resizes and request.data:
            try:
                data, mime_type = downscale(
                    request.data, target.max_width, target.max_height
                )
                request = request.with_data(data, mime_type)
            except ValueError as e:
                self._logger.warning(f"Could not downscale {request.file_name}, uploading as is: {e}")
        
        return await self._coordinator.upload_one(request, constraints, progress)
    
    async def upload_document(
        self,
        request: UploadRequest,
        folder: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """Upload an office, PDF or text document (default 50 MiB, 'documents')."""
        constraints = DOCUMENT_PRESET.replace(
            max_size_bytes=max_size_bytes,
            destination_folder=folder
        )
        return await self._coordinator.upload_one(request, constraints, progress)
    
    async def upload_profile_image(self, request: UploadRequest) -> UploadResult:
        return await self.upload_image(request, 'profiles')
    
    async def upload_platform_image(self, request: UploadRequest) -> UploadResult:
        return await self.upload_image(request, 'platforms')
    
    async def upload_receipt_image(self, request: UploadRequest) -> UploadResult:
        return await self.upload_image(request, 'receipts')
    
    async def upload_blog_image(self, request: UploadRequest) -> UploadResult:
        return await self.upload_image(request, 'blog')
    
    async def upload_files(
        self,
        requests: Sequence[UploadRequest],
        constraints: Optional[UploadConstraints] = None,
        progress: Optional[ProgressTracker] = None
    ) -> List[UploadResult]:
        """
        Upload a batch with one set of constraints (generic defaults: 10 MiB, image/*).
        
        Invalid files are skipped; see UploadCoordinator.upload_many().
        """
        return await self._coordinator.upload_many(
            requests, constraints or GENERIC_PRESET, progress
        )
    
    async def upload_path(
        self,
        file_path: Union[str, Path],
        mime_type: Optional[str] = None,
        folder: Optional[str] = None,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """
        Read a local file and upload it with the matching preset.
        
        Raises:
            FileNotFoundError: If file doesn't exist
        """
        request = await UploadRequest.from_path(file_path, mime_type=mime_type)
        return await self.upload(request, folder=folder, progress=progress)
