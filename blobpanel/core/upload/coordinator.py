"""
Upload coordinator.

Orchestrates validation, gateway calls, progress and callbacks.
Depends on the storage gateway abstraction, injected by the caller.
"""
import asyncio
import inspect
import time
from typing import Any, Callable, List, Optional, Sequence

from .models import UploadRequest, UploadConstraints, UploadResult
from .paths import StoredPathBuilder
from .progress import ProgressConfig, ProgressTracker, ProgressCallback
from .validation import UploadValidator
from ..exceptions import UploadError
from ..logging import get_logger
from ..storage.protocols import StorageGateway

logger = get_logger('blobpanel.upload.coordinator')

SuccessCallback = Callable[[UploadResult], Any]
ErrorCallback = Callable[[UploadError], Any]


class UploadCoordinator:
    """
    Coordinates single and batch uploads.
    
    Every call owns its own progress tracker; nothing is shared between
    concurrent calls besides the gateway.
    
    Example:
        >>> coordinator = UploadCoordinator(MemoryGateway(), on_success=print)
        >>> request = UploadRequest.from_bytes("logo.png", data, "image/png")
        >>> result = await coordinator.upload_one(request, UploadConstraints())
    """
    
    def __init__(
        self,
        gateway: StorageGateway,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        progress_config: Optional[ProgressConfig] = None,
        path_builder: Optional[StoredPathBuilder] = None,
        validator: Optional[UploadValidator] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            gateway: Storage gateway files are stored in
            on_success: Called with the result of each successful single upload
            on_error: Called with the UploadError of each failed gateway call
            on_progress: Subscribed to the tracker of every upload
            progress_config: Heartbeat timing
            path_builder: Stored path builder (one per coordinator by default)
            validator: Constraint validator
        """
        self._gateway = gateway
        self._on_success = on_success
        self._on_error = on_error
        self._on_progress = on_progress
        self._progress_config = progress_config or ProgressConfig()
        self._paths = path_builder or StoredPathBuilder()
        self._validator = validator or UploadValidator()
    
    @property
    def gateway(self) -> StorageGateway:
        return self._gateway
    
    @property
    def validator(self) -> UploadValidator:
        return self._validator
    
    def create_tracker(self) -> ProgressTracker:
        """Create a tracker wired to the coordinator's progress callback."""
        tracker = ProgressTracker(self._progress_config)
        if self._on_progress:
            tracker.on(self._on_progress)
        return tracker
    
    @staticmethod
    def _resolve_folder(
        request: UploadRequest,
        constraints: UploadConstraints
    ) -> Optional[str]:
        return request.destination_folder or constraints.destination_folder
    
    @staticmethod
    async def _invoke(callback: Optional[Callable], value: Any) -> None:
        if callback is None:
            return
        outcome = callback(value)
        if inspect.isawaitable(outcome):
            await outcome
    
    async def upload_one(
        self,
        request: UploadRequest,
        constraints: UploadConstraints,
        progress: Optional[ProgressTracker] = None
    ) -> UploadResult:
        """
        Validate and upload a single file.
        
        Args:
            request: File to upload
            constraints: Size and type limits plus default folder
            progress: Optional tracker to drive (a fresh one otherwise)
            
        Returns:
            UploadResult of the stored file
            
        Raises:
            ValidationError: If the file violates the constraints (gateway untouched)
            UploadError: If the gateway call fails
        """
        self._validator.validate(request, constraints)
        
        path = self._paths.build(
            request.file_name, self._resolve_folder(request, constraints)
        )
        tracker = progress or self.create_tracker()
        size_kb = request.size_bytes / 1024
        logger.info(f"Starting upload: {request.file_name} ({size_kb:.1f} KB) -> {path}")
        
        tracker.start()
        start = time.time()
        try:
            try:
                stored = await self._gateway.store(path, request.data, request.mime_type)
            finally:
                await tracker.stop_ticking()
        except Exception as e:
            tracker.reset()
            error = UploadError(
                f"Failed to upload {request.file_name}: {e}",
                cause=e,
                file_names=[request.file_name]
            )
            logger.error(f"Upload failed after {time.time() - start:.2f}s: {request.file_name}: {e}")
            await self._invoke(self._on_error, error)
            raise error from e
        else:
            tracker.complete()
            result = UploadResult(
                remote_url=stored.url,
                stored_path=stored.path,
                original_file_name=request.file_name
            )
            logger.info(f"Uploaded {request.file_name} in {time.time() - start:.2f}s: {result.remote_url}")
            await self._invoke(self._on_success, result)
            return result
        finally:
            tracker.schedule_reset()
    
    def filter_valid(
        self,
        requests: Sequence[UploadRequest],
        constraints: UploadConstraints
    ) -> List[UploadRequest]:
        """Drop every request that fails validation, keeping input order."""
        valid = []
        for request in requests:
            error = self._validator.check(request, constraints)
            if error is None:
                valid.append(request)
            else:
                logger.debug(f"Skipping {request.file_name}: {error}")
        return valid
    
    async def upload_many(
        self,
        requests: Sequence[UploadRequest],
        constraints: UploadConstraints,
        progress: Optional[ProgressTracker] = None
    ) -> List[UploadResult]:
        """
        Upload several files concurrently, all or nothing.
        
        Files failing validation are dropped before any gateway call.
        Every surviving store call is issued before any is awaited; the
        call waits for all of them to settle. Results follow input order.
        The success callback is not invoked for batches.
        
        Returns:
            One UploadResult per valid file, in input order
            
        Raises:
            UploadError: If any store call fails
        """
        valid = self.filter_valid(requests, constraints)
        if not valid:
            logger.debug("No valid files to upload")
            return []
        
        paths = [
            self._paths.build(r.file_name, self._resolve_folder(r, constraints))
            for r in valid
        ]
        tracker = progress or self.create_tracker()
        logger.info(f"Starting batch upload of {len(valid)} files ({len(requests) - len(valid)} rejected)")
        
        tracker.start(ticking=False)
        start = time.time()
        try:
            outcomes = await asyncio.gather(
                *(
                    self._gateway.store(path, r.data, r.mime_type)
                    for path, r in zip(paths, valid)
                ),
                return_exceptions=True
            )
            failed = [
                (r, outcome) for r, outcome in zip(valid, outcomes)
                if isinstance(outcome, BaseException)
            ]
            if failed:
                tracker.reset()
                cause = failed[0][1]
                names = [r.file_name for r, _ in failed]
                error = UploadError(
                    f"Batch upload failed for {len(failed)} of {len(valid)} files: {cause}",
                    cause=cause,
                    file_names=names
                )
                logger.error(f"Batch upload failed: {', '.join(names)}")
                await self._invoke(self._on_error, error)
                raise error from cause
            
            tracker.complete()
            results = [
                UploadResult(
                    remote_url=stored.url,
                    stored_path=stored.path,
                    original_file_name=r.file_name
                )
                for r, stored in zip(valid, outcomes)
            ]
            logger.info(f"Uploaded {len(results)} files in {time.time() - start:.2f}s")
            return results
        finally:
            tracker.schedule_reset()
