"""
Local file services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union

import aiofiles

from ...logging import get_logger


class FileValidator:
    """
    Checks local files before they are turned into upload requests.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a local file.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        
        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")
        
        return path, path.stat().st_size


class AsyncFileReader:
    """
    Asynchronous file reader.
    
    Uses aiofiles for non-blocking I/O operations.
    """
    
    def __init__(self):
        self._logger = get_logger('blobpanel.upload.file')
    
    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.
        
        Args:
            file_path: Path to the file
            
        Returns:
            File data
            
        Raises:
            OSError: If the file cannot be read
        """
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                data = await f.read()
        except OSError as e:
            self._logger.error(f"Failed to read {file_path}: {e}")
            raise
        self._logger.debug(f"Read {file_path} ({len(data)} bytes)")
        return data
