"""
File validation, identity and reading services.

Single Responsibility: Each class handles one specific task.
"""
import re
import time
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import aiofiles

from ..models import ChunkDescriptor, FileSelection
from ...logging import get_logger

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9]')


class FileValidator:
    """
    Validates files before they are added to a selection.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size

    def to_selection(self, file_path: Union[str, Path]) -> FileSelection:
        """Validate a path and wrap it as a path-backed selection."""
        path, size = self.validate(file_path)
        return FileSelection(name=path.name, byte_length=size, content=path)


class FileIdGenerator:
    """
    Builds upload identifiers: '<timestamp ms>_<alphanumeric name>'.

    Timestamps are forced strictly increasing, so two files uploaded in the
    same millisecond (or with the same name) never share an identifier.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            clock: Returns the current time in milliseconds
        """
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0

    @staticmethod
    def sanitize(name: str) -> str:
        """Keep only ASCII letters and digits."""
        return _UNSAFE_CHARS.sub('', name)

    def next_id(self, name: str) -> str:
        timestamp = max(self._clock(), self._last + 1)
        self._last = timestamp
        return f"{timestamp}_{self.sanitize(name)}"


class AsyncFileReader:
    """
    Asynchronous reader for chunk byte ranges.

    Path-backed selections are read with aiofiles; the handle is kept open
    between chunks of the same file. In-memory selections are sliced.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = get_logger('chunkpy.upload.file')
        self._file_handle = None
        self._current_file_path: Optional[Path] = None

    async def open_file(self, file_path: Path) -> None:
        """
        Open file for reading. Call this before reading chunks.

        Args:
            file_path: Path to the file to open
        """
        if self._file_handle is not None and self._current_file_path == file_path:
            return

        if self._file_handle is not None:
            await self.close_file()

        self._file_handle = await aiofiles.open(file_path, 'rb')
        self._current_file_path = file_path

    async def close_file(self) -> None:
        """Close the currently open file."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None
            self._current_file_path = None

    async def read_chunk(
        self,
        selection: FileSelection,
        chunk: ChunkDescriptor
    ) -> Optional[bytes]:
        """
        Read the bytes of one chunk.

        Args:
            selection: Selection to read from
            chunk: Byte range to read

        Returns:
            Chunk data, or None if reading failed or returned fewer bytes
            than planned (e.g. the file shrank after selection)
        """
        if selection.is_in_memory:
            data = bytes(selection.content[chunk.offset:chunk.end])
        else:
            data = await self._read_range(Path(selection.content), chunk)
            if data is None:
                return None

        if len(data) != chunk.length:
            self._logger.error(
                f"Short read for chunk {chunk.index} of {selection.name}: "
                f"expected {chunk.length} bytes, got {len(data)}"
            )
            return None

        self._logger.debug(f"Read chunk: {chunk.offset}-{chunk.end} ({len(data)} bytes)")
        return data

    async def _read_range(self, file_path: Path, chunk: ChunkDescriptor) -> Optional[bytes]:
        try:
            if self._file_handle is not None and self._current_file_path == file_path:
                await self._file_handle.seek(chunk.offset)
                return await self._file_handle.read(chunk.length)
            async with aiofiles.open(file_path, 'rb') as f:
                await f.seek(chunk.offset)
                return await f.read(chunk.length)
        except (IOError, OSError) as e:
            self._logger.error(f"Failed to read chunk {chunk.offset}-{chunk.end}: {e}")
            return None
