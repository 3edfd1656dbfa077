"""
UploadClient - High-level async client for chunked uploads.

Example:
    >>> async with UploadClient(TransportConfig(base_url="http://127.0.0.1:8000")) as client:
    ...     client.add_files("video.mp4", "report.pdf")
    ...     result = await client.upload()
    ...     for outcome in result.completed:
    ...         print(outcome.name, outcome.url)
"""
from pathlib import Path
from typing import Callable, List, Optional, Union

from .core.api import HttpTransport, TransportConfig
from .core.logging import get_logger
from .core.upload import (
    BatchResult,
    FileSelection,
    FileSelectionRegistry,
    TransportProtocol,
    UploadConfig,
    UploadCoordinator,
    UploadProgress,
)
from .core.upload.services import FileValidator


class UploadClient:
    """
    High-level async client owning a transport, a selection and a coordinator.

    Files are added to the selection first, then uploaded together as one
    batch. The selection is frozen while the batch runs and cleared when it
    completes.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        *,
        upload_config: Optional[UploadConfig] = None,
        transport: Optional[TransportProtocol] = None
    ):
        """
        Initialize upload client.

        Args:
            config: Transport configuration (ignored if transport is given)
            upload_config: Upload configuration (chunk size)
            transport: Custom transport; an HttpTransport is created otherwise
        """
        self._config = config or TransportConfig.default()
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(self._config)
        self._registry = FileSelectionRegistry()
        self._validator = FileValidator()
        self._coordinator = UploadCoordinator(
            self._transport,
            registry=self._registry,
            config=upload_config or UploadConfig()
        )
        self._logger = get_logger('chunkpy.client')

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'UploadClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and hasattr(self._transport, 'close'):
            await self._transport.close()

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def selections(self) -> List[FileSelection]:
        return self._registry.selections

    @property
    def is_uploading(self) -> bool:
        """Busy flag: True while a batch is running."""
        return self._coordinator.is_running

    def add_files(self, *paths: Union[str, Path]) -> List[FileSelection]:
        """
        Add local files to the selection.

        Raises:
            FileNotFoundError: If a file doesn't exist
            ValueError: If a path is not a regular file
            SelectionLockedError: If a batch is running
        """
        new_files = [self._validator.to_selection(path) for path in paths]
        self._registry.add(new_files)
        return new_files

    def add_bytes(self, name: str, data: bytes) -> FileSelection:
        """Add in-memory content to the selection."""
        selection = FileSelection.from_bytes(name, data)
        self._registry.add([selection])
        return selection

    def remove(self, selection_id: str) -> bool:
        """Remove a file from the selection by its id."""
        return self._registry.remove(selection_id)

    # =========================================================================
    # Upload
    # =========================================================================

    def on(self, event: str, callback: Callable) -> 'UploadClient':
        """Register a coordinator event handler."""
        self._coordinator.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadClient':
        """Remove a coordinator event handler."""
        self._coordinator.off(event, callback)
        return self

    async def upload(
        self,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> BatchResult:
        """
        Upload the current selection as one batch.

        Args:
            progress_callback: Called with an UploadProgress after every chunk

        Returns:
            Batch result (COMPLETED, PARTIAL or NOTHING_TO_DO)

        Raises:
            ChunkTransmissionError: If a chunk fails (selection is kept)
        """
        if progress_callback:
            self._coordinator.on('progress', progress_callback)
        try:
            return await self._coordinator.run_batch()
        finally:
            if progress_callback:
                self._coordinator.off('progress', progress_callback)
