"""
Upload coordinator.

Orchestrates a batch upload using injected dependencies.
Depends on abstractions (transport, chunking, reader), not concretions.

Failure policy:
- A chunk failure aborts the whole batch: no further chunks, no combine,
  no further files, and the selection is kept.
- A combine failure only fails that file; the batch continues and ends
  with a PARTIAL result.
"""
from typing import Callable, List, Optional

from .models import (
    BatchResult,
    BatchState,
    BatchStatus,
    FileOutcome,
    FileSelection,
    UploadConfig,
    UploadProgress,
    UploadSession,
    UploadStatus,
)
from .progress import compute_overall_percent, snapshot
from .protocols import ChunkingStrategy, FileReaderProtocol, LoggerProtocol, TransportProtocol
from .registry import FileSelectionRegistry
from .services import AsyncFileReader, ChunkUploader, FileIdGenerator
from .strategies import FixedSizeChunkingStrategy
from ..api.events import EventEmitter
from ..exceptions import (
    ChunkPyError,
    ChunkTransmissionError,
    CombineError,
    EmptySelectionError,
    SelectionLockedError,
)
from ..logging import get_logger

module_logger = get_logger('chunkpy.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates the upload of a batch of files.

    Files are processed one at a time, in selection order, and the chunks of
    a file strictly in index order: chunk i+1 is never sent before chunk i
    is acknowledged.

    Events (register with on()):
        batch_start(total_files)
        file_start(session)
        chunk_uploaded(session, chunk)
        progress(UploadProgress)
        file_combined(session)
        combine_failed(session, CombineError)
        batch_aborted(BatchResult)
        batch_complete(BatchResult)

    Example:
        >>> coordinator = UploadCoordinator(transport, registry=registry)
        >>> coordinator.on('progress', lambda p: print(p.overall_percent))
        >>> result = await coordinator.run_batch()
    """

    def __init__(
        self,
        transport: TransportProtocol,
        registry: Optional[FileSelectionRegistry] = None,
        config: Optional[UploadConfig] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        file_reader: Optional[FileReaderProtocol] = None,
        id_generator: Optional[FileIdGenerator] = None,
        logger: Optional[LoggerProtocol] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            transport: Network boundary for chunk and combine requests
            registry: Selection used when run_batch() gets no explicit files
            config: Upload configuration (chunk size)
            chunking_strategy: Strategy for chunking files
            file_reader: Reader for chunk bytes
            id_generator: Builds unique upload identifiers
            logger: Logger instance (defaults to the module logger)
            progress_callback: Optional callback for progress updates
        """
        self._transport = transport
        self._registry = registry
        self._config = config or UploadConfig()
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy(self._config.chunk_size)
        self._file_reader = file_reader or AsyncFileReader()
        self._ids = id_generator or FileIdGenerator()
        self._logger = logger or module_logger
        self._uploader = ChunkUploader(transport)
        self._progress_callback = progress_callback
        self._events = EventEmitter('chunkpy.upload.events')
        self._state = BatchState()
        self._running = False

    @property
    def state(self) -> BatchState:
        """Current batch state (read-only use)."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    def on(self, event: str, callback: Callable) -> 'UploadCoordinator':
        """Register an event handler."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadCoordinator':
        """Remove an event handler."""
        self._events.off(event, callback)
        return self

    async def run_batch(
        self,
        selections: Optional[List[FileSelection]] = None
    ) -> BatchResult:
        """
        Upload every file of a batch.

        Args:
            selections: Files to upload. Defaults to the registry's
                selection, which is then cleared once the batch completes.

        Returns:
            COMPLETED or PARTIAL result (NOTHING_TO_DO for an empty batch)

        Raises:
            ChunkTransmissionError: If any chunk fails; the batch is aborted
            SplitError: If a chunk plan cannot be computed
            SelectionLockedError: If a batch is already running
        """
        if self._running:
            raise SelectionLockedError("An upload is already running")

        from_registry = selections is None
        if from_registry:
            selections = self._registry.selections if self._registry is not None else []
        selections = list(selections)

        if not selections:
            error = EmptySelectionError()
            self._logger.warning(f"Nothing to upload: {error}")
            return BatchResult(status=BatchStatus.NOTHING_TO_DO, total_files=0, error=error)

        total_files = len(selections)
        self._running = True
        if self._registry is not None:
            self._registry.lock()
        try:
            self._state.reset(total_files)
            self._logger.info(f"Starting batch upload of {total_files} file(s)")
            self._events.emit('batch_start', total_files)

            outcomes: List[FileOutcome] = []
            for selection in selections:
                try:
                    outcomes.append(await self._upload_file(selection))
                except ChunkTransmissionError as e:
                    outcomes.append(self._outcome(self._state.current, error=e))
                    result = BatchResult(
                        status=BatchStatus.ABORTED,
                        total_files=total_files,
                        outcomes=outcomes,
                        error=e
                    )
                    self._logger.error(
                        f"Batch aborted on {e.file_name} chunk {e.chunk_index}; "
                        f"{result.not_attempted} file(s) not attempted"
                    )
                    self._events.emit('batch_aborted', result)
                    raise
        finally:
            if self._registry is not None:
                self._registry.unlock()
            self._running = False

        result = self._finish(outcomes, total_files)
        if from_registry and self._registry is not None:
            self._registry.clear()
        self._events.emit('batch_complete', result)
        return result

    async def _upload_file(self, selection: FileSelection) -> FileOutcome:
        """Upload all chunks of one file, then combine it."""
        file_id = self._ids.next_id(selection.name)
        chunks = self._chunking.calculate_chunks(selection.byte_length)
        session = UploadSession(
            file_id=file_id,
            file_name=selection.base_name,
            chunks=chunks,
            selection=selection
        )
        self._state.sessions.append(session)

        file_size_mb = selection.byte_length / (1024 * 1024)
        self._logger.info(f"Uploading {selection.name} ({file_size_mb:.2f} MB) in {session.total_chunks} chunk(s) as {file_id}")
        self._events.emit('file_start', session)

        session.transition(UploadStatus.UPLOADING_CHUNKS)
        try:
            await self._upload_chunks(session)
        except ChunkTransmissionError:
            session.transition(UploadStatus.FAILED)
            raise

        session.transition(UploadStatus.COMBINING)
        try:
            url = await self._transport.combine(file_id)
        except ChunkPyError as e:
            session.transition(UploadStatus.FAILED)
            error = CombineError(selection.name, file_id, reason=str(e))
            self._logger.error(f"Error combining chunks for {selection.name}: {e}")
            self._events.emit('combine_failed', session, error)
            return self._outcome(session, error=error)

        session.url = url
        session.transition(UploadStatus.COMPLETED)
        self._state.completed_files += 1
        self._logger.info(f"File {selection.name} combined successfully: {url}")
        self._events.emit('file_combined', session)
        return self._outcome(session)

    async def _upload_chunks(self, session: UploadSession) -> None:
        """
        Send the chunks of a session one after the other.

        Progress is recomputed and published after every acknowledgment.
        """
        selection = session.selection
        has_file_management = (
            not selection.is_in_memory
            and hasattr(self._file_reader, 'open_file')
            and hasattr(self._file_reader, 'close_file')
        )
        if has_file_management:
            try:
                await self._file_reader.open_file(selection.content)
            except OSError as e:
                raise ChunkTransmissionError(
                    selection.name, session.file_id, 0, reason=f"could not open file: {e}"
                ) from e
        try:
            for chunk in session.chunks:
                data = await self._file_reader.read_chunk(selection, chunk)
                if data is None:
                    raise ChunkTransmissionError(
                        selection.name,
                        session.file_id,
                        chunk.index,
                        reason="could not read chunk data"
                    )

                await self._uploader.upload_chunk(session, chunk, data)
                session.acknowledge()
                self._publish_progress(session)
                self._events.emit('chunk_uploaded', session, chunk)
        finally:
            if has_file_management:
                await self._file_reader.close_file()

        self._logger.debug(f"All {session.total_chunks} chunk(s) of {session.file_id} acknowledged")

    def _publish_progress(self, session: UploadSession) -> None:
        self._state.overall_percent = compute_overall_percent(
            self._state.completed_files,
            session.acknowledged,
            session.total_chunks,
            self._state.total_files
        )
        progress = snapshot(self._state)
        self._events.emit('progress', progress)
        if self._progress_callback:
            self._progress_callback(progress)

    def _finish(self, outcomes: List[FileOutcome], total_files: int) -> BatchResult:
        failed = [o for o in outcomes if not o.succeeded]
        if failed:
            names = ', '.join(o.name for o in failed)
            self._logger.warning(
                f"Batch finished: {total_files - len(failed)} of {total_files} file(s) combined; "
                f"combine failed for: {names}"
            )
            status = BatchStatus.PARTIAL
        else:
            self._logger.info(f"All {total_files} files uploaded and combined successfully")
            status = BatchStatus.COMPLETED
        return BatchResult(status=status, total_files=total_files, outcomes=outcomes)

    @staticmethod
    def _outcome(session: UploadSession, error=None) -> FileOutcome:
        return FileOutcome(
            selection_id=session.selection.id,
            name=session.selection.name,
            file_id=session.file_id,
            status=session.status,
            chunks_sent=session.acknowledged,
            total_chunks=session.total_chunks,
            url=session.url,
            error=error
        )
