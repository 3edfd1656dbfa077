"""
Chunk upload service.

Sends individual chunks through the transport and reports failures with the
file and chunk they belong to.
"""
import time

from ..models import ChunkDescriptor, UploadSession
from ..protocols import TransportProtocol
from ...exceptions import ChunkTransmissionError
from ...logging import get_logger


class ChunkUploader:
    """
    Uploads the chunks of one session through a transport.

    Responsibilities:
    - Send chunk bytes with the session's identity
    - Time each request
    - Turn any transport failure into a ChunkTransmissionError
    """

    def __init__(self, transport: TransportProtocol):
        """
        Initialize chunk uploader.

        Args:
            transport: Network boundary used for every request
        """
        self._transport = transport
        self._logger = get_logger('chunkpy.upload.chunk')

    async def upload_chunk(
        self,
        session: UploadSession,
        chunk: ChunkDescriptor,
        data: bytes
    ) -> None:
        """
        Upload a single chunk and wait for the acknowledgment.

        Args:
            session: Session the chunk belongs to
            chunk: Descriptor of the chunk
            data: Chunk bytes

        Raises:
            ChunkTransmissionError: If the transport fails
        """
        chunk_size_kb = len(data) / 1024
        upload_start = time.time()
        self._logger.debug(
            f"Uploading chunk {chunk.index} of {session.file_id} at offset {chunk.offset} ({chunk_size_kb:.1f} KB)"
        )

        try:
            await self._transport.upload_chunk(
                session.file_id,
                chunk.index,
                session.total_chunks,
                session.file_name,
                data
            )
        except Exception as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"Chunk {chunk.index} of {session.file_id} failed after {upload_time:.2f}s: {e}")
            raise ChunkTransmissionError(
                session.selection.name,
                session.file_id,
                chunk.index,
                reason=str(e)
            ) from e

        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(f"Chunk {chunk.index} uploaded in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)")
