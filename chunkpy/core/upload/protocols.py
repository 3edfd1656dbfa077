"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, List, Optional

from .models import ChunkDescriptor, FileSelection


class ChunkingStrategy(Protocol):
    """
    Protocol for file chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def calculate_chunks(self, file_size: int) -> List[ChunkDescriptor]:
        """
        Calculate chunk boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            Ordered list of chunk descriptors covering the file
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for reading chunk bytes out of a selection."""

    async def read_chunk(
        self,
        selection: FileSelection,
        chunk: ChunkDescriptor
    ) -> Optional[bytes]:
        """
        Read the bytes of one chunk.

        Returns:
            Chunk data or None if reading failed
        """
        ...


class TransportProtocol(Protocol):
    """
    Protocol for the network boundary.

    Any failure is reported by raising; the coordinator does not retry.
    """

    async def upload_chunk(
        self,
        file_id: str,
        chunk_index: int,
        total_chunks: int,
        file_name: str,
        chunk: bytes
    ) -> None:
        """
        Upload a single chunk.

        Args:
            file_id: Upload identifier of the file
            chunk_index: Index of the chunk
            total_chunks: Number of chunks in the file
            file_name: File name without extension
            chunk: Chunk data
        """
        ...

    async def combine(self, file_id: str) -> str:
        """
        Request server-side reassembly of a file.

        Returns:
            URL of the combined file
        """
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
