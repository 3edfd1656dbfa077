"""
Chunking strategies for file uploads.

Implements Strategy Pattern for chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkDescriptor, DEFAULT_CHUNK_SIZE
from ...exceptions import SplitError


def split(byte_length: int, chunk_size: int) -> List[ChunkDescriptor]:
    """
    Split a file into fixed-size chunks.

    A zero-byte file yields exactly one empty chunk so that it is still
    transmitted and combined like any other file.

    Args:
        byte_length: Total file size in bytes
        chunk_size: Size of every chunk but the last

    Returns:
        Ordered list of chunk descriptors

    Raises:
        SplitError: If chunk_size <= 0 or byte_length < 0

    Example:
        >>> [(c.offset, c.length) for c in split(2500, 1000)]
        [(0, 1000), (1000, 1000), (2000, 500)]
    """
    if chunk_size <= 0:
        raise SplitError(f"Chunk size must be positive, got {chunk_size}")
    if byte_length < 0:
        raise SplitError(f"File size must not be negative, got {byte_length}")

    if byte_length == 0:
        return [ChunkDescriptor(index=0, offset=0, length=0)]

    total_chunks = -(-byte_length // chunk_size)
    return [
        ChunkDescriptor(
            index=index,
            offset=index * chunk_size,
            length=min(chunk_size, byte_length - index * chunk_size)
        )
        for index in range(total_chunks)
    ]


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[ChunkDescriptor]:
        """Calculate chunk boundaries."""
        pass


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """Fixed-size chunking strategy (5MB by default)."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes

        Raises:
            SplitError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise SplitError(f"Chunk size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def calculate_chunks(self, file_size: int) -> List[ChunkDescriptor]:
        return split(file_size, self.chunk_size)
