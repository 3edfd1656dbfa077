"""
Upload module for chunked batch uploads.

Splits files into fixed-size chunks, sends them one by one through a
transport and asks the server to combine them.
"""
from .coordinator import UploadCoordinator
from .registry import FileSelectionRegistry
from .progress import compute_overall_percent
from .models import (
    FileSelection,
    ChunkDescriptor,
    UploadStatus,
    UploadSession,
    BatchState,
    BatchStatus,
    BatchResult,
    FileOutcome,
    UploadConfig,
    UploadProgress
)
from .protocols import (
    ChunkingStrategy,
    FileReaderProtocol,
    TransportProtocol
)
from .strategies import split, FixedSizeChunkingStrategy

__all__ = [
    # Main classes
    'UploadCoordinator',
    'FileSelectionRegistry',
    
    # Splitting and progress
    'split',
    'FixedSizeChunkingStrategy',
    'compute_overall_percent',
    
    # Models
    'FileSelection',
    'ChunkDescriptor',
    'UploadStatus',
    'UploadSession',
    'BatchState',
    'BatchStatus',
    'BatchResult',
    'FileOutcome',
    'UploadConfig',
    'UploadProgress',
    
    # Protocols
    'ChunkingStrategy',
    'FileReaderProtocol',
    'TransportProtocol',
]
