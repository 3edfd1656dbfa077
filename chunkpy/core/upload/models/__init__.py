"""Upload models."""
from .upload_models import (
    DEFAULT_CHUNK_SIZE,
    FileSelection,
    ChunkDescriptor,
    UploadStatus,
    UploadSession,
    BatchState,
    UploadProgress,
    FileOutcome,
    BatchStatus,
    BatchResult,
    UploadConfig
)

__all__ = [
    'DEFAULT_CHUNK_SIZE',
    'FileSelection',
    'ChunkDescriptor',
    'UploadStatus',
    'UploadSession',
    'BatchState',
    'UploadProgress',
    'FileOutcome',
    'BatchStatus',
    'BatchResult',
    'UploadConfig'
]
