"""Upload services module."""
from .file_service import FileValidator, FileIdGenerator, AsyncFileReader
from .chunk_service import ChunkUploader

__all__ = [
    'FileValidator',
    'FileIdGenerator',
    'AsyncFileReader',
    'ChunkUploader',
]
