"""
chunkpy - Async Python client for chunked batch uploads.

Usage:
    >>> from chunkpy import UploadClient
    >>>
    >>> async with UploadClient() as client:
    ...     client.add_files("big.iso")
    ...     result = await client.upload(lambda p: print(p.overall_percent))
"""
import logging
from .client import UploadClient

# Configuration
from .core.api import (
    TransportConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    HttpTransport
)

# Upload
from .core.upload import (
    UploadCoordinator,
    FileSelectionRegistry,
    FileSelection,
    UploadConfig,
    UploadProgress,
    BatchResult,
    BatchStatus,
    split,
    compute_overall_percent
)

# Errors
from .core.exceptions import (
    ChunkPyError,
    SplitError,
    TransportError,
    ChunkTransmissionError,
    CombineError,
    EmptySelectionError,
    SelectionLockedError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for chunkpy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'chunkpy',
        'chunkpy.client',
        'chunkpy.api.transport',
        'chunkpy.upload',
        'chunkpy.upload.coordinator',
        'chunkpy.upload.chunk',
        'chunkpy.upload.file',
        'chunkpy.upload.registry',
        'chunkpy.upload.events',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'UploadClient',
    'UploadCoordinator',
    'FileSelectionRegistry',
    'FileSelection',
    'UploadConfig',
    'UploadProgress',
    'BatchResult',
    'BatchStatus',
    'split',
    'compute_overall_percent',
    'TransportConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'HttpTransport',
    'ChunkPyError',
    'SplitError',
    'TransportError',
    'ChunkTransmissionError',
    'CombineError',
    'EmptySelectionError',
    'SelectionLockedError',
    'setup_logging',
]
