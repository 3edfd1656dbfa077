"""
Custom exceptions for chunked upload operations.

This module defines exception classes raised by the splitter, the transport
and the upload coordinator.
"""
from typing import Optional


class ChunkPyError(Exception):
    """Base exception for all chunkpy errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class SplitError(ChunkPyError):
    """Exception raised when a chunk plan cannot be computed."""
    pass


class TransportError(ChunkPyError):
    """Exception raised by the transport for any failed request."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code (if a response was received)
        """
        self.status = status
        super().__init__(message, error_code=status)


class ChunkTransmissionError(ChunkPyError):
    """
    Exception raised when a chunk could not be transmitted.

    Fatal to the whole batch: no further chunks or files are attempted.
    """

    def __init__(
        self,
        file_name: str,
        file_id: str,
        chunk_index: int,
        reason: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            file_name: Name of the file being uploaded
            file_id: Upload identifier of the file
            chunk_index: Index of the chunk that failed
            reason: Underlying failure description
        """
        self.file_name = file_name
        self.file_id = file_id
        self.chunk_index = chunk_index
        self.reason = reason
        message = f"Upload failed on chunk {chunk_index} of file {file_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CombineError(ChunkPyError):
    """
    Exception recorded when the server could not reassemble a file.

    Only fatal to the file it names; the batch continues.
    """

    def __init__(
        self,
        file_name: str,
        file_id: str,
        reason: Optional[str] = None
    ) -> None:
        self.file_name = file_name
        self.file_id = file_id
        self.reason = reason
        message = f"File combination failed for {file_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EmptySelectionError(ChunkPyError):
    """Raised (as a report, not a failure) when a batch has no files."""

    def __init__(self, message: str = "Please select files first") -> None:
        super().__init__(message)


class SelectionLockedError(ChunkPyError):
    """Exception raised when the selection is mutated during an upload."""

    def __init__(self, message: str = "Cannot change selection while an upload is running") -> None:
        super().__init__(message)
