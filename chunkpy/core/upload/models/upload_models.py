"""
Data models for upload module.

Uses dataclasses for type-safe data structures. Immutable where the value
never changes once computed (selections, chunk descriptors, results).
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, FrozenSet, List, Optional, Union
import uuid

from ...exceptions import ChunkPyError, SplitError

DEFAULT_CHUNK_SIZE = 5 * 1024 * 1024  # 5MB


@dataclass(frozen=True)
class FileSelection:
    """
    A file chosen for upload.

    Attributes:
        name: File name including extension
        byte_length: Size of the content in bytes
        content: In-memory bytes or a path read by range at upload time
        id: Opaque handle, unique per selection (even for equal names)
    """
    name: str
    byte_length: int
    content: Union[bytes, Path]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if self.byte_length < 0:
            raise ValueError(f"byte_length must be >= 0, got {self.byte_length}")

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> 'FileSelection':
        """Create a selection backed by in-memory data."""
        return cls(name=name, byte_length=len(data), content=bytes(data))

    @property
    def base_name(self) -> str:
        """File name without its last extension ('a.tar.gz' -> 'a.tar')."""
        return PurePath(self.name).stem

    @property
    def is_in_memory(self) -> bool:
        return isinstance(self.content, (bytes, bytearray))


@dataclass(frozen=True)
class ChunkDescriptor:
    """
    Byte range of one chunk.

    Attributes:
        index: Chunk index, starting at 0
        offset: Start position in bytes
        length: Chunk size in bytes (0 only for the single chunk of an empty file)
    """
    index: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        """Returns the exclusive end position."""
        return self.offset + self.length


class UploadStatus(str, Enum):
    """Status of a per-file upload session."""
    PENDING = 'pending'
    UPLOADING_CHUNKS = 'uploading_chunks'
    COMBINING = 'combining'
    COMPLETED = 'completed'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (UploadStatus.COMPLETED, UploadStatus.FAILED)


_TRANSITIONS: Dict[UploadStatus, FrozenSet[UploadStatus]] = {
    UploadStatus.PENDING: frozenset({UploadStatus.UPLOADING_CHUNKS, UploadStatus.FAILED}),
    UploadStatus.UPLOADING_CHUNKS: frozenset({UploadStatus.COMBINING, UploadStatus.FAILED}),
    UploadStatus.COMBINING: frozenset({UploadStatus.COMPLETED, UploadStatus.FAILED}),
    UploadStatus.COMPLETED: frozenset(),
    UploadStatus.FAILED: frozenset(),
}


@dataclass
class UploadSession:
    """
    Per-file upload state.

    Status moves PENDING -> UPLOADING_CHUNKS -> COMBINING -> COMPLETED,
    with FAILED reachable from any non-terminal status.

    Attributes:
        file_id: Unique upload identifier within the batch
        file_name: File name without extension, as sent to the server
        chunks: Chunk plan computed once for this session
        selection: The selection being uploaded
        acknowledged: Number of chunks acknowledged by the server
        status: Current status
        url: URL returned by a successful combine
    """
    file_id: str
    file_name: str
    chunks: List[ChunkDescriptor]
    selection: FileSelection
    acknowledged: int = 0
    status: UploadStatus = UploadStatus.PENDING
    url: Optional[str] = None

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def fraction(self) -> float:
        """Fraction of chunks acknowledged, in [0, 1]."""
        if self.total_chunks == 0:
            return 1.0
        return self.acknowledged / self.total_chunks

    @property
    def uploaded_bytes(self) -> int:
        return sum(chunk.length for chunk in self.chunks[:self.acknowledged])

    def transition(self, status: UploadStatus) -> None:
        """
        Move to a new status.

        Raises:
            ValueError: If the transition is not allowed
        """
        if status not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid session transition {self.status.value} -> {status.value} for {self.file_id}"
            )
        self.status = status

    def acknowledge(self) -> int:
        """
        Record one more acknowledged chunk.

        Returns:
            New acknowledged count
        """
        if self.status is not UploadStatus.UPLOADING_CHUNKS:
            raise ValueError(f"Cannot acknowledge chunks while {self.status.value}")
        if self.acknowledged >= self.total_chunks:
            raise ValueError(f"All {self.total_chunks} chunks already acknowledged for {self.file_id}")
        self.acknowledged += 1
        return self.acknowledged


@dataclass
class BatchState:
    """
    Mutable state of one batch run, owned by the coordinator.

    Attributes:
        sessions: Sessions created so far, in selection order
        completed_files: Files whose combine succeeded
        total_files: Number of files in the batch
        overall_percent: Last published overall progress (0-100)
    """
    total_files: int = 0
    sessions: List[UploadSession] = field(default_factory=list)
    completed_files: int = 0
    overall_percent: int = 0

    @property
    def current(self) -> Optional[UploadSession]:
        """Returns the session being processed, if any."""
        return self.sessions[-1] if self.sessions else None

    def reset(self, total_files: int) -> None:
        """Start a new batch."""
        self.total_files = total_files
        self.sessions = []
        self.completed_files = 0
        self.overall_percent = 0


@dataclass(frozen=True)
class UploadProgress:
    """
    Progress snapshot published after every acknowledged chunk.

    Attributes:
        overall_percent: Progress of the whole batch (0-100)
        completed_files: Files fully uploaded and combined
        total_files: Number of files in the batch
        file_name: Name of the file being uploaded
        acknowledged: Chunks acknowledged for that file
        total_chunks: Chunks planned for that file
        uploaded_bytes: Bytes acknowledged for that file
        total_bytes: Size of that file
    """
    overall_percent: int
    completed_files: int
    total_files: int
    file_name: str = ''
    acknowledged: int = 0
    total_chunks: int = 0
    uploaded_bytes: int = 0
    total_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns overall progress as percentage."""
        return float(self.overall_percent)

    @property
    def is_complete(self) -> bool:
        return self.overall_percent >= 100


@dataclass(frozen=True)
class FileOutcome:
    """Final outcome of one file in a batch."""
    selection_id: str
    name: str
    file_id: str
    status: UploadStatus
    chunks_sent: int
    total_chunks: int
    url: Optional[str] = None
    error: Optional[ChunkPyError] = None

    @property
    def succeeded(self) -> bool:
        return self.status is UploadStatus.COMPLETED


class BatchStatus(str, Enum):
    """Overall status of a batch run."""
    NOTHING_TO_DO = 'nothing_to_do'
    COMPLETED = 'completed'
    PARTIAL = 'partial'
    ABORTED = 'aborted'


@dataclass(frozen=True)
class BatchResult:
    """
    Result of a batch run.

    PARTIAL means every chunk was sent but some files were not combined;
    ABORTED means some chunks were never attempted.
    """
    status: BatchStatus
    total_files: int
    outcomes: List[FileOutcome] = field(default_factory=list)
    error: Optional[ChunkPyError] = None

    @property
    def success(self) -> bool:
        return self.status is BatchStatus.COMPLETED

    @property
    def completed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def combine_failures(self) -> List[FileOutcome]:
        return [
            o for o in self.outcomes
            if o.status is UploadStatus.FAILED and o.chunks_sent == o.total_chunks
        ]

    @property
    def not_attempted(self) -> int:
        """Number of files never started (only non-zero when aborted)."""
        return self.total_files - len(self.outcomes)


@dataclass
class UploadConfig:
    """
    Configuration for a batch upload.

    Attributes:
        chunk_size: Size of every chunk but the last, in bytes
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise SplitError(f"Chunk size must be a positive integer, got {self.chunk_size!r}")
