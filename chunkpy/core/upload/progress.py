"""Overall progress computation for a batch of files."""
from .models import BatchState, UploadProgress


def compute_overall_percent(
    completed_files: int,
    acknowledged: int,
    total_chunks: int,
    total_files: int
) -> int:
    """
    Compute the batch progress as an integer percentage.

    round(100 * (completed_files + acknowledged / total_chunks) / total_files),
    clamped to [0, 100].

    Example:
        >>> compute_overall_percent(0, 1, 3, 1)
        33
    """
    if total_files <= 0:
        return 0
    fraction = acknowledged / total_chunks if total_chunks > 0 else 0.0
    percent = round(100 * (completed_files + fraction) / total_files)
    return max(0, min(100, percent))


def snapshot(state: BatchState) -> UploadProgress:
    """Build the progress snapshot published to observers."""
    session = state.current
    if session is None:
        return UploadProgress(
            overall_percent=state.overall_percent,
            completed_files=state.completed_files,
            total_files=state.total_files
        )
    return UploadProgress(
        overall_percent=state.overall_percent,
        completed_files=state.completed_files,
        total_files=state.total_files,
        file_name=session.selection.name,
        acknowledged=session.acknowledged,
        total_chunks=session.total_chunks,
        uploaded_bytes=session.uploaded_bytes,
        total_bytes=session.selection.byte_length
    )
