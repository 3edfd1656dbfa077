"""
File selection registry.

Holds the ordered queue of files chosen for the next batch.
"""
from contextlib import contextmanager
from typing import Iterable, Iterator, List

from .models import FileSelection
from ..exceptions import SelectionLockedError
from ..logging import get_logger


class FileSelectionRegistry:
    """
    Ordered, mutable selection of files; frozen while a batch runs.

    Example:
        >>> registry = FileSelectionRegistry()
        >>> registry.add([FileSelection.from_bytes("a.txt", b"hello")])
        >>> len(registry)
        1
    """

    def __init__(self):
        self._selections: List[FileSelection] = []
        self._locked = False
        self._logger = get_logger('chunkpy.upload.registry')

    def __len__(self) -> int:
        return len(self._selections)

    def __iter__(self) -> Iterator[FileSelection]:
        return iter(list(self._selections))

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def selections(self) -> List[FileSelection]:
        """Returns a copy of the selection, in insertion order."""
        return list(self._selections)

    def add(self, files: Iterable[FileSelection]) -> None:
        """
        Append files to the end of the selection.

        Raises:
            SelectionLockedError: If a batch is running
        """
        self._ensure_unlocked()
        new_files = list(files)
        self._selections.extend(new_files)
        self._logger.debug(f"Added {len(new_files)} file(s), {len(self._selections)} selected")

    def remove(self, selection_id: str) -> bool:
        """
        Remove a file by its selection id.

        Returns:
            True if a file was removed

        Raises:
            SelectionLockedError: If a batch is running
        """
        self._ensure_unlocked()
        before = len(self._selections)
        self._selections = [s for s in self._selections if s.id != selection_id]
        return len(self._selections) < before

    def clear(self) -> None:
        """Drop every selection. Called by the coordinator after a batch."""
        self._selections = []

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    @contextmanager
    def frozen(self) -> Iterator[List[FileSelection]]:
        """Lock the registry and yield a snapshot of the selection."""
        self.lock()
        try:
            yield self.selections
        finally:
            self.unlock()

    def _ensure_unlocked(self) -> None:
        if self._locked:
            self._logger.warning("Selection change rejected: upload in progress")
            raise SelectionLockedError()
