"""Tests for the file selection registry."""
import pytest

from chunkpy.core.exceptions import SelectionLockedError
from chunkpy.core.upload.models import FileSelection
from chunkpy.core.upload.registry import FileSelectionRegistry


@pytest.fixture
def registry():
    return FileSelectionRegistry()


def files(*names):
    return [FileSelection.from_bytes(name, b"data") for name in names]


def test_add_preserves_order(registry):
    registry.add(files("b.txt", "a.txt"))
    registry.add(files("c.txt"))
    
    assert [s.name for s in registry] == ["b.txt", "a.txt", "c.txt"]
    assert len(registry) == 3


def test_add_allows_duplicate_names(registry):
    registry.add(files("same.txt", "same.txt"))
    
    assert len(registry) == 2


def test_remove_by_id(registry):
    first, second = files("a.txt", "a.txt")
    registry.add([first, second])
    
    assert registry.remove(first.id) is True
    assert registry.selections == [second]


def test_remove_unknown_id(registry):
    registry.add(files("a.txt"))
    
    assert registry.remove("missing") is False
    assert len(registry) == 1


def test_selections_is_a_copy(registry):
    registry.add(files("a.txt"))
    registry.selections.clear()
    
    assert len(registry) == 1


def test_locked_registry_rejects_changes(registry):
    selection, = files("a.txt")
    registry.add([selection])
    registry.lock()
    
    with pytest.raises(SelectionLockedError):
        registry.add(files("b.txt"))
    with pytest.raises(SelectionLockedError):
        registry.remove(selection.id)
    
    assert registry.selections == [selection]


def test_frozen_context_unlocks(registry):
    registry.add(files("a.txt"))
    
    with registry.frozen() as snapshot:
        assert registry.is_locked
        assert [s.name for s in snapshot] == ["a.txt"]
    
    assert not registry.is_locked
    registry.add(files("b.txt"))


def test_clear(registry):
    registry.add(files("a.txt", "b.txt"))
    registry.clear()
    
    assert len(registry) == 0
