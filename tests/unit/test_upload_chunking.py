"""Tests for chunking strategies."""
import math

import pytest

from chunkpy.core.exceptions import SplitError
from chunkpy.core.upload.models import ChunkDescriptor, DEFAULT_CHUNK_SIZE
from chunkpy.core.upload.strategies.chunking import (
    split,
    FixedSizeChunkingStrategy
)

MB = 1024 * 1024


class TestSplit:
    """Test suite for split()."""
    
    def test_empty_file_yields_one_empty_chunk(self):
        """Test zero-byte file gives exactly one zero-length chunk."""
        assert split(0, 1000) == [ChunkDescriptor(index=0, offset=0, length=0)]
    
    def test_file_smaller_than_chunk(self):
        """Test file smaller than chunk size."""
        assert split(500, 1000) == [ChunkDescriptor(0, 0, 500)]
    
    def test_file_exact_multiple(self):
        """Test file size exact multiple of chunk size."""
        chunks = split(3000, 1000)
        
        assert [(c.offset, c.length) for c in chunks] == [(0, 1000), (1000, 1000), (2000, 1000)]
    
    def test_file_not_exact_multiple(self):
        """Test last chunk holds the remainder."""
        chunks = split(2500, 1000)
        
        assert [(c.offset, c.length) for c in chunks] == [(0, 1000), (1000, 1000), (2000, 500)]
    
    def test_twelve_mb_at_five_mb(self):
        """Test 12 MB file split at 5 MB."""
        chunks = split(12 * MB, 5 * MB)
        
        assert [c.length for c in chunks] == [5 * MB, 5 * MB, 2 * MB]
    
    @pytest.mark.parametrize("size,chunk_size", [
        (1, 1), (1, 7), (7, 7), (8, 7), (999, 10), (10_000, 333), (5 * MB + 1, MB),
    ])
    def test_plan_covers_file(self, size, chunk_size):
        """Test count, indices, lengths and contiguity."""
        chunks = split(size, chunk_size)
        n = math.ceil(size / chunk_size)
        
        assert len(chunks) == n
        assert [c.index for c in chunks] == list(range(n))
        assert all(c.length == chunk_size for c in chunks[:-1])
        assert chunks[-1].length == size - (n - 1) * chunk_size
        assert chunks[0].offset == 0
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.end == nxt.offset
        assert chunks[-1].end == size
    
    def test_invalid_chunk_size(self):
        """Test non-positive chunk size raises SplitError."""
        with pytest.raises(SplitError):
            split(100, 0)
        
        with pytest.raises(SplitError):
            split(100, -5)
    
    def test_negative_length(self):
        """Test negative file size raises SplitError."""
        with pytest.raises(SplitError):
            split(-1, 10)
    
    def test_deterministic(self):
        """Test same input gives same plan."""
        assert split(12345, 1000) == split(12345, 1000)


class TestFixedSizeChunkingStrategy:
    """Test suite for FixedSizeChunkingStrategy."""
    
    def test_default_chunk_size(self):
        """Test default 5MB chunk size."""
        strategy = FixedSizeChunkingStrategy()
        assert strategy.chunk_size == DEFAULT_CHUNK_SIZE == 5 * MB
    
    def test_custom_chunk_size(self):
        """Test custom chunk size."""
        strategy = FixedSizeChunkingStrategy(chunk_size=512 * 1024)
        assert strategy.chunk_size == 512 * 1024
    
    def test_invalid_chunk_size(self):
        """Test invalid chunk size raises error."""
        with pytest.raises(SplitError):
            FixedSizeChunkingStrategy(chunk_size=0)
    
    def test_calculate_chunks_delegates_to_split(self):
        """Test strategy returns the same plan as split()."""
        strategy = FixedSizeChunkingStrategy(chunk_size=1000)
        assert strategy.calculate_chunks(2500) == split(2500, 1000)
