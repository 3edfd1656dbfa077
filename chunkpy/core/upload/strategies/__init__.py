"""Upload strategies module."""
from .chunking import split, BaseChunkingStrategy, FixedSizeChunkingStrategy

__all__ = [
    'split',
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
]
