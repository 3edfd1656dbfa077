"""Command-line interface for chunkpy."""
