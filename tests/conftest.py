"""Pytest fixtures for chunkpy tests."""
import asyncio

import pytest

from chunkpy.core.exceptions import TransportError


class RecordingTransport:
    """
    In-process transport that records every request.

    Failures are injected by (file_name_without_extension, chunk_index) for
    chunks and by sanitized file name for combine.
    """

    def __init__(self):
        self.calls = []
        self.received = {}
        self.chunk_failures = set()
        self.combine_failures = set()
        self.in_flight = 0
        self.max_in_flight = 0

    async def upload_chunk(self, file_id, chunk_index, total_chunks, file_name, chunk):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            self.calls.append(('chunk', file_id, chunk_index, total_chunks, file_name, len(chunk)))
            if (file_name, chunk_index) in self.chunk_failures:
                raise TransportError("HTTP 500 from server", status=500)
            self.received.setdefault(file_id, []).append(chunk)
        finally:
            self.in_flight -= 1

    async def combine(self, file_id):
        await asyncio.sleep(0)
        self.calls.append(('combine', file_id))
        if file_id.split('_', 1)[1] in self.combine_failures:
            raise TransportError("HTTP 500 from server", status=500)
        return f"http://testserver/uploads/{file_id}"

    def chunk_calls(self):
        return [c for c in self.calls if c[0] == 'chunk']

    def combine_calls(self):
        return [c for c in self.calls if c[0] == 'combine']


@pytest.fixture
def transport():
    """Returns a recording transport."""
    return RecordingTransport()


@pytest.fixture
def sample_file(tmp_path):
    """Creates a 25-byte file on disk."""
    path = tmp_path / "sample.bin"
    path.write_bytes(b"0123456789ABCDEFGHIJKLMNO")
    return path
