"""Tests for the high-level UploadClient."""
import pytest

from chunkpy import UploadClient, UploadConfig
from chunkpy.core.exceptions import ChunkTransmissionError
from chunkpy.core.upload import BatchStatus


@pytest.fixture
def client(transport):
    return UploadClient(transport=transport, upload_config=UploadConfig(chunk_size=10))


class TestSelection:
    """Test suite for selection management."""
    
    def test_add_files(self, client, sample_file):
        """Test adding files from disk."""
        added = client.add_files(sample_file)
        
        assert [s.name for s in client.selections] == ["sample.bin"]
        assert added[0].byte_length == 25
    
    def test_add_missing_file(self, client, tmp_path):
        """Test missing files are rejected."""
        with pytest.raises(FileNotFoundError):
            client.add_files(tmp_path / "missing.bin")
        
        assert client.selections == []
    
    def test_add_bytes_and_remove(self, client):
        """Test in-memory selection and removal."""
        selection = client.add_bytes("notes.txt", b"hello")
        
        assert client.remove(selection.id) is True
        assert client.selections == []


class TestUpload:
    """Test suite for UploadClient.upload."""
    
    @pytest.mark.asyncio
    async def test_upload_clears_selection(self, client, transport, sample_file):
        """Test a completed batch clears the selection."""
        client.add_files(sample_file)
        client.add_bytes("notes.txt", b"hello")
        seen = []
        
        async with client:
            result = await client.upload(progress_callback=lambda p: seen.append(p.overall_percent))
        
        assert result.status is BatchStatus.COMPLETED
        assert client.selections == []
        assert not client.is_uploading
        assert seen[-1] == 100
        assert len(transport.combine_calls()) == 2
    
    @pytest.mark.asyncio
    async def test_progress_callback_detached(self, client, sample_file):
        """Test the callback only applies to its own batch."""
        seen = []
        client.add_files(sample_file)
        await client.upload(progress_callback=seen.append)
        count = len(seen)
        
        client.add_files(sample_file)
        await client.upload()
        
        assert len(seen) == count
    
    @pytest.mark.asyncio
    async def test_abort_keeps_selection(self, client, transport):
        """Test a chunk failure leaves the selection for another try."""
        client.add_bytes("a.bin", b"x" * 25)
        transport.chunk_failures.add(("a", 0))
        
        with pytest.raises(ChunkTransmissionError):
            await client.upload()
        
        assert len(client.selections) == 1
    
    @pytest.mark.asyncio
    async def test_events_forwarded(self, client):
        """Test on() registers coordinator events."""
        combined = []
        client.on('file_combined', lambda session: combined.append(session.url))
        client.add_bytes("a.bin", b"abc")
        
        await client.upload()
        
        assert len(combined) == 1
    
    @pytest.mark.asyncio
    async def test_nothing_to_upload(self, client, transport):
        """Test uploading an empty selection is a no-op."""
        result = await client.upload()
        
        assert result.status is BatchStatus.NOTHING_TO_DO
        assert transport.calls == []
    
    @pytest.mark.asyncio
    async def test_close_owned_transport(self):
        """Test the default HttpTransport is closed with the client."""
        async with UploadClient() as client:
            assert client.selections == []
