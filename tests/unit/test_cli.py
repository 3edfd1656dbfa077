"""Tests for the command-line interface."""
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from chunkpy import UploadClient
from chunkpy.cli.main import app, build_transport_config

runner = CliRunner()


@pytest.fixture
def fake_client(transport):
    """Patch UploadClient so the CLI uploads through the recording transport."""
    def factory(config, upload_config=None):
        return UploadClient(transport=transport, upload_config=upload_config)
    
    with patch('chunkpy.UploadClient', side_effect=factory):
        yield transport


class TestPlan:
    """Test suite for the plan command."""
    
    def test_plan_table(self, sample_file):
        """Test plan prints chunk count."""
        result = runner.invoke(app, ["plan", str(sample_file), "--chunk-size", "10"])
        
        assert result.exit_code == 0
        assert "3 chunks" in result.output
    
    def test_plan_invalid_chunk_size(self, sample_file):
        """Test invalid chunk size exits with 2."""
        result = runner.invoke(app, ["plan", str(sample_file), "--chunk-size", "0"])
        
        assert result.exit_code == 2


class TestUpload:
    """Test suite for the upload command."""
    
    def test_upload_success(self, fake_client, sample_file):
        """Test successful batch."""
        result = runner.invoke(app, ["upload", str(sample_file), "--chunk-size", "10"])
        
        assert result.exit_code == 0, result.output
        assert "All 1 files uploaded and combined successfully" in result.output
        assert len(fake_client.chunk_calls()) == 3
    
    def test_upload_combine_failure(self, fake_client, sample_file):
        """Test partial batch exits with 1."""
        fake_client.combine_failures.add("samplebin")
        
        result = runner.invoke(app, ["upload", str(sample_file), "--chunk-size", "10"])
        
        assert result.exit_code == 1
        assert "Combine failed" in result.output
    
    def test_upload_chunk_failure(self, fake_client, sample_file):
        """Test aborted batch exits with 1."""
        fake_client.chunk_failures.add(("sample", 1))
        
        result = runner.invoke(app, ["upload", str(sample_file), "--chunk-size", "10"])
        
        assert result.exit_code == 1
        assert "Upload aborted" in result.output
    
    def test_upload_invalid_chunk_size(self, sample_file):
        """Test invalid chunk size exits with 2 before any upload."""
        result = runner.invoke(app, ["upload", str(sample_file), "--chunk-size", "0"])
        
        assert result.exit_code == 2


class TestTransportOptions:
    """Test suite for CLI transport options."""
    
    def test_timeout_applies_to_socket_reads(self):
        """Test --timeout bounds slow chunk reads, not only the total."""
        config = build_transport_config("http://upload.test", 600.0)
        
        assert config.timeout.total == 600.0
        assert config.timeout.sock_read == 600.0
        assert config.base_url == "http://upload.test"
    
    def test_insecure_disables_verification(self):
        """Test --insecure turns SSL verification off."""
        config = build_transport_config("https://upload.test", 30.0, insecure=True)
        
        assert config.ssl.verify is False
