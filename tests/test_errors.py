"""Tests for error types."""

from crc64_bench.errors import ChecksumReadError, ConfigurationError, Crc64BenchError


class TestErrors:
    """Tests for the error hierarchy."""
    
    def test_base_error(self):
        error = Crc64BenchError("Test error", path="bigfile")
        
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.context == {"path": "bigfile"}
    
    def test_subclasses(self):
        assert isinstance(ChecksumReadError("x"), Crc64BenchError)
        assert isinstance(ConfigurationError("x"), Crc64BenchError)
    
    def test_empty_context(self):
        assert ChecksumReadError("x").context == {}
