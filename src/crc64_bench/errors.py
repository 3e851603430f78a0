"""Error definitions for crc64_bench."""

from typing import Any, Dict


class Crc64BenchError(Exception):
    """Base exception for all crc64_bench errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ChecksumReadError(Crc64BenchError):
    """Input file could not be opened or read."""
    pass


class ConfigurationError(Crc64BenchError):
    """Configuration is missing or invalid."""
    pass
