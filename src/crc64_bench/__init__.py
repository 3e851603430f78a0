"""Streaming CRC-64 file checksum benchmark."""

from .checksums import (
    BACKENDS, CRC64_CHUNK_SIZE, CRC64_NVME, CRC64_POLY, CRC64_RAW, VARIANTS,
    Crc64, Crc64Params, compute_crc64, compute_crc64_hex, crc64, make_table,
)
from .bench import BenchResult, report, run_benchmark, run_comparison
from .config import ConfigLoader
from .errors import Crc64BenchError, ChecksumReadError, ConfigurationError
from .logging import setup_logging, log_context
from .schema import BenchConfig, Crc64BenchConfig, LoggingConfig

__version__ = "0.1.0"

__all__ = [
    'BACKENDS',
    'CRC64_CHUNK_SIZE',
    'CRC64_NVME',
    'CRC64_POLY',
    'CRC64_RAW',
    'VARIANTS',
    'Crc64',
    'Crc64Params',
    'compute_crc64',
    'compute_crc64_hex',
    'crc64',
    'make_table',
    'BenchResult',
    'report',
    'run_benchmark',
    'run_comparison',
    'ConfigLoader',
    'Crc64BenchError',
    'ChecksumReadError',
    'ConfigurationError',
    'setup_logging',
    'log_context',
    'LoggingConfig',
    'BenchConfig',
    'Crc64BenchConfig',
]
