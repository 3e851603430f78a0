"""Timed CRC-64 pass over a single file.

The lookup table is built before the clock starts, so the reported time
covers opening, reading and hashing only.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Literal, Optional, Sequence

from .checksums import (
    CRC64_CHUNK_SIZE, CRC64_NVME, Crc64, Crc64Params, Table,
    b64encode_crc, make_table, resolve_backend,
)
from .errors import ChecksumReadError
from .logging import REPORT_LOGGER

logger = logging.getLogger(__name__)
report_logger = logging.getLogger(REPORT_LOGGER)

ThroughputMode = Literal["literal", "actual"]

BYTES_PER_GB = 1e9


@dataclass(frozen=True)
class BenchResult:
    """Outcome of one benchmark run."""

    path: Path
    crc: int
    bytes_read: int
    elapsed: float  # seconds
    backend: str = "awscrt"

    @property
    def hexdigest(self) -> str:
        return f"{self.crc:016X}"

    @property
    def b64digest(self) -> str:
        return b64encode_crc(self.crc)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    def throughput(self, mode: ThroughputMode = "literal") -> float:
        """Throughput figure for the report.
        
        Args:
            mode: 'literal' is 1 / elapsed seconds regardless of file size,
                which only equals GB/s for a 1 GB file. 'actual' is bytes
                read per second in GB/s.
                
        Returns:
            Throughput, or infinity when no time elapsed
        """
        if mode not in ("literal", "actual"):
            raise ValueError(f"Unknown throughput mode: {mode!r}")
        if self.elapsed <= 0:
            return float("inf")
        if mode == "actual":
            return self.bytes_read / self.elapsed / BYTES_PER_GB
        return 1 / self.elapsed


def run_benchmark(
    path: Path,
    *,
    chunk_size: int = CRC64_CHUNK_SIZE,
    params: Crc64Params = CRC64_NVME,
    backend: Optional[str] = None,
    table_factory: Callable[[int], Table] = make_table,
    clock: Callable[[], float] = time.perf_counter,
) -> BenchResult:
    """Checksum ``path`` and time the read+hash phase.
    
    Args:
        path: File to read
        chunk_size: Number of bytes read per call
        params: CRC-64 variant
        backend: 'awscrt', 'table', or None for the fastest one for ``params``
        table_factory: Builds the lookup table for the table backend
        clock: Monotonic clock returning seconds
        
    Returns:
        BenchResult with the checksum and elapsed time
        
    Raises:
        ChecksumReadError: If the file cannot be opened or read
        ValueError: If ``chunk_size`` or ``backend`` is invalid
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    backend = resolve_backend(params, backend)

    # Not timed
    table = None
    if backend == "table":
        table = table_factory(params.poly)
        logger.debug(f"Built CRC-64 table for polynomial 0x{params.poly:016X} ({params.name})")

    start = clock()

    hasher = Crc64(params=params, backend=backend, table=table)
    bytes_read = 0
    try:
        with open(path, 'rb') as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
                bytes_read += len(chunk)
    except OSError as e:
        raise ChecksumReadError(
            f"Failed to checksum {path}: {e}",
            path=str(path),
            bytes_read=bytes_read,
        ) from e

    crc = hasher.crcvalue
    elapsed = clock() - start

    logger.debug(f"Read {bytes_read} bytes from {path} ({backend})")
    return BenchResult(
        path=Path(path), crc=crc, bytes_read=bytes_read, elapsed=elapsed, backend=backend
    )


def run_comparison(
    path: Path,
    *,
    backends: Sequence[str] = ("table", "awscrt"),
    **kwargs,
) -> List[BenchResult]:
    """Time each backend over the same file, one after the other.
    
    Args:
        path: File to read
        backends: Backends to run, in order
        **kwargs: Passed to run_benchmark()
        
    Returns:
        One BenchResult per backend
    """
    return [run_benchmark(path, backend=backend, **kwargs) for backend in backends]


def report(
    result: BenchResult,
    mode: ThroughputMode = "literal",
    log: Optional[logging.Logger] = None,
    label: bool = False,
) -> None:
    """Log the digest, elapsed time and throughput of a run.
    
    ``label`` appends the backend name to each line, for comparison runs.
    """
    log = log or report_logger
    suffix = f" ({result.backend})" if label else ""
    log.info(f"hex digest: {result.hexdigest}{suffix}")
    log.info(f"time elapsed: {result.elapsed_ms:.2f}ms{suffix}")
    log.info(f"GB/s: {result.throughput(mode):.2f}{suffix}")
