"""CRC-64 checksum utilities for file integrity verification."""

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal, Optional, Tuple

from awscrt import checksums as awscrt_checksums

# Constants for checksum calculation
CRC64_POLY = 0x9A6C9329AC4BC9B5
CRC64_MASK = 0xFFFFFFFFFFFFFFFF
CRC64_CHUNK_SIZE = 262144  # 256 KB chunks

Table = Tuple[int, ...]
Backend = Literal["awscrt", "table"]

BACKENDS: Tuple[str, ...] = ("awscrt", "table")


@dataclass(frozen=True)
class Crc64Params:
    """Parameters of a reflected CRC-64 variant.

    Attributes:
        name: Catalogue name of the variant
        poly: Polynomial in reversed (LSB-first) representation
        init: Initial register value
        xorout: Value XORed into the register to produce the checksum
    """

    name: str
    poly: int
    init: int
    xorout: int


# What Go's hash/crc64 computes for this polynomial: the register is
# complemented before and after every update.
CRC64_NVME = Crc64Params(name="crc64-nvme", poly=CRC64_POLY, init=CRC64_MASK, xorout=CRC64_MASK)

# The bare table recurrence starting from a zero register.
CRC64_RAW = Crc64Params(name="crc64-raw", poly=CRC64_POLY, init=0, xorout=0)

VARIANTS = {
    "nvme": CRC64_NVME,
    "raw": CRC64_RAW,
}

_tables: dict = {}


def make_table(poly: int = CRC64_POLY) -> Table:
    """
    Build the 256-entry lookup table for a reflected polynomial.
    
    Args:
        poly: Polynomial in reversed representation
        
    Returns:
        Tuple of 256 unsigned 64-bit integers
    """
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ poly
            else:
                crc >>= 1
        table.append(crc & CRC64_MASK)
    return tuple(table)


def get_table(poly: int = CRC64_POLY) -> Table:
    """Return the lookup table for ``poly``, building it on first use."""
    table = _tables.get(poly)
    if table is None:
        table = _tables[poly] = make_table(poly)
    return table


def update(crc: int, table: Table, data: Iterable[int]) -> int:
    """
    Feed bytes through the CRC register.
    
    Args:
        crc: Current register value
        table: Lookup table from make_table()
        data: Bytes to process
        
    Returns:
        New register value
    """
    for byte in data:
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc


def resolve_backend(params: Crc64Params, backend: Optional[str] = None) -> str:
    """
    Pick the implementation for a variant.
    
    awscrt only implements CRC-64/NVME; every other variant runs on the
    lookup table.
    
    Args:
        params: CRC-64 variant
        backend: 'awscrt', 'table', or None for the fastest available
        
    Returns:
        Backend name
        
    Raises:
        ValueError: If the backend is unknown or cannot compute ``params``
    """
    if backend is None:
        return "awscrt" if params == CRC64_NVME else "table"
    if backend not in BACKENDS:
        raise ValueError(f"Unknown CRC-64 backend: {backend!r}")
    if backend == "awscrt" and params != CRC64_NVME:
        raise ValueError(f"awscrt does not implement {params.name}")
    return backend


class Crc64:
    """Streaming CRC-64 accumulator with a hashlib-like interface.

    On the table backend the register starts at ``params.init`` and the
    checksum is the register XORed with ``params.xorout``. awscrt keeps the
    finished checksum and continues from it. Digest bytes are big-endian.
    """

    digest_size = 8
    block_size = 1

    def __init__(
        self,
        data: bytes = b"",
        *,
        params: Crc64Params = CRC64_NVME,
        backend: Optional[str] = None,
        table: Optional[Table] = None,
    ) -> None:
        self.params = params
        self.backend = resolve_backend(params, backend)
        self._table: Optional[Table] = None
        if self.backend == "table":
            self._table = table if table is not None else get_table(params.poly)
            if len(self._table) != 256:
                raise ValueError(f"CRC-64 table must have 256 entries, got {len(self._table)}")
            self._crc = params.init
        else:
            self._crc = 0
        if data:
            self.update(data)

    @property
    def name(self) -> str:
        return self.params.name

    @property
    def crcvalue(self) -> int:
        """Checksum of the data fed so far as an unsigned 64-bit integer."""
        if self.backend == "awscrt":
            return self._crc
        return self._crc ^ self.params.xorout

    def update(self, data: bytes) -> None:
        if self.backend == "awscrt":
            self._crc = awscrt_checksums.crc64nvme(data, self._crc)
        else:
            self._crc = update(self._crc, self._table, data)

    def digest(self) -> bytes:
        return self.crcvalue.to_bytes(8, "big")

    def hexdigest(self) -> str:
        """Checksum as 16 uppercase hex digits (e.g., "AE8B14860A799888")."""
        return f"{self.crcvalue:016X}"

    def b64digest(self) -> str:
        """Checksum as base64 of its little-endian bytes.

        This is the form Azure Storage carries in ``x-ms-content-crc64``.
        """
        return b64encode_crc(self.crcvalue)

    def copy(self) -> "Crc64":
        other = Crc64(params=self.params, backend=self.backend, table=self._table)
        other._crc = self._crc
        return other


def b64encode_crc(crc: int) -> str:
    """Base64 of a 64-bit checksum in little-endian byte order."""
    return base64.b64encode(crc.to_bytes(8, "little")).decode("ascii")


def crc64(data: bytes, params: Crc64Params = CRC64_NVME, backend: Optional[str] = None) -> int:
    """Compute the CRC-64 of an in-memory buffer."""
    return Crc64(data, params=params, backend=backend).crcvalue


def compute_crc64(
    file_path: Path,
    chunk_size: int = CRC64_CHUNK_SIZE,
    params: Crc64Params = CRC64_NVME,
    backend: Optional[str] = None,
) -> int:
    """
    Compute CRC-64 checksum of entire file.
    
    Args:
        file_path: Path to the file
        chunk_size: Number of bytes read per call
        params: CRC-64 variant
        backend: Implementation, see resolve_backend()
        
    Returns:
        CRC-64 checksum as unsigned 64-bit integer
        
    Raises:
        OSError: If file cannot be read
    """
    hasher = Crc64(params=params, backend=backend)
    
    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    
    return hasher.crcvalue


def compute_crc64_hex(
    file_path: Path,
    chunk_size: int = CRC64_CHUNK_SIZE,
    params: Crc64Params = CRC64_NVME,
    backend: Optional[str] = None,
) -> str:
    """
    Compute CRC-64 checksum of entire file as hex string.
    
    Returns:
        CRC-64 checksum as 16-character uppercase hex string
        
    Raises:
        OSError: If file cannot be read
    """
    crc_int = compute_crc64(file_path, chunk_size=chunk_size, params=params, backend=backend)
    return f"{crc_int:016X}"
