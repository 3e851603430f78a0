"""Configuration schema for crc64-bench."""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PATH_VARIABLES = {
    "${USER_HOME}": lambda: str(Path.home()),
    "${TEMP}": tempfile.gettempdir,
}


def expand_path_variables(path: str) -> str:
    """Expand ``${USER_HOME}`` and ``${TEMP}`` in a path string."""
    for var, resolve in PATH_VARIABLES.items():
        if var in path:
            path = path.replace(var, resolve())
    return path


def _lower(v: object) -> object:
    return v.lower() if isinstance(v, str) else v


class LoggingConfig(BaseModel):
    """Console and log file settings."""
    
    model_config = ConfigDict(extra='forbid')
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level for diagnostics; report lines are always shown"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console format: 'simple' mimics Go's log prefix"
    )
    file: str | None = Field(default=None, description="Optional JSON log file path")
    max_file_size_mb: int = Field(default=10, ge=1, description="Rotate the log file at this size")
    backup_count: int = Field(default=5, ge=0, description="Rotated log files to keep")
    
    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v
    
    @field_validator('format', mode='before')
    @classmethod
    def normalize_format(cls, v: object) -> object:
        return _lower(v)
    
    @field_validator('file')
    @classmethod
    def expand_file(cls, v: str | None) -> str | None:
        return expand_path_variables(v) if v else v


class BenchConfig(BaseModel):
    """Settings for the checksum run."""
    
    model_config = ConfigDict(extra='forbid')
    
    file: str = Field(
        default="bigfile",
        description="File to checksum, relative to the working directory"
    )
    chunk_size: int = Field(
        default=262144,
        ge=1,
        description="Number of bytes read from the file per call"
    )
    throughput: Literal["literal", "actual"] = Field(
        default="literal",
        description="'literal' reports 1/elapsed seconds, 'actual' reports bytes read in GB/s"
    )
    variant: Literal["nvme", "raw"] = Field(
        default="nvme",
        description="CRC-64 variant: 'nvme' complements the register, 'raw' does not"
    )
    backend: Literal["auto", "awscrt", "table"] = Field(
        default="auto",
        description="'auto' uses awscrt where it implements the variant, else the lookup table"
    )
    compare: bool = Field(
        default=False,
        description="Time the lookup table and awscrt back to back and report both"
    )
    
    @field_validator('file')
    @classmethod
    def expand_file(cls, v: str) -> str:
        return expand_path_variables(v)
    
    @field_validator('throughput', 'variant', 'backend', mode='before')
    @classmethod
    def normalize_choice(cls, v: object) -> object:
        return _lower(v)
    
    @model_validator(mode='after')
    def check_awscrt_variant(self) -> "BenchConfig":
        # awscrt only computes CRC-64/NVME
        if self.variant != "nvme" and (self.backend == "awscrt" or self.compare):
            raise ValueError(f"variant '{self.variant}' is only available on the table backend")
        return self


class Crc64BenchConfig(BaseModel):
    """Root configuration for crc64-bench."""
    
    model_config = ConfigDict(extra='forbid')
    
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    bench: BenchConfig = Field(default_factory=BenchConfig)
