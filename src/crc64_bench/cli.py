"""Command line entry point for crc64-bench."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .bench import report, run_benchmark, run_comparison
from .checksums import VARIANTS
from .config import ConfigLoader
from .errors import ChecksumReadError, ConfigurationError
from .logging import log_context, setup_logging
from .schema import Crc64BenchConfig

# Application name derived from package name
_package = __package__ or "crc64_bench"
APP_NAME = _package.replace('_', '-').replace('.', '-')

logger = logging.getLogger(_package)


def bench_command(config: Crc64BenchConfig) -> int:
    """Run the benchmark described by ``config``.
    
    Args:
        config: Configuration object
    
    Returns:
        Exit code: 0 on success, 1 on read failure or when a comparison
        run's backends disagree
    """
    path = Path(config.bench.file)
    params = VARIANTS[config.bench.variant]
    backend = None if config.bench.backend == "auto" else config.bench.backend
    
    with log_context(file=str(path), variant=params.name):
        try:
            if config.bench.compare:
                results = run_comparison(path, chunk_size=config.bench.chunk_size, params=params)
            else:
                results = [run_benchmark(
                    path, chunk_size=config.bench.chunk_size, params=params, backend=backend
                )]
        except ChecksumReadError as e:
            logger.error(e.message)
            return 1
        
        for result in results:
            report(result, config.bench.throughput, label=config.bench.compare)
        
        if len({result.crc for result in results}) > 1:
            logger.error(
                "Backends disagree: "
                + ", ".join(f"{r.backend}={r.hexdigest}" for r in results)
            )
            return 1
    
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compute the CRC-64 of a file and report digest, elapsed time and throughput"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    parser.add_argument(
        "--file",
        help="File to checksum (overrides config, default: bigfile)"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Read size in bytes (overrides config)"
    )
    parser.add_argument(
        "--throughput",
        choices=["literal", "actual"],
        help="Throughput formula (overrides config)"
    )
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        help="CRC-64 variant (overrides config)"
    )
    parser.add_argument(
        "--backend",
        choices=["auto", "awscrt", "table"],
        help="CRC-64 implementation (overrides config)"
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        default=None,
        help="Time the lookup table and awscrt one after the other"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    
    overrides = {
        "file": args.file,
        "chunk_size": args.chunk_size,
        "throughput": args.throughput,
        "variant": args.variant,
        "backend": args.backend,
        "compare": args.compare,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    
    try:
        config = ConfigLoader(app_name=APP_NAME, config_class=Crc64BenchConfig).load(
            defaults_path=args.config
        )
        if overrides:
            config = Crc64BenchConfig.model_validate({
                "logging": config.logging.model_dump(),
                "bench": {**config.bench.model_dump(), **overrides},
            })
    except ConfigurationError as e:
        setup_logging()
        logger.error(e.message)
        return 1
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1
    
    setup_logging(config.logging)
    
    return bench_command(config)


if __name__ == "__main__":
    sys.exit(main())
