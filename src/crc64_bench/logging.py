"""Logging setup for crc64-bench.

Everything the tool prints, including the report, goes to stderr through
the root logger, in the manner of Go's ``log`` package.
"""

import json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .schema import LoggingConfig

# Report lines are the program's output and pass whatever level is configured.
REPORT_LOGGER = "crc64_bench.report"

GO_DATEFMT = "%Y/%m/%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with log_context() fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "context", {}))
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def make_formatter(format: str) -> logging.Formatter:
    """Console formatter for a LoggingConfig.format value."""
    if format == "json":
        return JsonFormatter()
    if format == "detailed":
        return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", GO_DATEFMT)
    return logging.Formatter("%(asctime)s %(message)s", GO_DATEFMT)


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure the root logger from ``config``.

    Adds a stderr handler and, when ``config.file`` is set, a rotating
    JSON log file. Existing root handlers are replaced.
    """
    config = config or LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(make_formatter(config.format))
    root_logger.addHandler(console_handler)

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger(REPORT_LOGGER).setLevel(logging.INFO)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach ``fields`` to every record created inside the block."""
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = old_factory(*args, **kwargs)
        record.context = {**getattr(record, "context", {}), **fields}
        return record

    logging.setLogRecordFactory(record_factory)
    try:
        yield
    finally:
        logging.setLogRecordFactory(old_factory)
