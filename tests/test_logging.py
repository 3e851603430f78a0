"""Tests for logging setup and formatters."""

import json
import logging
import sys

from crc64_bench.logging import (
    REPORT_LOGGER,
    JsonFormatter,
    log_context,
    make_formatter,
    setup_logging,
)
from crc64_bench.schema import LoggingConfig


def make_record(message: str = "hex digest: 0000000000000000", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="crc64_bench",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestFormatters:
    """Tests for formatter output."""
    
    def test_json_formatter(self):
        data = json.loads(JsonFormatter().format(make_record()))
        
        assert data["message"] == "hex digest: 0000000000000000"
        assert data["level"] == "INFO"
        assert data["logger"] == "crc64_bench"
        assert "time" in data
    
    def test_json_formatter_context_fields(self):
        record = make_record()
        record.context = {"file": "bigfile"}
        
        assert json.loads(JsonFormatter().format(record))["file"] == "bigfile"
    
    def test_json_formatter_exception(self):
        try:
            raise OSError("disk gone")
        except OSError:
            record = logging.LogRecord(
                "crc64_bench", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        
        error = json.loads(JsonFormatter().format(record))["error"]
        
        assert "OSError: disk gone" in error
    
    def test_simple_format_is_go_log_style(self):
        line = make_formatter("simple").format(make_record("GB/s: 1.00"))
        
        date, clock, message = line.split(" ", 2)
        assert len(date.split("/")) == 3
        assert len(clock.split(":")) == 3
        assert message == "GB/s: 1.00"
    
    def test_detailed_format_has_level_and_logger(self):
        line = make_formatter("detailed").format(make_record(level=logging.ERROR))
        
        assert "ERROR" in line
        assert "crc64_bench:" in line
    
    def test_json_format_selected(self):
        assert isinstance(make_formatter("json"), JsonFormatter)


class TestSetupLogging:
    """Tests for setup_logging."""
    
    def test_defaults(self):
        setup_logging()
        root = logging.getLogger()
        
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
    
    def test_level_from_config(self):
        setup_logging(LoggingConfig(level="ERROR", format="detailed"))
        
        assert logging.getLogger().level == logging.ERROR
    
    def test_report_logger_not_filtered(self):
        setup_logging(LoggingConfig(level="ERROR"))
        
        assert logging.getLogger(REPORT_LOGGER).isEnabledFor(logging.INFO)
        assert not logging.getLogger("crc64_bench.bench").isEnabledFor(logging.INFO)
    
    def test_rotating_file_handler(self, tmp_path):
        log_file = tmp_path / "nested" / "bench.log"
        
        setup_logging(LoggingConfig(file=str(log_file), max_file_size_mb=2, backup_count=3))
        logging.getLogger("crc64_bench.test").info("written")
        
        file_handler = logging.getLogger().handlers[1]
        assert file_handler.maxBytes == 2 * 1024 * 1024
        assert file_handler.backupCount == 3
        assert json.loads(log_file.read_text(encoding='utf-8'))["message"] == "written"


class TestLogContext:
    """Tests for log_context."""
    
    def test_adds_fields_inside_context(self, caplog):
        logger = logging.getLogger("crc64_bench.ctx")
        
        with caplog.at_level(logging.INFO):
            with log_context(file="bigfile"):
                with log_context(variant="crc64-nvme"):
                    logger.info("nested")
                logger.info("inside")
            logger.info("outside")
        
        nested, inside, outside = caplog.records
        assert nested.context == {"file": "bigfile", "variant": "crc64-nvme"}
        assert inside.context == {"file": "bigfile"}
        assert not hasattr(outside, "context")
