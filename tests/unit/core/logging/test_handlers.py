"""
Tests for log handlers.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from dapr_http.core.logging.filters import ExtraFieldsFilter
from dapr_http.core.logging.formatters import TextFormatter
from dapr_http.core.logging.handlers import create_console_handler, create_file_handler


class TestConsoleHandler:

    def test_configured(self):
        formatter = TextFormatter()
        extra = ExtraFieldsFilter({"app_id": "orders"})

        handler = create_console_handler(logging.DEBUG, formatter, [extra])

        assert handler.stream is sys.stdout
        assert handler.level == logging.DEBUG
        assert handler.formatter is formatter
        assert extra in handler.filters


class TestFileHandler:

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "logs" / "dapr.log"

        handler = create_file_handler(str(path), logging.INFO, TextFormatter())
        try:
            assert isinstance(handler, RotatingFileHandler)
            assert path.parent.is_dir()
            assert handler.maxBytes == 10 * 1024 * 1024
            assert handler.backupCount == 5
        finally:
            handler.close()

    def test_rotation(self, tmp_path):
        path = tmp_path / "dapr.log"
        handler = create_file_handler(
            str(path), logging.INFO, TextFormatter(), max_bytes=200, backup_count=2
        )
        logger = logging.getLogger("dapr_http.test_rotation")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            for i in range(20):
                logger.warning("line %d with some padding to fill the file", i)
        finally:
            logger.removeHandler(handler)
            handler.close()

        assert (tmp_path / "dapr.log.1").exists()
        assert not (tmp_path / "dapr.log.3").exists()
