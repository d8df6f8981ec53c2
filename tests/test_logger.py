"""
Tests for logging configuration.
"""

import json
import logging
import sys

import pytest

from bs_pricer.logger import JsonFormatter, get_logger, setup_logger


class TestLogger:
    """Test logger setup helpers."""

    def test_get_logger_is_package_child(self):
        logger = get_logger("bs_pricer.some_module")
        assert logger.name == "bs_pricer.some_module"
        assert logger.parent is logging.getLogger("bs_pricer")

    def test_library_logger_leaves_output_to_host(self):
        """A fresh package logger gets a NullHandler and still propagates."""
        package_logger = logging.getLogger("bs_pricer_library")
        package_logger.handlers.clear()

        get_logger("bs_pricer_library.pricing")

        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], logging.NullHandler)
        assert package_logger.propagate

    def test_records_reach_root_once(self, caplog):
        logger = get_logger("bs_pricer_library.solver")
        with caplog.at_level(logging.WARNING):
            logger.warning("vega too small")
        assert [r.getMessage() for r in caplog.records] == ["vega too small"]

    def test_setup_replaces_handlers(self):
        logger = setup_logger(name="bs_pricer_test", log_level="DEBUG")
        logger = setup_logger(name="bs_pricer_test", log_level="DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_json_file_logs(self, tmp_path):
        logger = setup_logger(
            name="bs_pricer_json",
            log_dir=tmp_path,
            console_output=False,
            file_output=True,
            json_logs=True,
        )
        logger.warning("solver gave up", extra={'extra_data': {'volatility': 0.001}})
        for handler in logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("bs_pricer_json_*.log"))
        assert len(log_files) == 1
        lines = log_files[0].read_text().strip().splitlines()
        record = json.loads(lines[-1])
        assert record['message'] == "solver gave up"
        assert record['level'] == "WARNING"
        assert record['volatility'] == 0.001

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_json_formatter_exception(self):
        formatter = JsonFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        data = json.loads(formatter.format(record))
        assert "RuntimeError: boom" in data['exception']


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
