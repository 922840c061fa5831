# =============================================================================
# tests/unit/test_logging.py
# Unit Tests for Logging Setup
# =============================================================================

import io
import logging

import pytest

from edunexus_core.logging import LogContext, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:

    def test_writes_formatted_records_to_stream(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)

        get_logger("edunexus_core.offline.failover").warning("users read falling back")

        line = stream.getvalue().strip()
        assert "| edunexus_core.offline.failover | WARNING | users read falling back" in line

    def test_transport_loggers_held_at_warning(self, restore_root_logger):
        setup_logging(level=logging.DEBUG, stream=io.StringIO())

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("requests").level == logging.WARNING

    def test_level_filters(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger("edunexus_core").debug("hidden")

        assert stream.getvalue() == ""


class TestLogContext:

    def test_success_logged_at_given_level(self, caplog):
        logger = get_logger("edunexus_core.test")

        with caplog.at_level(logging.DEBUG, logger="edunexus_core.test"):
            with LogContext(logger, "Seeding", level=logging.DEBUG):
                pass

        assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.DEBUG]
        assert "Seeding... done in" in caplog.records[-1].getMessage()

    def test_failure_logged_as_error_and_reraised(self, caplog):
        logger = get_logger("edunexus_core.test")

        with caplog.at_level(logging.DEBUG, logger="edunexus_core.test"):
            with pytest.raises(RuntimeError):
                with LogContext(logger, "Seeding", level=logging.DEBUG):
                    raise RuntimeError("disk full")

        assert caplog.records[-1].levelno == logging.ERROR
        assert "disk full" in caplog.records[-1].getMessage()
