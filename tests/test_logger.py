import logging
import sys

from ring_scout.logger import LOGGER_NAME, configure, init_logging


def test_console_handler_targets_stderr():
    lg = init_logging("DEBUG")
    assert [h.stream for h in lg.handlers] == [sys.stderr]
    assert lg.propagate is False
    init_logging()


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "ring.log"
    lg = init_logging("INFO", log_file=log_file)
    lg.info("crawl started")
    for handler in lg.handlers:
        handler.flush()
    assert "crawl started" in log_file.read_text(encoding="utf-8")
    init_logging()


def test_configure_replaces_or_appends_handlers():
    lg = configure(level="WARNING")
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING
    configure(level="WARNING", replace_handlers=False)
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 2
    init_logging()
    assert len(lg.handlers) == 1
