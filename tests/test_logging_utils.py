import io
import logging
import sys

from docassist.logging_utils import configure_logging, normalize_log_level


def test_handler_follows_current_stderr(monkeypatch):
    first = io.StringIO()
    monkeypatch.setattr(sys, "stderr", first)
    configure_logging("INFO")
    first.close()

    second = io.StringIO()
    monkeypatch.setattr(sys, "stderr", second)
    logger = configure_logging("INFO")
    logging.getLogger("docassist.test").info("still logging")

    assert "still logging" in second.getvalue()
    assert sum(isinstance(h, logging.StreamHandler) for h in logger.handlers) == 1


def test_normalize_log_level():
    assert normalize_log_level("debug") == "DEBUG"
    assert normalize_log_level("loud") == "WARNING"
    assert normalize_log_level(None) == "WARNING"
