"""
Tests for logging setup.
"""

import json
import logging
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from pythonjsonlogger.json import JsonFormatter

from src.utils.logging_setup import JSONFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove the handlers setup_logging installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_text_logging_to_file() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        log_file = Path(tmpdir) / "logs" / "client.log"
        setup_logging(level="DEBUG", log_file=log_file)

        logging.getLogger("src.gocollect_client.api_client").debug("GET https://gocollect.com -> 200")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "DEBUG" in content
        assert "GET https://gocollect.com -> 200" in content


def test_string_level_is_resolved() -> None:
    root = setup_logging(level="warning")
    assert root.level == logging.WARNING
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_json_format_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "json")
    root = setup_logging()
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


def test_json_formatter_fields() -> None:
    formatter = JSONFormatter("%(message)s")
    record = logging.LogRecord(
        name="src.gocollect_client",
        level=logging.INFO,
        pathname=__file__,
        lineno=42,
        msg="Search returned %d items",
        args=(3,),
        exc_info=None,
    )
    record.extra_data = {"query": "Hulk"}

    data = json.loads(formatter.format(record))

    assert data["message"] == "Search returned 3 items"
    assert data["level"] == "INFO"
    assert data["logger"] == "src.gocollect_client"
    assert data["line"] == 42
    assert data["extra"] == {"query": "Hulk"}


def test_json_formatter_builds_on_current_module() -> None:
    assert issubclass(JSONFormatter, JsonFormatter)
    assert JSONFormatter.__mro__[1].__module__ == "pythonjsonlogger.json"
