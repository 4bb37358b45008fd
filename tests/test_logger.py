"""Unit tests for structured JSON logging."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import json
import logging
from logger import JSONFormatter, setup_logging


def make_record(message, exc_info=None):
    return logging.LogRecord(
        name="services.text_extractor",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=exc_info
    )


def test_format_is_json():
    data = json.loads(JSONFormatter().format(make_record("Extracted 3 pages")))
    
    assert data["level"] == "ERROR"
    assert data["logger"] == "services.text_extractor"
    assert data["message"] == "Extracted 3 pages"
    assert data["timestamp"].endswith("Z")


def test_format_includes_exception():
    try:
        raise RuntimeError("corrupt page")
    except RuntimeError:
        record = make_record("Failed to load", exc_info=sys.exc_info())
    
    data = json.loads(JSONFormatter().format(record))
    
    assert "RuntimeError: corrupt page" in data["exception"]


def test_format_merges_extra_fields():
    record = make_record("Loaded document")
    record.extra = {"page_count": 12}
    
    data = json.loads(JSONFormatter().format(record))
    
    assert data["page_count"] == 12


def test_setup_logging_installs_single_json_handler():
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    try:
        setup_logging("DEBUG")
        
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
    finally:
        root_logger.handlers = saved_handlers
        root_logger.setLevel(saved_level)
