"""Tests for logging setup and the hourly JSON error log."""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

import pytest

from kaiban_docs_mcp.logging_config import (
	LOGGER_NAME,
	HourlyJsonFileHandler,
	error_details,
	setup_logging,
)
from tests.helpers import make_config


@pytest.fixture
def json_logger(tmp_path: Path):
	"""A throwaway logger wired to an HourlyJsonFileHandler."""
	logger = logging.getLogger(f"test_json_logger.{tmp_path.name}")
	logger.setLevel(logging.DEBUG)
	logger.propagate = False
	handler = HourlyJsonFileHandler(tmp_path / "logs")
	logger.addHandler(handler)
	yield logger, handler
	logger.removeHandler(handler)


@pytest.fixture
def clean_logger():
	logger = logging.getLogger(LOGGER_NAME)
	saved_handlers = list(logger.handlers)
	saved_level = logger.level
	for handler in saved_handlers:
		logger.removeHandler(handler)
	yield logger
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()
	for handler in saved_handlers:
		logger.addHandler(handler)
	logger.setLevel(saved_level)


def _read_entries(log_dir: Path) -> list[dict]:
	entries = []
	for log_file in sorted(log_dir.glob("*.log")):
		entries.extend(json.loads(line) for line in log_file.read_text().splitlines())
	return entries


def test_error_written_as_json_line(tmp_path: Path, json_logger):
	logger, _ = json_logger
	logger.error("Failed to read doc content", extra={"data": {"path": "a.mdx"}})

	files = list((tmp_path / "logs").glob("*.log"))
	assert len(files) == 1
	assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}\.log", files[0].name)

	entries = _read_entries(tmp_path / "logs")
	assert entries[0]["message"] == "Failed to read doc content"
	assert entries[0]["path"] == "a.mdx"
	assert entries[0]["timestamp"].endswith("Z")
	assert "level" not in entries[0]


def test_below_error_is_ignored_by_default(tmp_path: Path, json_logger):
	logger, _ = json_logger
	logger.warning("just a warning")
	logger.info("info")
	assert not (tmp_path / "logs").exists() or _read_entries(tmp_path / "logs") == []


def test_debug_level_handler_records_level(tmp_path: Path):
	handler = HourlyJsonFileHandler(tmp_path / "logs", level=logging.DEBUG)
	record = logging.makeLogRecord({"msg": "walk", "levelno": logging.DEBUG, "levelname": "DEBUG"})
	handler.handle(record)

	entries = _read_entries(tmp_path / "logs")
	assert entries[0]["message"] == "walk"
	assert entries[0]["level"] == "debug"


def test_non_dict_data_is_nested(tmp_path: Path, json_logger):
	logger, _ = json_logger
	logger.error("odd payload", extra={"data": ["a", "b"]})
	assert _read_entries(tmp_path / "logs")[0]["data"] == ["a", "b"]


def test_exception_details_recorded(tmp_path: Path, json_logger):
	logger, _ = json_logger
	try:
		raise FileNotFoundError("missing.mdx")
	except FileNotFoundError:
		logger.exception("Failed to read doc content")

	entry = _read_entries(tmp_path / "logs")[0]
	assert entry["message"] == "Failed to read doc content"
	assert entry["error"]["name"] == "FileNotFoundError"
	assert entry["error"]["message"] == "missing.mdx"
	assert "Traceback" in entry["error"]["stack"]


def test_log_file_named_by_utc_hour(tmp_path: Path):
	handler = HourlyJsonFileHandler(tmp_path)
	when = datetime(2024, 5, 1, 13, 45, tzinfo=timezone.utc)
	assert handler.log_file_for(when) == tmp_path / "2024-05-01T13.log"


def test_write_failure_does_not_raise(tmp_path: Path, json_logger, monkeypatch):
	logger, handler = json_logger
	blocker = tmp_path / "blocked"
	blocker.write_text("not a directory")
	handler.log_dir = blocker
	monkeypatch.setattr(logging, "raiseExceptions", False)
	logger.error("cannot be written")


def test_error_details():
	details = error_details(ValueError("bad"))
	assert details["name"] == "ValueError"
	assert details["message"] == "bad"


def test_setup_logging_handlers(tmp_path: Path, clean_logger):
	config = make_config(tmp_path)
	logger = setup_logging(config)

	assert logger.name == LOGGER_NAME
	json_handlers = [h for h in logger.handlers if isinstance(h, HourlyJsonFileHandler)]
	assert len(json_handlers) == 1
	assert json_handlers[0].level == logging.ERROR
	assert json_handlers[0].log_dir == config.log_dir


def test_setup_logging_debug(tmp_path: Path, clean_logger):
	config = make_config(tmp_path, debug=True)
	logger = setup_logging(config)

	assert logger.level == logging.DEBUG
	assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_setup_logging_no_duplicate_handlers(tmp_path: Path, clean_logger):
	config = make_config(tmp_path)
	setup_logging(config)
	logger = setup_logging(config)
	assert len(logger.handlers) == 2


def test_package_errors_reach_log_file(tmp_path: Path, clean_logger):
	config = make_config(tmp_path)
	setup_logging(config)

	logging.getLogger("kaiban_docs_mcp.docs.library").error("Failed to list directory contents")

	entries = _read_entries(config.log_dir)
	assert entries[-1]["message"] == "Failed to list directory contents"
