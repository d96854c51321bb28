"""Centralized logging configuration for kaiban-docs-mcp.

Console output goes to stderr because stdout carries the MCP stdio transport.
Errors (and debug events when DEBUG is set) are also appended to an hourly
JSON-lines file under the cache directory.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import Config

LOGGER_NAME = "kaiban_docs_mcp"

# LogRecord attributes that are not caller-supplied structured data
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def error_details(exc: BaseException) -> dict[str, str]:
	"""Structured view of an exception for the JSON log."""
	return {
		"name": type(exc).__name__,
		"message": str(exc),
		"stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
	}


class HourlyJsonFileHandler(logging.Handler):
	"""Append one JSON object per record to ``<log_dir>/<YYYY-MM-DDTHH>.log`` (UTC)."""

	def __init__(self, log_dir: Path, level: int = logging.ERROR):
		super().__init__(level)
		self.log_dir = Path(log_dir)

	def log_file_for(self, when: datetime) -> Path:
		return self.log_dir / f"{when.strftime('%Y-%m-%dT%H')}.log"

	def format_record(self, record: logging.LogRecord) -> dict[str, Any]:
		now = datetime.fromtimestamp(record.created, tz=timezone.utc)
		entry: dict[str, Any] = {
			"timestamp": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
			"message": record.getMessage(),
		}
		if record.levelno != logging.ERROR:
			entry["level"] = record.levelname.lower()

		data = getattr(record, "data", None)
		if isinstance(data, dict):
			entry.update(data)
		elif data is not None:
			entry["data"] = data

		for key, value in vars(record).items():
			if key not in _RESERVED_ATTRS and key != "data":
				entry[key] = value

		if record.exc_info and record.exc_info[1] is not None:
			entry["error"] = error_details(record.exc_info[1])
		return entry

	def emit(self, record: logging.LogRecord) -> None:
		try:
			entry = self.format_record(record)
			when = datetime.fromtimestamp(record.created, tz=timezone.utc)
			self.log_dir.mkdir(parents=True, exist_ok=True)
			with open(self.log_file_for(when), "a", encoding="utf-8") as f:
				f.write(json.dumps(entry, default=str) + "\n")
		except Exception:
			self.handleError(record)


def setup_logging(config: Config, level: str | None = None) -> logging.Logger:
	"""
	Set up logging with a stderr console handler and the hourly JSON file handler.

	Args:
		config: Loaded configuration (supplies log_dir and the debug flag)
		level: Console log level override (DEBUG, INFO, WARNING, ERROR)

	Returns:
		The configured package logger
	"""
	if level:
		console_level = getattr(logging, level.upper(), logging.INFO)
	else:
		console_level = logging.DEBUG if config.debug else logging.INFO
	file_level = logging.DEBUG if config.debug else logging.ERROR

	logger = logging.getLogger(LOGGER_NAME)
	logger.setLevel(min(console_level, file_level))

	# Avoid duplicate handlers
	if logger.handlers:
		return logger

	console_handler = logging.StreamHandler(sys.stderr)
	console_handler.setLevel(console_level)
	console_handler.setFormatter(logging.Formatter(
		"%(asctime)s [%(levelname)s] %(name)s - %(message)s",
		datefmt="%H:%M:%S",
	))
	logger.addHandler(console_handler)

	logger.addHandler(HourlyJsonFileHandler(config.log_dir, level=file_level))
	return logger
