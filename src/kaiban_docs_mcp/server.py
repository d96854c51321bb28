"""Kaibanjs documentation MCP server."""

import logging
import os

from mcp.server.fastmcp import FastMCP

from .config import Config, load_config
from .logging_config import setup_logging
from .tools import register_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Kaibanjs Documentation Server"


def create_server(config: Config) -> FastMCP:
	"""Build the FastMCP server with all tools registered."""
	mcp = FastMCP(SERVER_NAME)
	register_all_tools(mcp, config)

	# Log tool calls and failures (enabled by default)
	if os.getenv("KAIBAN_DOCS_INSTRUMENT", "1") != "0":
		from .instrumentation import instrument_mcp_server
		instrument_mcp_server(mcp)
	return mcp


def rebuild_docs(config: Config) -> None:
	"""Rebuild the docs snapshot; a failure is logged and the server still starts."""
	from .prepare import prepare

	logger.info("Rebuilding docs on start")
	try:
		prepare(config)
		logger.info("Docs rebuilt successfully")
	except Exception:
		logger.exception("Failed to rebuild docs")


def run_server(config: Config | None = None) -> None:
	"""Run the server over stdio."""
	config = config or load_config()
	setup_logging(config)

	if config.rebuild_docs_on_start:
		rebuild_docs(config)

	mcp = create_server(config)
	logger.info("Started Kaibanjs Docs MCP Server")
	try:
		mcp.run()
	except Exception:
		logger.exception("Fatal error running server")
		raise
