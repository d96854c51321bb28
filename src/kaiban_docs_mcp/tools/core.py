"""Core health check tool."""

import json

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..docs.library import DocsLibrary


def register_core_tools(mcp: FastMCP, config: Config, library: DocsLibrary) -> None:
	"""Register core tools."""

	@mcp.tool()
	async def health_check() -> str:
		"""
		Check the health of the documentation server.
		Returns status of the docs snapshot, cache and logging.
		"""
		status = {
			"server": "running",
			"docs_dir": str(library.base_dir),
			"docs_dir_exists": library.base_dir.is_dir(),
			"cached_directories": len(library.cache),
			"log_dir": str(config.log_dir),
			"rebuild_docs_on_start": config.rebuild_docs_on_start,
			"debug": config.debug,
		}
		return json.dumps(status, indent=2)
