"""MCP tool registration."""

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..docs.library import DocsLibrary
from .core import register_core_tools
from .docs import register_docs_tools


def register_all_tools(mcp: FastMCP, config: Config, library: DocsLibrary | None = None) -> DocsLibrary:
	"""Register all MCP tools against a single shared docs library."""
	library = library or DocsLibrary(config.docs_dir)
	register_core_tools(mcp, config, library)
	register_docs_tools(mcp, config, library)
	return library
