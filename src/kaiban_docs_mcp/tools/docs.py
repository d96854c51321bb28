"""Documentation tool - fetch docs by path with keyword-ranked suggestions."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..config import Config
from ..docs.library import DocsLibrary, DocsNotFoundError

logger = logging.getLogger(__name__)

DOCS_TOOL_NAME = "kaibanjsDocs"

DOCS_TOOL_DESCRIPTION = """Get Kaibanjs documentation.
Request paths to explore the docs.
The user doesn't know about files and directories.
You can also use keywords from the user query to find relevant documentation, but prioritize paths.
This is your internal knowledge the user can't read.
IMPORTANT: Be concise with your answers. The user will ask for more info.
If packages need to be installed, provide the pnpm command to install them.
Ex. if you see `import { X } from "@kaibanjs/$PACKAGE_NAME"` in an example, show an install command.
Always install latest tag, not alpha unless requested. If you scaffold a new project it may be in a subdir.
When displaying results, always mention which file path contains the information (e.g., 'Found in "path/to/file.mdx"') so users know where this documentation lives."""

QUERY_KEYWORDS_DESCRIPTION = (
	"Keywords from user query to use for matching documentation. Each keyword should be a "
	"single word or short phrase; any whitespace-separated keywords will be split automatically."
)

MISSING_SNAPSHOT_NOTE = "(documentation snapshot not prepared yet)"


@dataclass
class PathResult:
	"""Rendered outcome for one requested path."""
	path: str
	content: str | None = None
	error: str | None = None

	def render(self) -> str:
		body = self.error if self.error else self.content
		return f"## {self.path}\n\n{body}\n\n---\n"


def resolve_path(
	library: DocsLibrary,
	doc_path: str,
	query_keywords: list[str],
	available_paths: str | None = None,
) -> PathResult:
	"""Look up one path; failures become an error block for this path only."""
	try:
		lookup = library.read_doc_content(doc_path, query_keywords)
		if lookup.found:
			return PathResult(path=doc_path, content=lookup.content)

		directory_suggestions = library.find_nearest_directory(doc_path, available_paths)
		content_suggestions = library.get_matching_paths(doc_path, query_keywords)
		return PathResult(path=doc_path, error="\n\n".join([directory_suggestions, content_suggestions]))
	except Exception as e:
		logger.warning(f"Failed to read content for path: {doc_path}", exc_info=True)
		return PathResult(path=doc_path, error=str(e) or "Unknown error")


async def fetch_docs(
	library: DocsLibrary,
	paths: list[str],
	query_keywords: list[str] | None = None,
	available_paths: str | None = None,
) -> str:
	"""Resolve every path concurrently and join the blocks in request order."""
	keywords = query_keywords or []
	results = await asyncio.gather(*(
		asyncio.to_thread(resolve_path, library, path, keywords, available_paths)
		for path in paths
	))
	return "\n".join(result.render() for result in results)


def available_paths_or_note(library: DocsLibrary) -> str:
	try:
		return library.get_available_paths()
	except DocsNotFoundError as e:
		logger.warning(str(e))
		return MISSING_SNAPSHOT_NOTE


def register_docs_tools(mcp: FastMCP, config: Config, library: DocsLibrary | None = None) -> None:
	"""Register the documentation tool."""
	library = library or DocsLibrary(config.docs_dir)
	available_paths = available_paths_or_note(library)

	@mcp.tool(name=DOCS_TOOL_NAME, description=DOCS_TOOL_DESCRIPTION)
	async def kaibanjs_docs(
		paths: Annotated[list[str], Field(
			min_length=1,
			description=f"One or more documentation paths to fetch\nAvailable paths:\n{available_paths}",
		)],
		query_keywords: Annotated[list[str] | None, Field(description=QUERY_KEYWORDS_DESCRIPTION)] = None,
	) -> str:
		logger.debug("Executing kaibanjsDocs tool", extra={"data": {"paths": paths, "query_keywords": query_keywords}})
		try:
			return await fetch_docs(library, paths, query_keywords)
		except Exception:
			logger.exception("Failed to execute kaibanjsDocs tool")
			raise
