"""Shared test fixtures and helpers for kaiban-docs-mcp tests."""

from pathlib import Path
from typing import Callable

from kaiban_docs_mcp.config import Config

SAMPLE_DOCS = {
	"index.mdx": "# Welcome\n\nKaibanJS is a framework for multi-agent systems.\n",
	"get-started/01-Quick-Start.mdx": "---\ntitle: Quick Start\n---\n\nInstall kaibanjs with npm.\n",
	"get-started/02-Core-Concepts.md": "# Core Concepts\n\nAgents, tasks and teams.\n",
	"tools-docs/custom-tools/WebSearchTool.mdx": (
		"# Web Search Tool\n\nUse the search tool to query the web.\nIt returns search results.\n"
	),
	"tools-docs/custom-tools/01-Create-a-Custom-Tool.mdx": "# Create a Custom Tool\n\nExtend the base tool class.\n",
	"tools-docs/langchain-tools/SerperTool.mdx": "# Serper\n\nGoogle search through Serper.\n",
	"reference/agents/Agent.mdx": "# Agent\n\nAn agent has a role and a goal.\n",
	"reference/workflows/Team.mdx": "# Team\n\nA team runs a workflow of tasks.\n",
	"notes.txt": "search search search\n",
}


def make_docs_tree(root: Path, files: dict[str, str] | None = None) -> Path:
	"""Write a documentation tree under root and return root."""
	for rel_path, content in (SAMPLE_DOCS if files is None else files).items():
		path = root / rel_path
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(content, encoding="utf-8")
	return root


def make_config(tmp_path: Path, **overrides) -> Config:
	"""Config with every directory inside tmp_path."""
	config = Config(
		config_dir=tmp_path / "config",
		cache_dir=tmp_path / "cache",
		data_dir=tmp_path / "data",
		docs_source=tmp_path / "source",
		**overrides,
	)
	config.ensure_dirs()
	return config


def capture_tools(config: Config, register_fn: Callable, *args) -> dict:
	"""Register tools on a mock MCP and return the captured tool functions.

	Args:
		config: Config object to pass to the registration function
		register_fn: The registration function (e.g., register_docs_tools)
		args: Extra positional arguments for the registration function

	Returns:
		Dict mapping tool name to the tool function
	"""
	captured = {}

	class MockMCP:
		def tool(self, name: str | None = None, description: str | None = None):
			def decorator(fn):
				captured[name or fn.__name__] = fn
				return fn
			return decorator

	register_fn(MockMCP(), config, *args)
	return captured
