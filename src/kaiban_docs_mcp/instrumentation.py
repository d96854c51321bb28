"""
Instrumentation layer for MCP tool call tracking.

Logs every tool call with its duration; failures are logged at error level so
they land in the hourly JSON error log. Nothing is persisted beyond the logs.
"""

import json
import logging
import time
from functools import wraps
from typing import Any

logger = logging.getLogger(__name__)


def _summarize_args(kwargs: dict[str, Any], max_len: int = 500) -> str:
	"""Create a short JSON summary of tool arguments."""
	if not kwargs:
		return ""
	text = json.dumps(kwargs, default=str)
	if len(text) > max_len:
		return text[:max_len] + "..."
	return text


def instrument_mcp_server(server: Any) -> int:
	"""
	Wrap a FastMCP server's tool functions to log every call.

	Returns:
		Number of tools instrumented
	"""
	# FastMCP keeps tools in _tool_manager._tools; each has a .fn callable
	tool_manager = getattr(server, "_tool_manager", None)
	if tool_manager is None:
		logger.warning("Could not find _tool_manager on server, skipping instrumentation")
		return 0

	tools = getattr(tool_manager, "_tools", None)
	if not isinstance(tools, dict):
		logger.warning("Could not find tools dict on tool_manager, skipping instrumentation")
		return 0

	for tool_name, tool_obj in tools.items():
		original_fn = tool_obj.fn

		@wraps(original_fn)
		async def instrumented(*args, _orig=original_fn, _name=tool_name, **kwargs):
			start = time.monotonic()
			try:
				result = await _orig(*args, **kwargs)
			except Exception:
				duration = time.monotonic() - start
				logger.error(
					f"Tool {_name} failed after {duration:.3f}s",
					exc_info=True,
					extra={"data": {"tool": _name, "args": _summarize_args(kwargs)}},
				)
				raise
			duration = time.monotonic() - start
			logger.debug(
				f"Tool {_name} completed in {duration:.3f}s",
				extra={"data": {"tool": _name, "args": _summarize_args(kwargs), "duration_seconds": round(duration, 4)}},
			)
			return result

		tool_obj.fn = instrumented

	logger.info(f"Instrumented {len(tools)} MCP tools")
	return len(tools)
