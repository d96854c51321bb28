"""kaiban-docs-mcp: MCP documentation server for KaibanJS."""

__version__ = "0.3.0"
