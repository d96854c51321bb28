"""Tests for kaiban-docs-mcp."""
