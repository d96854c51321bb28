"""Keyword extraction from documentation paths and free-text queries."""

import re
from collections.abc import Iterable

MIN_KEYWORD_LENGTH = 3

_EXTENSION_RE = re.compile(r"\.(mdx|md)$")
# Split on separators and before every upper-case letter (camelCase aware)
_SPLIT_RE = re.compile(r"[-_]|(?=[A-Z])")


def extract_keywords_from_path(path: str) -> list[str]:
	"""
	Derive keywords from every segment of a documentation path.

	Directory segments count too, so "reference/agents" yields both terms
	and a missing page still matches on the section it was requested under.

	Example:
		extract_keywords_from_path("custom-tools/WebSearchTool.mdx")
		-> ["custom", "tools", "web", "search", "tool"]
	"""
	keywords: dict[str, None] = {}
	for segment in path.split("/"):
		name = _EXTENSION_RE.sub("", segment)
		for part in _SPLIT_RE.split(name):
			if len(part) >= MIN_KEYWORD_LENGTH:
				keywords[part.lower()] = None
	return list(keywords)


def normalize_keywords(keywords: Iterable[str]) -> list[str]:
	"""Split on whitespace, lowercase and de-duplicate, keeping first-seen order."""
	normalized: dict[str, None] = {}
	for keyword in keywords:
		for term in keyword.split():
			normalized[term.lower()] = None
	return list(normalized)


def combine_keywords(path: str, query_keywords: Iterable[str] | None = None) -> list[str]:
	"""Path-derived keywords merged with the caller's query keywords."""
	return normalize_keywords([*extract_keywords_from_path(path), *(query_keywords or [])])
