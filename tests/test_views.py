"""Tests for Rich search result views."""

from rich.console import Console

from kaiban_docs_mcp.docs.ranker import MatchScore
from kaiban_docs_mcp.views import coverage_style, render_search_results


def _console() -> Console:
	return Console(record=True, width=200)


def test_coverage_style():
	assert coverage_style(2, 2) == "green"
	assert coverage_style(1, 2) == "yellow"
	assert coverage_style(0, 2) == "red"


def test_render_results_table():
	console = _console()
	scores = [
		MatchScore(path="reference/agents/Agent.mdx", path_relevance=6, keyword_matches={"agent"}, total_matches=3, title_matches=1),
		MatchScore(path="index.mdx", path_relevance=0, keyword_matches={"agent"}, total_matches=1),
	]
	render_search_results(scores, ["agent"], console=console)
	output = console.export_text()

	assert "Documents matching: agent" in output
	assert "reference/agents/Agent.mdx" in output
	assert "1/1" in output
	# 3 + 1*3 + 6*2 + 5 + 10
	assert "33" in output


def test_render_no_keywords():
	console = _console()
	render_search_results([], [], console=console)
	assert "No keywords" in console.export_text()


def test_render_no_results():
	console = _console()
	render_search_results([], ["zzz"], console=console)
	assert "No documents match: zzz" in console.export_text()
