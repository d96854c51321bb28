"""Rich views for ranked documentation search results."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from .docs.ranker import MatchScore


def coverage_style(matched: int, total: int) -> str:
	"""Return a Rich style for keyword coverage."""
	if total and matched == total:
		return "green"
	return "yellow" if matched else "red"


def render_search_results(
	scores: list[MatchScore],
	keywords: list[str],
	console: Optional[Console] = None,
) -> None:
	"""Render a table of ranked documents with their score breakdown."""
	console = console or Console()

	if not keywords:
		console.print("[dim]No keywords to search for.[/dim]")
		return
	if not scores:
		console.print(f"[dim]No documents match: {', '.join(keywords)}[/dim]")
		return

	total = len(keywords)
	table = Table(title=f"Documents matching: {', '.join(keywords)}")
	table.add_column("#", justify="right")
	table.add_column("Path", style="cyan")
	table.add_column("Score", justify="right")
	table.add_column("Hits", justify="right")
	table.add_column("Title Hits", justify="right")
	table.add_column("Path Rel.", justify="right")
	table.add_column("Keywords")

	for rank, score in enumerate(scores, start=1):
		matched = len(score.keyword_matches)
		style = coverage_style(matched, total)
		table.add_row(
			str(rank),
			score.path,
			str(score.final_score(total)),
			str(score.total_matches),
			str(score.title_matches),
			str(score.path_relevance),
			f"[{style}]{matched}/{total}[/{style}]",
		)

	console.print(table)
