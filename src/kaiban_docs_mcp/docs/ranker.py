"""
Keyword relevance ranking over a documentation tree.

Scores every documentation file under a base directory against a keyword list
and returns the best matching relative paths.

Scoring:
- total keyword hits (x1)
- hits on title-like lines, i.e. lines containing "#" or "title" (x3)
- path relevance (x2): +2 under reference/, +3 per keyword in the path,
  +1 if the path mentions a high-value section
- distinct keywords matched (x5)
- +10 when every keyword was matched
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .keywords import combine_keywords
from .walker import FileListingCache, walk_doc_files

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
REFERENCE_PREFIX = "reference/"
HIGH_VALUE_SEGMENTS = ("rag", "memory", "agents", "workflows")

TOTAL_MATCH_WEIGHT = 1
TITLE_MATCH_WEIGHT = 3
PATH_RELEVANCE_WEIGHT = 2
KEYWORD_MATCH_WEIGHT = 5
ALL_KEYWORDS_BONUS = 10


@dataclass
class MatchScore:
	"""Per-file match statistics for one search call."""
	path: str
	path_relevance: int
	keyword_matches: set[str] = field(default_factory=set)
	total_matches: int = 0
	title_matches: int = 0

	def final_score(self, total_keywords: int) -> int:
		return calculate_final_score(self, total_keywords)


def is_title_line(lower_line: str) -> bool:
	# Deliberately loose: any "#" or "title" anywhere on the line counts
	return "#" in lower_line or "title" in lower_line


def calculate_path_relevance(file_path: str, keywords: list[str]) -> int:
	"""Content-independent relevance of a relative path."""
	relevance = 0
	path_lower = file_path.lower()
	if path_lower.startswith(REFERENCE_PREFIX):
		relevance += 2
	for keyword in keywords:
		if keyword.lower() in path_lower:
			relevance += 3
	if any(segment in path_lower for segment in HIGH_VALUE_SEGMENTS):
		relevance += 1
	return relevance


def calculate_final_score(score: MatchScore, total_keywords: int) -> int:
	all_keywords_bonus = ALL_KEYWORDS_BONUS if len(score.keyword_matches) == total_keywords else 0
	return (
		score.total_matches * TOTAL_MATCH_WEIGHT
		+ score.title_matches * TITLE_MATCH_WEIGHT
		+ score.path_relevance * PATH_RELEVANCE_WEIGHT
		+ len(score.keyword_matches) * KEYWORD_MATCH_WEIGHT
		+ all_keywords_bonus
	)


def _read_text(file_path: Path) -> str | None:
	try:
		return file_path.read_text(encoding="utf-8", errors="replace")
	except OSError as e:
		logger.debug(f"Skipping unreadable doc file {file_path}: {e}")
		return None


def score_files(keywords: list[str], base_dir: Path, cache: FileListingCache) -> dict[str, MatchScore]:
	"""
	Build match scores for every file under ``base_dir`` with at least one hit.

	Files with no hits are absent from the result. Insertion order follows the
	walk order.
	"""
	base_dir = Path(base_dir).absolute()
	file_scores: dict[str, MatchScore] = {}
	lowered = [keyword.lower() for keyword in keywords]

	for file_path in walk_doc_files(base_dir, cache):
		content = _read_text(file_path)
		if content is None:
			continue

		relative_path = file_path.relative_to(base_dir).as_posix()
		for line in content.split("\n"):
			lower_line = line.lower()
			for keyword, keyword_lower in zip(keywords, lowered):
				if keyword_lower not in lower_line:
					continue
				score = file_scores.get(relative_path)
				if score is None:
					score = MatchScore(
						path=relative_path,
						path_relevance=calculate_path_relevance(relative_path, keywords),
					)
					file_scores[relative_path] = score
				score.keyword_matches.add(keyword)
				score.total_matches += 1
				if is_title_line(lower_line):
					score.title_matches += 1

	return file_scores


def rank_documents(
	keywords: list[str],
	base_dir: Path,
	cache: FileListingCache,
	limit: int = MAX_RESULTS,
) -> list[MatchScore]:
	"""Return the best ``limit`` match scores, highest final score first."""
	if not keywords:
		return []

	file_scores = score_files(keywords, base_dir, cache)
	total = len(keywords)
	# sorted() is stable, so equal scores keep walk order
	ranked = sorted(file_scores.values(), key=lambda s: s.final_score(total), reverse=True)
	return ranked[:limit]


def search_document_content(keywords: list[str], base_dir: Path, cache: FileListingCache) -> list[str]:
	"""Relative paths of the best matching documents, at most MAX_RESULTS."""
	return [score.path for score in rank_documents(keywords, base_dir, cache)]


def get_matching_paths(
	doc_path: str,
	query_keywords: list[str] | None,
	base_dir: Path,
	cache: FileListingCache,
) -> str:
	"""
	Suggestion block of related documents for a requested path.

	Returns an empty string when no keywords can be derived or nothing matches.
	"""
	keywords = combine_keywords(doc_path, query_keywords)
	if not keywords:
		return ""

	suggested = search_document_content(keywords, base_dir, cache)
	if not suggested:
		return ""

	path_list = "\n".join(f"- {path}" for path in suggested)
	return f"Here are some paths that might be relevant based on your query:\n\n{path_list}"
