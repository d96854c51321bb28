"""
Documentation library - resolves logical doc paths against a snapshot directory.

A requested path is either a file (returned verbatim), a directory (listing plus
the concatenated files and related-path suggestions), or missing, in which case
callers build suggestions from find_nearest_directory and get_matching_paths.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .ranker import MatchScore, get_matching_paths, rank_documents
from .walker import FileListingCache, is_doc_file

logger = logging.getLogger(__name__)

REFERENCE_DIR = "reference"


class DocsNotFoundError(FileNotFoundError):
	"""The documentation directory does not exist."""


@dataclass
class DocLookup:
	"""Outcome of resolving one documentation path."""
	found: bool
	content: str | None = None


@dataclass
class DirListing:
	"""Immediate children of a directory, both sorted. Directories end with '/'."""
	dirs: list[str] = field(default_factory=list)
	files: list[str] = field(default_factory=list)


class DocsLibrary:
	"""
	Read access to a documentation snapshot.

	Owns the file listing cache used for content search, so separate libraries
	(e.g. one per test) never share cached listings.

	Usage:
		library = DocsLibrary(Path("~/.local/share/kaiban-docs-mcp/docs/raw"))
		lookup = library.read_doc_content("tools-docs/custom-tools", ["search"])
	"""

	def __init__(self, base_dir: Path, cache: FileListingCache | None = None):
		self.base_dir = Path(os.path.normpath(Path(base_dir).expanduser().absolute()))
		self.cache = cache if cache is not None else FileListingCache()
		self._available_paths: str | None = None

	def _full_path(self, doc_path: str) -> Path | None:
		"""Absolute path for a doc path, or None if it escapes the base directory."""
		full_path = Path(os.path.normpath(self.base_dir / doc_path.strip("/")))
		if full_path != self.base_dir and self.base_dir not in full_path.parents:
			return None
		return full_path

	def list_dir_contents(self, dir_path: Path) -> DirListing:
		"""List immediate subdirectories and documentation files of ``dir_path``."""
		logger.debug(f"Listing directory contents: {dir_path}")
		listing = DirListing()
		try:
			with os.scandir(dir_path) as it:
				for entry in it:
					if entry.is_dir(follow_symlinks=False):
						listing.dirs.append(entry.name + "/")
					elif entry.is_file(follow_symlinks=False) and is_doc_file(entry.name):
						listing.files.append(entry.name)
		except OSError:
			logger.exception(f"Failed to list directory contents: {dir_path}")
			raise
		listing.dirs.sort()
		listing.files.sort()
		return listing

	def get_matching_paths(self, doc_path: str, query_keywords: list[str] | None = None) -> str:
		"""Related-paths suggestion block for ``doc_path`` searched across the whole tree."""
		return get_matching_paths(doc_path, query_keywords, self.base_dir, self.cache)

	def rank(self, keywords: list[str]) -> list[MatchScore]:
		return rank_documents(keywords, self.base_dir, self.cache)

	def _render_directory(self, doc_path: str, full_path: Path, query_keywords: list[str] | None) -> str:
		listing = self.list_dir_contents(full_path)
		dir_listing = "\n".join([
			f"Directory contents of {doc_path}:",
			"",
			"Subdirectories:" if listing.dirs else "No subdirectories.",
			*(f"- {d}" for d in listing.dirs),
			"",
			"Files in this directory:" if listing.files else "No files in this directory.",
			*(f"- {f}" for f in listing.files),
			"",
			"---",
			"",
			"Contents of all files in this directory:",
			"",
		])

		file_contents = ""
		for name in listing.files:
			content = (full_path / name).read_text(encoding="utf-8", errors="replace")
			file_contents += f"\n\n# {name}\n\n{content}"

		suggestions = "\n".join(["---", "", self.get_matching_paths(doc_path, query_keywords), ""])
		return dir_listing + file_contents + suggestions

	def read_doc_content(self, doc_path: str, query_keywords: list[str] | None = None) -> DocLookup:
		"""
		Resolve ``doc_path`` relative to the base directory.

		Returns:
			DocLookup(found=True, content=...) for files and directories,
			DocLookup(found=False) when nothing exists at that path.

		Raises:
			OSError: for filesystem failures other than a missing path.
		"""
		full_path = self._full_path(doc_path)
		logger.debug(f"Reading doc content from: {full_path}")
		if full_path is None:
			logger.warning(f"Rejected doc path outside the docs directory: {doc_path}")
			return DocLookup(found=False)

		try:
			if full_path.is_dir():
				return DocLookup(found=True, content=self._render_directory(doc_path, full_path, query_keywords))
			return DocLookup(found=True, content=full_path.read_text(encoding="utf-8", errors="replace"))
		except (FileNotFoundError, NotADirectoryError):
			logger.debug(f"Doc path not found: {doc_path}")
			return DocLookup(found=False)
		except OSError:
			logger.exception(f"Failed to read doc content: {full_path}")
			raise

	def find_nearest_directory(self, doc_path: str, available_paths: str | None = None) -> str:
		"""
		Suggest the contents of the closest existing ancestor of a missing path.

		Falls back to the full available-paths listing when no ancestor exists.
		"""
		logger.debug(f"Finding nearest directory for: {doc_path}")
		parts = [part for part in doc_path.strip("/").split("/") if part]
		while parts:
			test_path = "/".join(parts)
			full_path = self._full_path(test_path)
			if full_path is not None and full_path.is_dir():
				listing = self.list_dir_contents(full_path)
				return "\n".join([
					f'Path "{doc_path}" not found.',
					f'Here are the available paths in "{test_path}":',
					"",
					"Directories:" if listing.dirs else "No subdirectories.",
					*(f"- {test_path}/{d}" for d in listing.dirs),
					"",
					"Files:" if listing.files else "No files.",
					*(f"- {test_path}/{f}" for f in listing.files),
				])
			logger.debug(f"Directory not found, trying parent: {'/'.join(parts[:-1])}")
			parts.pop()

		if available_paths is None:
			available_paths = self.get_available_paths()
		return "\n".join([
			f'Path "{doc_path}" not found.',
			"Here are all available paths:",
			"",
			available_paths,
		])

	def get_available_paths(self) -> str:
		"""
		Top-level directories and files plus one level of reference/ subdirectories.

		Computed once per library.

		Raises:
			DocsNotFoundError: if the base directory does not exist.
		"""
		if self._available_paths is not None:
			return self._available_paths

		if not self.base_dir.is_dir():
			raise DocsNotFoundError(
				f"Documentation directory not found: {self.base_dir}. Run 'kaiban-docs-mcp prepare' first."
			)

		listing = self.list_dir_contents(self.base_dir)
		reference_dirs: list[str] = []
		if f"{REFERENCE_DIR}/" in listing.dirs:
			ref_listing = self.list_dir_contents(self.base_dir / REFERENCE_DIR)
			reference_dirs = [f"{REFERENCE_DIR}/{d}" for d in ref_listing.dirs]

		lines = [
			"Available top-level paths:",
			"",
			"Directories:",
			*(f"- {d}" for d in listing.dirs),
			"",
			"Reference subdirectories:" if reference_dirs else "",
			*(f"- {d}" for d in reference_dirs),
			"",
			"Files:",
			*(f"- {f}" for f in listing.files),
		]
		self._available_paths = "\n".join(line for line in lines if line)
		return self._available_paths
