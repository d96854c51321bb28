"""Recursive discovery of documentation files with a per-directory listing cache."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DOC_EXTENSIONS = (".mdx", ".md")


def is_doc_file(name: str) -> bool:
	return name.endswith(DOC_EXTENSIONS)


class FileListingCache:
	"""
	Maps a directory to the documentation files found beneath it.

	Entries are filled on first walk and never invalidated, so edits made on
	disk after a directory was walked are not picked up. Two concurrent first
	walks of the same directory both store the same list; the later write wins.
	"""

	def __init__(self) -> None:
		self._listings: dict[Path, list[Path]] = {}

	def get(self, directory: Path) -> list[Path] | None:
		return self._listings.get(Path(directory))

	def set(self, directory: Path, files: list[Path]) -> None:
		self._listings[Path(directory)] = list(files)

	def __contains__(self, directory: object) -> bool:
		return isinstance(directory, (str, os.PathLike)) and Path(directory) in self._listings

	def __len__(self) -> int:
		return len(self._listings)

	def clear(self) -> None:
		self._listings.clear()


def walk_doc_files(directory: Path, cache: FileListingCache) -> list[Path]:
	"""
	Return every documentation file beneath ``directory``, recursively.

	Entries are visited in name order. Each walked directory (the root and all
	of its subdirectories) is stored in ``cache``; cached directories are
	returned without touching the disk.

	Raises:
		OSError: if ``directory`` is missing, unreadable or not a directory.
	"""
	directory = Path(directory).absolute()
	cached = cache.get(directory)
	if cached is not None:
		return list(cached)

	files: list[Path] = []
	with os.scandir(directory) as it:
		entries = sorted(it, key=lambda e: e.name)

	for entry in entries:
		full_path = directory / entry.name
		if entry.is_dir(follow_symlinks=False):
			files.extend(walk_doc_files(full_path, cache))
		elif entry.is_file(follow_symlinks=False) and is_doc_file(entry.name):
			files.append(full_path)

	cache.set(directory, files)
	logger.debug(f"Cached {len(files)} doc files under {directory}")
	return list(files)
