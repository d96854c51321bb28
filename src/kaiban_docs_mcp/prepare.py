"""Rebuild the served documentation snapshot from the source docs tree."""

import logging
import shutil
from pathlib import Path

from .config import Config
from .docs.library import DocsNotFoundError
from .docs.walker import is_doc_file

logger = logging.getLogger(__name__)


def _ignore_non_docs(directory: str, names: list[str]) -> set[str]:
	"""copytree ignore hook: keep subdirectories and documentation files only."""
	base = Path(directory)
	return {name for name in names if not (base / name).is_dir() and not is_doc_file(name)}


def copy_raw(source: Path, dest: Path) -> int:
	"""
	Replace ``dest`` with a copy of the docs under ``source``.

	Directory structure is preserved; only .md/.mdx files are copied.

	Returns:
		Number of documentation files copied
	"""
	source = Path(source)
	dest = Path(dest)
	if not source.is_dir():
		raise DocsNotFoundError(f"Documentation source not found: {source}")

	if dest.exists():
		shutil.rmtree(dest)
	shutil.copytree(source, dest, ignore=_ignore_non_docs)

	copied = sum(1 for path in dest.rglob("*") if path.is_file())
	logger.info(f"Documentation files copied successfully ({copied} files to {dest})")
	return copied


def prepare(config: Config) -> int:
	"""Prepare the documentation snapshot served by the MCP server."""
	logger.info("Preparing documentation...")
	copied = copy_raw(config.docs_source, config.docs_dir)
	logger.info("Documentation preparation complete!")
	return copied
