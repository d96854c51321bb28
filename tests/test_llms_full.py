"""Tests for the llms-full.txt export."""

from pathlib import Path

import pytest

from kaiban_docs_mcp.llms_full import build_llms_full, generate_dir_structure, write_llms_full
from tests.helpers import make_docs_tree


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
	return make_docs_tree(tmp_path / "docs", {
		"intro.md": "# Intro\n\nHello.",
		"tools/search.md": "# Search\n",
		"tools/widget.mdx": "# Widget\n",
		"tools/_DONTUSE-draft.md": "draft",
	})


def test_dir_structure(docs_root: Path):
	assert generate_dir_structure(docs_root) == (
		"└── intro.md\n"
		"└── tools\n"
		"    └── search.md\n"
		"    └── widget.mdx\n"
	)


def test_build_includes_header_and_structure(docs_root: Path):
	text = build_llms_full(docs_root)
	assert text.startswith("# KaibanJS Documentation - /llms-full.txt\n\n")
	assert "## Directory Structure\n\n```\n└── intro.md\n" in text
	assert "## File Contents\n\n" in text


def test_build_file_sections(docs_root: Path):
	text = build_llms_full(docs_root)
	assert (
		"### ./src/tools/search.md\n\n\n"
		"//--------------------------------------------\n"
		"// File: ./src/tools/search.md\n"
		"//--------------------------------------------\n\n"
		"# Search\n\n\n\n"
	) in text
	assert "### ./src/intro.md" in text


def test_build_skips_drafts_and_non_md(docs_root: Path):
	text = build_llms_full(docs_root)
	assert "_DONTUSE" not in text
	assert "### ./src/tools/widget.mdx" not in text


def test_write_creates_parent_dirs(docs_root: Path, tmp_path: Path):
	output = write_llms_full(docs_root, tmp_path / "static" / "llms-full.txt")
	assert output.exists()
	assert output.read_text(encoding="utf-8") == build_llms_full(docs_root)
