"""CLI for kaiban-docs-mcp: serve, prepare, search, read, llms-full, and doctor commands."""

import argparse
import asyncio
import platform
import sys
import tomllib
from importlib.metadata import version as pkg_version
from pathlib import Path

from dotenv import load_dotenv

from .config import Config, load_config

CORE_DEPS = ["mcp", "platformdirs", "pydantic", "python-dotenv", "rich"]


def cmd_serve(args: argparse.Namespace) -> None:
	"""Run the MCP server (stdio transport)."""
	from .server import run_server
	run_server(load_config())


def cmd_prepare(args: argparse.Namespace) -> None:
	"""Copy the source docs tree into the served snapshot."""
	from .docs.library import DocsNotFoundError
	from .logging_config import setup_logging
	from .prepare import prepare

	config = load_config()
	if args.source:
		config.docs_source = Path(args.source)
	setup_logging(config)

	print("kaiban-docs-mcp prepare")
	print(f"{'=' * 40}")
	print(f"  Source:   {config.docs_source}")
	print(f"  Snapshot: {config.docs_dir}")
	try:
		copied = prepare(config)
	except (DocsNotFoundError, OSError) as e:
		print(f"  Failed to copy documentation files: {e}")
		sys.exit(1)
	print(f"  Copied {copied} documentation files.")


def cmd_search(args: argparse.Namespace) -> None:
	"""Rank documents for the given keywords and render the scores."""
	from .docs.keywords import normalize_keywords
	from .docs.library import DocsLibrary
	from .views import render_search_results

	config = load_config()
	library = DocsLibrary(Path(args.docs_dir) if args.docs_dir else config.docs_dir)
	keywords = normalize_keywords(args.keywords)
	try:
		scores = library.rank(keywords)
	except OSError as e:
		print(f"Error: {e}")
		sys.exit(1)
	render_search_results(scores, keywords)


def cmd_read(args: argparse.Namespace) -> None:
	"""Print what the docs tool would return for the given paths."""
	from .docs.library import DocsLibrary
	from .tools.docs import fetch_docs

	config = load_config()
	library = DocsLibrary(Path(args.docs_dir) if args.docs_dir else config.docs_dir)
	print(asyncio.run(fetch_docs(library, args.paths, args.keywords)))


def cmd_llms_full(args: argparse.Namespace) -> None:
	"""Flatten the docs tree into a single llms-full.txt file."""
	from .llms_full import write_llms_full

	source = Path(args.source)
	if not source.is_dir():
		print(f"Docs directory not found: {source}")
		sys.exit(1)
	output = write_llms_full(source, Path(args.output))
	print(f"Wrote {output}")


def _check_config_toml(config: Config) -> tuple[str, str | None]:
	"""Validate config.toml if present. Returns (status, issue_or_none)."""
	toml_path = config.config_file
	if not toml_path.exists():
		return "not present (using defaults)", None
	try:
		with open(toml_path, "rb") as f:
			tomllib.load(f)
		return "valid", None
	except tomllib.TOMLDecodeError as e:
		return f"INVALID ({e})", f"config.toml parse error: {e}"


def _check_docs_snapshot(config: Config) -> tuple[str, str | None]:
	"""Count documentation files in the snapshot. Returns (status, issue_or_none)."""
	from .docs.walker import FileListingCache, walk_doc_files

	if not config.docs_dir.is_dir():
		return "MISSING", f"Docs snapshot not found at {config.docs_dir} (run 'kaiban-docs-mcp prepare')"
	try:
		count = len(walk_doc_files(config.docs_dir, FileListingCache()))
	except OSError as e:
		return f"UNREADABLE ({e})", f"Docs snapshot unreadable: {e}"
	if count == 0:
		return "EMPTY", "Docs snapshot contains no .md/.mdx files"
	return f"OK ({count} files)", None


def _check_server_startup(config: Config) -> tuple[str, str | None]:
	"""Try building the server and counting registered tools. Returns (status, issue_or_none)."""
	try:
		from .server import create_server
		server_instance = create_server(config)
		count = len(server_instance._tool_manager._tools)
		return f"OK ({count} tools registered)", None
	except Exception as e:
		return f"FAILED ({e})", f"Server startup failed: {e}"


def cmd_doctor(args: argparse.Namespace) -> None:
	"""Health check - verify installation, configuration and the docs snapshot."""
	print("kaiban-docs-mcp doctor")
	print(f"{'=' * 40}")

	config = load_config()
	issues: list[str] = []

	py_ver = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
	print(f"  Python:       {py_ver}")
	print(f"  Platform:     {platform.system()} {platform.machine()}")
	print()

	print("  Core deps:")
	for dep in CORE_DEPS:
		try:
			dep_ver = pkg_version(dep)
			print(f"    {dep:22s} {dep_ver}")
		except Exception:
			print(f"    {dep:22s} NOT INSTALLED")
			issues.append(f"{dep} package not installed")
	print()

	print("  Config:")
	toml_status, toml_issue = _check_config_toml(config)
	print(f"    config.toml:         {toml_status}")
	if toml_issue:
		issues.append(toml_issue)
	print(f"    log dir:             {config.log_dir}")
	print(f"    rebuild on start:    {config.rebuild_docs_on_start}")
	print(f"    debug:               {config.debug}")
	print()

	print("  Docs:")
	docs_status, docs_issue = _check_docs_snapshot(config)
	print(f"    snapshot:            {docs_status}")
	if docs_issue:
		issues.append(docs_issue)
	source_status = "present" if config.docs_source.is_dir() else "not found"
	print(f"    source ({config.docs_source}): {source_status}")
	print()

	print("  Server:")
	server_status, server_issue = _check_server_startup(config)
	print(f"    {server_status}")
	if server_issue:
		issues.append(server_issue)
	print()

	if issues:
		print(f"  {len(issues)} issue(s) found:")
		for issue in issues:
			print(f"    - {issue}")
		sys.exit(1)
	else:
		print("  All checks passed.")


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="kaiban-docs-mcp",
		description="MCP documentation server for KaibanJS",
	)
	parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
	subparsers = parser.add_subparsers(dest="command")

	# serve
	serve_parser = subparsers.add_parser("serve", help="Run MCP server (stdio)")
	serve_parser.set_defaults(func=cmd_serve)

	# prepare
	prepare_parser = subparsers.add_parser("prepare", help="Rebuild the docs snapshot from source")
	prepare_parser.add_argument("--source", type=str, default=None, help="Source docs directory")
	prepare_parser.set_defaults(func=cmd_prepare)

	# search
	search_parser = subparsers.add_parser("search", help="Rank documents by keywords")
	search_parser.add_argument("keywords", nargs="+", help="Keywords (phrases are split on whitespace)")
	search_parser.add_argument("--docs-dir", type=str, default=None, help="Docs directory (default: snapshot)")
	search_parser.set_defaults(func=cmd_search)

	# read
	read_parser = subparsers.add_parser("read", help="Fetch doc paths as the MCP tool would")
	read_parser.add_argument("paths", nargs="+", help="Documentation paths")
	read_parser.add_argument("--keywords", nargs="*", default=None, help="Query keywords")
	read_parser.add_argument("--docs-dir", type=str, default=None, help="Docs directory (default: snapshot)")
	read_parser.set_defaults(func=cmd_read)

	# llms-full
	llms_parser = subparsers.add_parser("llms-full", help="Flatten docs into llms-full.txt")
	llms_parser.add_argument("--source", type=str, default="docs", help="Docs directory (default: ./docs)")
	llms_parser.add_argument(
		"--output", type=str, default="static/llms-full.txt",
		help="Output file (default: static/llms-full.txt)",
	)
	llms_parser.set_defaults(func=cmd_llms_full)

	# doctor
	doctor_parser = subparsers.add_parser("doctor", help="Health check")
	doctor_parser.set_defaults(func=cmd_doctor)

	return parser


def _package_version() -> str:
	try:
		return pkg_version("kaiban-docs-mcp")
	except Exception:
		from . import __version__
		return __version__


def main() -> None:
	"""CLI entry point."""
	load_dotenv()
	parser = build_parser()
	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)
