"""Flatten the documentation tree into a single llms-full.txt file."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("static") / "llms-full.txt"
SKIP_PREFIX = "_DONTUSE"
EXPORT_EXTENSION = ".md"
PATH_PREFIX = "./src/"
FILE_BANNER_RULE = "//--------------------------------------------"

INSTRUCTIONS_PROMPT = """This is the /llms-full.txt file for KaibanJS documentation, providing a comprehensive snapshot of all documentation content in a format optimized for Large Language Models (LLMs) while maintaining human readability.

**Directory Structure**

The 'Directory Structure' section presents a hierarchical view of the documentation files, organized into main categories:
- Get Started guides
- Tools documentation
  - Custom tools
  - Langchain tools
- API documentation

**Documentation Contents**

The 'Documentation Contents' section contains the full content of each documentation file, organized with:

- Clear section headers (###) with relative file paths
- File separators for improved readability
- Full markdown content including:
  - Installation guides
  - Tool configuration instructions
  - API usage examples
  - Tutorials for React and Node.js
  - Custom tool implementation guides
  - Integration instructions

Each file is clearly demarcated with:
```
//--------------------------------------------
// File: ./src/path/to/file.md
//--------------------------------------------
```

This format enables:
- Efficient LLM processing and context understanding
- Improved AI-powered documentation search
- Better integration with AI coding assistants
- Enhanced automated documentation analysis"""


def generate_dir_structure(directory: Path, prefix: str = "") -> str:
	"""Tree view of ``directory``; _DONTUSE files are left out, directories never are."""
	structure = ""
	for entry in sorted(Path(directory).iterdir(), key=lambda p: p.name):
		if entry.is_dir():
			structure += f"{prefix}└── {entry.name}\n"
			structure += generate_dir_structure(entry, prefix + "    ")
		elif not entry.name.startswith(SKIP_PREFIX):
			structure += f"{prefix}└── {entry.name}\n"
	return structure


def collect_files(base_dir: Path) -> list[Path]:
	return sorted(path for path in Path(base_dir).rglob("*") if path.is_file())


def build_llms_full(base_dir: Path) -> str:
	"""Render the whole docs tree as one document."""
	base_dir = Path(base_dir)
	parts = [
		"# KaibanJS Documentation - /llms-full.txt\n\n",
		f"{INSTRUCTIONS_PROMPT} \n\n",
		f"## Directory Structure\n\n```\n{generate_dir_structure(base_dir)}```\n\n",
		"## File Contents\n\n",
	]

	for file in collect_files(base_dir):
		if file.suffix != EXPORT_EXTENSION or file.name.startswith(SKIP_PREFIX):
			continue
		relative_path = f"{PATH_PREFIX}{file.relative_to(base_dir).as_posix()}"
		content = file.read_text(encoding="utf-8", errors="replace")
		parts.append(
			f"### {relative_path}\n\n"
			"\n"
			f"{FILE_BANNER_RULE}\n"
			f"// File: {relative_path}\n"
			f"{FILE_BANNER_RULE}\n\n"
			f"{content}\n"
			"\n\n"
		)

	return "".join(parts)


def write_llms_full(base_dir: Path, output: Path = DEFAULT_OUTPUT) -> Path:
	"""Write the flattened docs to ``output``, creating parent directories."""
	output = Path(output)
	output.parent.mkdir(parents=True, exist_ok=True)
	output.write_text(build_llms_full(base_dir), encoding="utf-8")
	logger.info(f"Wrote {output}")
	return output
