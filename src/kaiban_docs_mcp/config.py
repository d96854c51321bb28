"""Configuration system using platformdirs for cross-platform paths."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

APP_NAME = "kaiban-docs-mcp"
APP_AUTHOR = "kaibanjs"

LOG_DIR_NAME = "mcp-docs-server-logs"


def _parse_flag(value: object) -> bool:
	if isinstance(value, bool):
		return value
	return str(value).strip().lower() not in ("", "0", "false", "no", "off")


def _env_flag(name: str) -> bool:
	return _parse_flag(os.getenv(name, ""))


@dataclass
class Config:
	"""Central configuration with XDG/platform conventions."""

	config_dir: Path = field(default_factory=lambda: Path(platformdirs.user_config_dir(APP_NAME)))
	cache_dir: Path = field(default_factory=lambda: Path(platformdirs.user_cache_dir(APP_NAME)))
	data_dir: Path = field(default_factory=lambda: Path(platformdirs.user_data_dir(APP_NAME)))

	# Derived paths
	log_dir: Path = field(init=False)
	docs_dir: Path = field(init=False)

	# User-configurable
	docs_source: Path = field(default_factory=lambda: Path("docs"))
	docs_dir_override: Path | None = None
	rebuild_docs_on_start: bool = False
	debug: bool = False

	def __post_init__(self) -> None:
		self.log_dir = self.cache_dir / LOG_DIR_NAME
		self.docs_dir = self.docs_dir_override or self.data_dir / "docs" / "raw"

	@property
	def config_file(self) -> Path:
		return self.config_dir / "config.toml"

	def ensure_dirs(self) -> None:
		"""Create all required directories."""
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.cache_dir.mkdir(parents=True, exist_ok=True)
		self.data_dir.mkdir(parents=True, exist_ok=True)
		self.log_dir.mkdir(parents=True, exist_ok=True)


def _apply_env_overrides(config: Config) -> Config:
	"""Apply KAIBAN_DOCS_* environment variable overrides."""
	env_map = {
		"KAIBAN_DOCS_CONFIG_DIR": "config_dir",
		"KAIBAN_DOCS_CACHE_DIR": "cache_dir",
		"KAIBAN_DOCS_DATA_DIR": "data_dir",
		"KAIBAN_DOCS_DIR": "docs_dir_override",
		"KAIBAN_DOCS_SOURCE": "docs_source",
	}
	for env_key, attr in env_map.items():
		val = os.getenv(env_key)
		if val:
			setattr(config, attr, Path(val))
	if os.getenv("REBUILD_DOCS_ON_START") is not None:
		config.rebuild_docs_on_start = os.getenv("REBUILD_DOCS_ON_START") == "true"
	if os.getenv("DEBUG") is not None:
		config.debug = _env_flag("DEBUG")
	# Recompute derived paths after overrides
	config.__post_init__()
	return config


def _apply_toml(config: Config) -> Config:
	"""Apply config.toml overrides if file exists."""
	toml_path = config.config_file
	if not toml_path.exists():
		return config

	with open(toml_path, "rb") as f:
		data = tomllib.load(f)

	path_fields = {"cache_dir", "data_dir", "docs_source"}
	for key, val in data.items():
		if key == "docs_dir":
			config.docs_dir_override = Path(os.path.expanduser(val))
		elif key in path_fields:
			setattr(config, key, Path(os.path.expanduser(val)))
		elif key in {"rebuild_docs_on_start", "debug"}:
			setattr(config, key, _parse_flag(val))

	# Recompute derived paths after toml overrides
	config.__post_init__()
	return config


def load_config() -> Config:
	"""Load config with precedence: env vars > config.toml > defaults."""
	config = Config()
	# config_dir decides where config.toml lives, so honour its env override first
	env_config_dir = os.getenv("KAIBAN_DOCS_CONFIG_DIR")
	if env_config_dir:
		config.config_dir = Path(env_config_dir)
	config = _apply_toml(config)
	config = _apply_env_overrides(config)
	config.ensure_dirs()
	return config


# Singleton
_config: Config | None = None


def get_config() -> Config:
	"""Get or create the global config instance."""
	global _config
	if _config is None:
		_config = load_config()
	return _config
