"""Configuration loading for ffgen (.ffgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".ffgen.yml"

DEFAULT_INCLUDE_PATTERNS: List[str] = ["**/*"]
DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    "**/node_modules/**",
    "**/dist/**",
    "**/out/**",
    "**/build/**",
    "**/.*/**",
]
DEFAULT_OUTPUT_DIRECTORY = ".ffg"
DEFAULT_OUTPUT_PREFIX = "ffg_output_"
DEFAULT_ALIAS_MANIFEST = "tsconfig.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FilesConfig:
    """Seed file filtering and picker presentation."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_file_path: bool = True


@dataclass
class OutputConfig:
    """Where the generated ffg command asks the tool to write its output."""

    directory: str = DEFAULT_OUTPUT_DIRECTORY
    prefix: str = DEFAULT_OUTPUT_PREFIX


@dataclass
class AliasConfig:
    """Path alias manifest settings."""

    manifest: str = DEFAULT_ALIAS_MANIFEST
    try_all_targets: bool = False


@dataclass
class FfgenConfig:
    """Represents the settings defined in .ffgen.yml."""

    root: Path
    files: FilesConfig = field(default_factory=FilesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    aliases: AliasConfig = field(default_factory=AliasConfig)


def load_config(config_path: Path) -> FfgenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return FfgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    files = FilesConfig()
    files_data = _as_dict(data.get("files"))
    if files_data:
        if "include" in files_data:
            files.include = _as_str_list(files_data.get("include"))
        if "exclude" in files_data:
            files.exclude = _as_str_list(files_data.get("exclude"))
        include_file_path = _as_bool(files_data.get("include_file_path"))
        if include_file_path is not None:
            files.include_file_path = include_file_path

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        output.directory = _as_str(output_data.get("directory")) or output.directory
        prefix = _as_str(output_data.get("prefix"))
        if prefix is not None:
            output.prefix = prefix

    aliases = AliasConfig()
    alias_data = _as_dict(data.get("aliases"))
    if alias_data:
        aliases.manifest = _as_str(alias_data.get("manifest")) or aliases.manifest
        aliases.try_all_targets = _as_bool(alias_data.get("try_all_targets")) or False

    return FfgenConfig(root=root, files=files, output=output, aliases=aliases)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
