"""Tests for ffgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ffgen.config import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    ConfigError,
    FfgenConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, FfgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.files.include == DEFAULT_INCLUDE_PATTERNS
    assert config.files.exclude == DEFAULT_EXCLUDE_PATTERNS
    assert config.files.include_file_path is True
    assert config.output.directory == ".ffg"
    assert config.output.prefix == "ffg_output_"
    assert config.aliases.manifest == "tsconfig.json"
    assert config.aliases.try_all_targets is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".ffgen.yml"
    config_file.write_text(
        """
files:
  include: ["src/**", "*.ts"]
  exclude:
    - "**/vendor/**"
  include_file_path: false
output:
  directory: "context"
  prefix: "snap_"
aliases:
  manifest: "jsconfig.json"
  try_all_targets: yes
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.files.include == ["src/**", "*.ts"]
    assert config.files.exclude == ["**/vendor/**"]
    assert config.files.include_file_path is False
    assert config.output.directory == "context"
    assert config.output.prefix == "snap_"
    assert config.aliases.manifest == "jsconfig.json"
    assert config.aliases.try_all_targets is True


def test_empty_exclude_list_disables_default_excludes(tmp_path: Path) -> None:
    (tmp_path / ".ffgen.yml").write_text("files:\n  exclude: []\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.files.exclude == []
    assert config.files.include == DEFAULT_INCLUDE_PATTERNS


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".ffgen.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).output.directory == ".ffg"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ffgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ffgen.yml").write_text("files: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
