"""Tests for crudgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from crudgen.config import ConfigError, GeneratorConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    root = tmp_path.resolve()

    assert isinstance(config, GeneratorConfig)
    assert config.root == root
    assert config.models_dir == root / "Data" / "Models"
    assert config.repos_output_dir == root / "Data" / "Repos"
    assert config.controllers_output_dir == root / "Controllers"
    assert config.overwrite_existing is False
    assert config.base_class_name == "AuditableEntity"
    assert config.templates_dir is None
    assert config.exclude_paths == ()
    assert config.strict_parsing is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".crudgen.yml").write_text(
        """
paths:
  models: src/Domain
  repositories: src/Infrastructure/Repos
  controllers: /srv/api/Controllers
base_class: Entity
overwrite: yes
templates_dir: templates
exclude_paths:
  - "Legacy/"
strict_parsing: false
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".crudgen.yml")
    root = tmp_path.resolve()

    assert config.models_dir == root / "src" / "Domain"
    assert config.repos_output_dir == root / "src" / "Infrastructure" / "Repos"
    assert config.controllers_output_dir == Path("/srv/api/Controllers")
    assert config.base_class_name == "Entity"
    assert config.overwrite_existing is True
    assert config.templates_dir == root / "templates"
    assert config.exclude_paths == ("Legacy/",)
    assert config.strict_parsing is False


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".crudgen.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".crudgen.yml").write_text("paths: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_with_overrides_ignores_none(tmp_path: Path) -> None:
    config = GeneratorConfig.defaults(tmp_path)
    updated = config.with_overrides(base_class_name=None, overwrite_existing=True)

    assert updated.base_class_name == "AuditableEntity"
    assert updated.overwrite_existing is True
    assert config.overwrite_existing is False


def test_validate_reports_missing_models_directory(tmp_path: Path) -> None:
    config = GeneratorConfig.defaults(tmp_path)
    with pytest.raises(ConfigError, match="Models directory not found"):
        config.validate()


def test_validate_rejects_blank_base_class(tmp_path: Path) -> None:
    (tmp_path / "Data" / "Models").mkdir(parents=True)
    config = GeneratorConfig.defaults(tmp_path).with_overrides(base_class_name="  ")
    with pytest.raises(ConfigError, match="Base class name"):
        config.validate()
