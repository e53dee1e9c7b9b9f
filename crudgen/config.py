"""Configuration loading for crudgen (.crudgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".crudgen.yml"

DEFAULT_BASE_CLASS = "AuditableEntity"
DEFAULT_SOURCE_EXTENSION = ".cs"


class ConfigError(RuntimeError):
    """Raised when the configuration is invalid or cannot be parsed."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one generation run, built once before the run starts."""

    root: Path
    models_dir: Path
    repos_output_dir: Path
    controllers_output_dir: Path
    overwrite_existing: bool = False
    base_class_name: str = DEFAULT_BASE_CLASS
    templates_dir: Optional[Path] = None
    exclude_paths: tuple[str, ...] = field(default_factory=tuple)
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    strict_parsing: bool = True

    @classmethod
    def defaults(cls, root: Path) -> "GeneratorConfig":
        """Return the default layout for a project rooted at ``root``."""
        root = Path(root).expanduser().resolve()
        return cls(
            root=root,
            models_dir=root / "Data" / "Models",
            repos_output_dir=root / "Data" / "Repos",
            controllers_output_dir=root / "Controllers",
        )

    def with_overrides(self, **values: Any) -> "GeneratorConfig":
        """Return a copy with every non-None value applied."""
        changes = {key: value for key, value in values.items() if value is not None}
        if "exclude_paths" in changes:
            changes["exclude_paths"] = tuple(changes["exclude_paths"])
        return replace(self, **changes)

    def validate(self) -> None:
        """Raise ConfigError if the run cannot start with these settings."""
        if not self.models_dir.exists():
            raise ConfigError(f"Models directory not found: {self.models_dir}")
        if not self.models_dir.is_dir():
            raise ConfigError(f"Models path is not a directory: {self.models_dir}")
        if not self.base_class_name.strip():
            raise ConfigError("Base class name must not be empty")
        if self.templates_dir is not None and not self.templates_dir.is_dir():
            raise ConfigError(f"Templates directory not found: {self.templates_dir}")


def load_config(root: Path) -> GeneratorConfig:
    """Load configuration for ``root``, falling back to defaults."""
    root = Path(root).expanduser()
    if root.name == CONFIG_FILENAME:
        config_file = root.resolve()
        root = config_file.parent
    else:
        config_file = (root / CONFIG_FILENAME).resolve()

    config = GeneratorConfig.defaults(root)
    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    base = config.root
    paths = _as_dict(data.get("paths"))
    templates_dir = _as_str(data.get("templates_dir"))

    return config.with_overrides(
        models_dir=_as_path(base, paths.get("models")),
        repos_output_dir=_as_path(base, paths.get("repositories")),
        controllers_output_dir=_as_path(base, paths.get("controllers")),
        overwrite_existing=_as_bool(data.get("overwrite")),
        base_class_name=_as_str(data.get("base_class")),
        templates_dir=base / templates_dir if templates_dir else None,
        exclude_paths=_as_str_list(data.get("exclude_paths")) or None,
        strict_parsing=_as_bool(data.get("strict_parsing")),
    )


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
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
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_path(base: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else base / path


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "y", "1"}:
            return True
        if lowered in {"false", "no", "n", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_BASE_CLASS",
    "GeneratorConfig",
    "load_config",
]
