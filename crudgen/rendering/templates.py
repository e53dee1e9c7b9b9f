"""Literal placeholder templates for the generated artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from ..config import ConfigError
from ..logging import get_logger
from .constants import CONTROLLER_TEMPLATE, MODEL_CLASS_NAME, MODEL_VAR_NAME, REPOSITORY_TEMPLATE


class RenderError(RuntimeError):
    """Raised when a template cannot be rendered with the given placeholders."""


class TemplateKind(Enum):
    """The fixed set of artifacts generated for every matched model."""

    REPOSITORY = ("Repository", "Repo", (MODEL_CLASS_NAME,))
    CONTROLLER = ("Controller", "Controller", (MODEL_CLASS_NAME, MODEL_VAR_NAME))

    def __init__(self, label: str, suffix: str, required_keys: tuple[str, ...]) -> None:
        self.label = label
        self.suffix = suffix
        self.required_keys = required_keys

    @property
    def template_filename(self) -> str:
        """File name looked up in a custom templates directory."""
        return f"{self.label}.cs.tmpl"

    def artifact_name(self, model_name: str, extension: str = ".cs") -> str:
        return f"{model_name}{self.suffix}{extension}"

    @classmethod
    def from_id(cls, template_id: Union["TemplateKind", str]) -> "TemplateKind":
        if isinstance(template_id, cls):
            return template_id
        if isinstance(template_id, str):
            for kind in cls:
                if template_id in (kind.label, kind.name):
                    return kind
        raise RenderError(f"Unknown template: {template_id!r}")


_BUILTIN_BODIES: Mapping[TemplateKind, str] = MappingProxyType(
    {
        TemplateKind.REPOSITORY: REPOSITORY_TEMPLATE,
        TemplateKind.CONTROLLER: CONTROLLER_TEMPLATE,
    }
)


KNOWN_PLACEHOLDERS: tuple[str, ...] = (MODEL_CLASS_NAME, MODEL_VAR_NAME)


def model_var_name(model_name: str) -> str:
    """Lower-case only the first character: ``XRay`` -> ``xRay``."""
    if not model_name:
        return model_name
    return model_name[0].lower() + model_name[1:]


def token(key: str) -> str:
    return "{" + key + "}"


@dataclass(frozen=True)
class TemplateSpec:
    """A template kind together with a complete set of placeholder values."""

    kind: TemplateKind
    placeholders: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        missing = [key for key in self.kind.required_keys if key not in self.placeholders]
        if missing:
            raise RenderError(
                f"{self.kind.label} template is missing placeholder(s): {', '.join(missing)}"
            )
        object.__setattr__(self, "placeholders", MappingProxyType(dict(self.placeholders)))

    @classmethod
    def for_model(cls, kind: TemplateKind, model_name: str) -> "TemplateSpec":
        """Build the full placeholder set for ``model_name``, whatever the kind declares."""
        values: Dict[str, str] = {
            MODEL_CLASS_NAME: model_name,
            MODEL_VAR_NAME: model_var_name(model_name),
        }
        return cls(kind=kind, placeholders=values)


class TemplateRenderer:
    """Renders template kinds by literal token replacement.

    Bodies come from the built-in constants unless ``templates_dir`` holds a
    ``<Label>.cs.tmpl`` file for that kind. Bodies are loaded once, when the
    renderer is constructed; an unreadable override, or one using a
    placeholder its kind does not provide, raises ConfigError.
    """

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        self.logger = get_logger("renderer")
        self._bodies: Dict[TemplateKind, str] = dict(_BUILTIN_BODIES)
        if templates_dir is not None:
            self._load_overrides(Path(templates_dir))

    def body(self, template_id: Union[TemplateKind, str]) -> str:
        return self._bodies[TemplateKind.from_id(template_id)]

    def render(
        self, template_id: Union[TemplateKind, str], placeholders: Mapping[str, str]
    ) -> str:
        """Return the body of ``template_id`` with every placeholder replaced."""
        kind = TemplateKind.from_id(template_id)
        spec = TemplateSpec(kind=kind, placeholders=placeholders)
        return self.render_spec(spec)

    def render_spec(self, spec: TemplateSpec) -> str:
        rendered = self._bodies[spec.kind]
        for key, value in spec.placeholders.items():
            rendered = rendered.replace(token(key), value)
        return rendered

    def _load_overrides(self, templates_dir: Path) -> None:
        for kind in TemplateKind:
            candidate = templates_dir / kind.template_filename
            if not candidate.is_file():
                continue
            try:
                body = candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Cannot read template {candidate}: {exc}") from exc
            undeclared = [
                key
                for key in KNOWN_PLACEHOLDERS
                if key not in kind.required_keys and token(key) in body
            ]
            if undeclared:
                raise ConfigError(
                    f"Template {candidate} uses placeholder(s) not available to "
                    f"{kind.label} templates: {', '.join(token(key) for key in undeclared)}"
                )
            self._bodies[kind] = body
            self.logger.debug("Using %s template from %s", kind.label, candidate)


__all__ = [
    "RenderError",
    "TemplateKind",
    "TemplateRenderer",
    "TemplateSpec",
    "model_var_name",
]
