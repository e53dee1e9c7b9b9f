"""Template rendering for generated artifacts."""

from .templates import RenderError, TemplateKind, TemplateRenderer, TemplateSpec, model_var_name

__all__ = [
    "RenderError",
    "TemplateKind",
    "TemplateRenderer",
    "TemplateSpec",
    "model_var_name",
]
