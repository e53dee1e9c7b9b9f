"""Interactive collection of generator settings."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import GeneratorConfig

InputFn = Callable[[], str]
OutputFn = Callable[[str], None]


class Prompter:
    """Asks for each setting in turn; a blank answer keeps the shown default."""

    def __init__(self, read: InputFn = input, write: OutputFn = print) -> None:
        self._read = read
        self._write = write

    def ask(self, prompt: str, default: str) -> str:
        self._write(f"{prompt} (default: {default}):")
        answer = self._read()
        return answer.strip() if answer and answer.strip() else default

    def confirm(self, prompt: str, default: bool) -> bool:
        self._write(f"{prompt} (default: {'y' if default else 'n'}):")
        answer = (self._read() or "").strip().lower()
        if not answer:
            return default
        return answer in {"y", "yes"}

    def collect(self, base: GeneratorConfig) -> GeneratorConfig:
        """Return ``base`` updated with the user's answers.

        The default for every path after the root follows the root the user
        picked, unless ``base`` already points somewhere else.
        """
        root = Path(self.ask("Enter the root directory of your project", str(base.root)))
        root = root.expanduser().resolve()
        layout = GeneratorConfig.defaults(root) if root != base.root else base

        models_dir = self.ask("Enter the path to the models directory", str(layout.models_dir))
        repos_dir = self.ask("Enter the output path for repositories", str(layout.repos_output_dir))
        controllers_dir = self.ask(
            "Enter the output path for controllers", str(layout.controllers_output_dir)
        )
        overwrite = self.confirm(
            "Do you want to overwrite existing files? (y/n)", base.overwrite_existing
        )
        base_class = self.ask("Enter the base class name to filter models", base.base_class_name)

        return base.with_overrides(
            root=root,
            models_dir=_resolve(models_dir),
            repos_output_dir=_resolve(repos_dir),
            controllers_output_dir=_resolve(controllers_dir),
            overwrite_existing=overwrite,
            base_class_name=base_class,
        )


def _resolve(value: str) -> Path:
    return Path(value).expanduser().resolve()


__all__ = ["Prompter"]
