"""Source tree enumeration for model files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import DEFAULT_SOURCE_EXTENSION

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    "bin",
    "obj",
}


@dataclass
class IgnoreRule:
    """A gitignore-style exclusion pattern from .crudgen.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


class SourceScanner:
    """Walks a models directory and yields source files in a stable order."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self.rules: List[IgnoreRule] = [
            rule for rule in (build_ignore_rule(pattern) for pattern in exclude_paths) if rule
        ]

    def iter_sources(
        self, root: Path, extension: str = DEFAULT_SOURCE_EXTENSION
    ) -> Iterator[Path]:
        """Yield files under ``root`` ending in ``extension``, sorted per directory.

        VCS and build output directories (``.git``, ``.hg``, ``.svn``, ``.vs``,
        ``bin``, ``obj``) are never entered, on top of ``exclude_paths``.
        """
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Models directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Models path is not a directory: {root}")

        suffix = extension.lower()
        for dirpath, dirnames, filenames in os.walk(root_path):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root_path).as_posix() if current_dir != root_path else ""

            dirnames[:] = sorted(
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS
                and not self._ignored(_join(rel_dir, name), is_dir=True)
            )

            for filename in sorted(filenames):
                if not filename.lower().endswith(suffix):
                    continue
                if self._ignored(_join(rel_dir, filename), is_dir=False):
                    continue
                yield current_dir / filename

    def _ignored(self, rel_path: str, *, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self.rules)


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


__all__ = ["IgnoreRule", "SourceScanner", "build_ignore_rule"]
