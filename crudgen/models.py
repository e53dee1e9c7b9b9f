"""Core data models shared across crudgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .rendering.templates import TemplateSpec


@dataclass(frozen=True)
class TypeDeclaration:
    """A class declaration discovered in a source file."""

    name: str
    base_type_expressions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("TypeDeclaration requires a non-empty name")


@dataclass
class SourceUnit:
    """One parsed source file and the declarations it contains."""

    path: Path
    declarations: List[TypeDeclaration] = field(default_factory=list)


@dataclass(frozen=True)
class MatchResult:
    declaration_name: str
    matched: bool


class WriteOutcome(Enum):
    """What the artifact writer did with a destination."""

    WRITTEN = "written"
    SKIPPED_EXISTING = "skipped-existing"


@dataclass(frozen=True)
class GenerationTask:
    """A single artifact to render and write for a matched model."""

    model_name: str
    template_spec: "TemplateSpec"
    destination: Path


@dataclass
class TaskResult:
    """Outcome of one generation task; exactly one of outcome/error is set."""

    task: GenerationTask
    outcome: Optional[WriteOutcome] = None
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ParseFailure:
    """A source file that contributed no declarations because it failed to parse."""

    path: Path
    error: Exception


@dataclass
class GenerationReport:
    """Ordered results of a generation run."""

    results: List[TaskResult] = field(default_factory=list)
    parse_failures: List[ParseFailure] = field(default_factory=list)

    def _count(self, outcome: WriteOutcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)

    @property
    def written(self) -> int:
        return self._count(WriteOutcome.WRITTEN)

    @property
    def skipped(self) -> int:
        return self._count(WriteOutcome.SKIPPED_EXISTING)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.failed)

    @property
    def has_errors(self) -> bool:
        return bool(self.failed or self.parse_failures)

    def summary(self) -> str:
        parts = [
            f"{self.written} written",
            f"{self.skipped} skipped",
            f"{self.failed} failed",
        ]
        if self.parse_failures:
            parts.append(f"{len(self.parse_failures)} unparsable file(s)")
        return ", ".join(parts)
