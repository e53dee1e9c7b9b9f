"""Pipeline orchestration: scan models, match base classes, generate artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List

from .analyzers import DeclarationExtractor, ParseError, any_matches
from .config import GeneratorConfig
from .logging import get_logger
from .models import (
    GenerationReport,
    GenerationTask,
    ParseFailure,
    SourceUnit,
    TaskResult,
    TypeDeclaration,
    WriteOutcome,
)
from .rendering import RenderError, TemplateKind, TemplateRenderer, TemplateSpec
from .scanner import SourceScanner
from .writer import ArtifactWriter

# Artifacts are produced in this order for every matched model.
OUTPUT_KINDS: tuple[TemplateKind, ...] = (TemplateKind.REPOSITORY, TemplateKind.CONTROLLER)


class Orchestrator:
    """Coordinates extraction, matching, rendering and writing for a run."""

    def __init__(
        self,
        extractor: DeclarationExtractor | None = None,
        renderer: TemplateRenderer | None = None,
        writer: ArtifactWriter | None = None,
        scanner: SourceScanner | None = None,
    ) -> None:
        self._extractor = extractor
        self._renderer = renderer
        self.writer = writer or ArtifactWriter()
        self._scanner = scanner
        self.logger = get_logger("orchestrator")

    def run(self, config: GeneratorConfig) -> GenerationReport:
        """Generate a repository and a controller for every matched model.

        Raises ConfigError before touching anything when the configuration is
        unusable. Parse failures and per-task render/write failures are
        logged and recorded in the report; the run always continues.
        """
        config.validate()
        self.logger.info(
            "Generating artifacts for classes deriving from %s in %s",
            config.base_class_name,
            config.models_dir,
        )
        renderer = self._resolve_renderer(config)
        output_dirs = self._output_dirs(config)
        report = GenerationReport()

        for unit in self._iter_units(config, report):
            for declaration in self._matched(unit, config.base_class_name):
                for kind in OUTPUT_KINDS:
                    result = self._run_task(
                        declaration.name, kind, output_dirs[kind], renderer, config
                    )
                    report.results.append(result)

        self.logger.debug("Run finished: %s", report.summary())
        return report

    def discover(self, config: GeneratorConfig) -> List[SourceUnit]:
        """Return each parsed file with only its matching declarations; writes nothing."""
        config.validate()
        report = GenerationReport()
        units: List[SourceUnit] = []
        for unit in self._iter_units(config, report):
            matched = list(self._matched(unit, config.base_class_name))
            if matched:
                units.append(SourceUnit(path=unit.path, declarations=matched))
        return units

    def _iter_units(self, config: GeneratorConfig, report: GenerationReport) -> Iterator[SourceUnit]:
        extractor = self._resolve_extractor(config)
        scanner = self._scanner or SourceScanner(config.exclude_paths)
        for path in scanner.iter_sources(config.models_dir, config.source_extension):
            try:
                yield extractor.extract_file(path)
            except (ParseError, OSError) as exc:
                self.logger.warning("Skipping %s: %s", path, exc)
                report.parse_failures.append(ParseFailure(path=path, error=exc))

    @staticmethod
    def _matched(unit: SourceUnit, base_class_name: str) -> Iterator[TypeDeclaration]:
        for declaration in unit.declarations:
            if any_matches(declaration, base_class_name):
                yield declaration

    def _run_task(
        self,
        model_name: str,
        kind: TemplateKind,
        output_dir: Path,
        renderer: TemplateRenderer,
        config: GeneratorConfig,
    ) -> TaskResult:
        destination = output_dir / kind.artifact_name(model_name, config.source_extension)
        task = GenerationTask(
            model_name=model_name,
            template_spec=TemplateSpec.for_model(kind, model_name),
            destination=destination,
        )
        try:
            content = renderer.render_spec(task.template_spec)
            outcome = self.writer.write(destination, content, config.overwrite_existing)
        except (RenderError, OSError) as exc:
            self.logger.error("%s generation failed for %s: %s", kind.label, destination, exc)
            return TaskResult(task=task, error=exc)

        if outcome is WriteOutcome.WRITTEN:
            self.logger.info("%s class generated: %s", kind.label, destination)
        else:
            self.logger.info("%s file already exists, skipping: %s", kind.label, destination)
        return TaskResult(task=task, outcome=outcome)

    def _resolve_extractor(self, config: GeneratorConfig) -> DeclarationExtractor:
        if self._extractor is not None:
            return self._extractor
        return DeclarationExtractor(strict=config.strict_parsing)

    def _resolve_renderer(self, config: GeneratorConfig) -> TemplateRenderer:
        if self._renderer is not None:
            return self._renderer
        return TemplateRenderer(templates_dir=config.templates_dir)

    @staticmethod
    def _output_dirs(config: GeneratorConfig) -> Dict[TemplateKind, Path]:
        return {
            TemplateKind.REPOSITORY: config.repos_output_dir,
            TemplateKind.CONTROLLER: config.controllers_output_dir,
        }


__all__ = ["OUTPUT_KINDS", "Orchestrator"]
