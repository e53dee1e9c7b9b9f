"""CLI entrypoints for crudgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, GeneratorConfig, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .prompts import Prompter


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--models-dir",
        help="Directory scanned for model classes (default: <root>/Data/Models).",
    )
    parser.add_argument(
        "--base-class",
        help="Simple name of the base class models must derive from (default: AuditableEntity).",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Keep declarations from files with syntax errors instead of skipping them.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate repository and controller classes for C# models.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a repository and a controller for every matching model.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_source_options(generate_parser)
    generate_parser.add_argument(
        "--repos-dir",
        help="Output directory for repositories (default: <root>/Data/Repos).",
    )
    generate_parser.add_argument(
        "--controllers-dir",
        help="Output directory for controllers (default: <root>/Controllers).",
    )
    generate_parser.add_argument(
        "--templates-dir",
        help="Directory holding Repository.cs.tmpl / Controller.cs.tmpl overrides.",
    )
    generate_parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Replace generated files that already exist.",
    )
    generate_parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Prompt for paths, base class and overwrite policy.",
    )
    generate_parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 2 if any file or artifact failed.",
    )

    scan_parser = subparsers.add_parser(
        "scan",
        help="List models that would be generated, without writing anything.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    _add_source_options(scan_parser)

    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(Path(args.path))
    return config.with_overrides(
        models_dir=_as_path(getattr(args, "models_dir", None)),
        repos_output_dir=_as_path(getattr(args, "repos_dir", None)),
        controllers_output_dir=_as_path(getattr(args, "controllers_dir", None)),
        templates_dir=_as_path(getattr(args, "templates_dir", None)),
        base_class_name=getattr(args, "base_class", None),
        overwrite_existing=getattr(args, "overwrite", None),
        strict_parsing=False if getattr(args, "lenient", False) else None,
    )


def _as_path(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for crudgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = _build_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator()

    if args.command == "generate":
        if args.interactive:
            config = Prompter().collect(config)
        try:
            report = orchestrator.run(config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        print("Code generation completed.")
        print(report.summary())
        if args.fail_on_error and report.has_errors:
            parser.exit(2)
    elif args.command == "scan":
        try:
            units = orchestrator.discover(config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        for unit in units:
            rel_path = _relativize(unit.path)
            for declaration in unit.declarations:
                print(f"{declaration.name}\t{rel_path}")
        if not units:
            print(f"No classes deriving from {config.base_class_name} found.")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
