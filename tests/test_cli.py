"""CLI behaviour tests."""

from __future__ import annotations

import pytest

from crudgen.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "generate"]).verbose is True
    args = parser.parse_args(["generate", "--verbose"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_generate_options() -> None:
    args = _build_parser().parse_args(
        ["generate", "proj", "--base-class", "Entity", "--overwrite", "--lenient", "-i"]
    )
    assert args.path == "proj"
    assert args.base_class == "Entity"
    assert args.overwrite is True
    assert args.lenient is True
    assert args.interactive is True


def test_cli_overwrite_defaults_to_config_value() -> None:
    args = _build_parser().parse_args(["generate"])
    assert args.overwrite is None
    assert args.path == "."


def test_generate_command_writes_artifacts(project: ProjectBuilder, capsys) -> None:
    project.model("Order.cs", "class Order : AuditableEntity { }\n")

    main(["generate", str(project.root)])

    out = capsys.readouterr().out
    assert "Code generation completed." in out
    assert "2 written, 0 skipped, 0 failed" in out
    assert (project.repos_dir / "OrderRepo.cs").exists()
    assert (project.controllers_dir / "OrderController.cs").exists()


def test_generate_command_exits_when_models_missing(project: ProjectBuilder, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project.root)])

    assert excinfo.value.code == 1
    assert "Models directory not found" in capsys.readouterr().err


def test_fail_on_error_sets_exit_status(project: ProjectBuilder) -> None:
    project.model("Broken.cs", "public class Broken : AuditableEntity {\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project.root), "--fail-on-error"])

    assert excinfo.value.code == 2


def test_scan_command_lists_matches(project: ProjectBuilder, capsys) -> None:
    project.model("Order.cs", "class Order : AuditableEntity { }\nclass Note : Entity { }\n")

    main(["scan", str(project.root)])

    out = capsys.readouterr().out
    assert "Order\t" in out
    assert "Note" not in out
    assert not project.repos_dir.exists()


def test_generate_reports_bad_template_without_traceback(project: ProjectBuilder, capsys) -> None:
    project.model("Order.cs", "class Order : AuditableEntity { }\n")
    templates = project.root / "templates"
    templates.mkdir()
    (templates / "Repository.cs.tmpl").write_bytes(b"\xff\xfe bad")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project.root), "--templates-dir", str(templates)])

    assert excinfo.value.code == 1
    assert "Cannot read template" in capsys.readouterr().err
