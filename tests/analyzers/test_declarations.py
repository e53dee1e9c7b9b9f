"""Tests for the tree-sitter declaration extractor."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from crudgen.analyzers.declarations import DeclarationExtractor, ParseError
from crudgen.models import TypeDeclaration


def _extract(source: str, *, strict: bool = True) -> list[TypeDeclaration]:
    return DeclarationExtractor(strict=strict).extract(textwrap.dedent(source))


def test_extracts_single_class_with_base() -> None:
    declarations = _extract("class Order : AuditableEntity { }")
    assert declarations == [TypeDeclaration("Order", ("AuditableEntity",))]


def test_extracts_namespaced_classes_in_source_order() -> None:
    declarations = _extract(
        """
        using System;

        namespace AB.Models.DbModels
        {
            public class Invoice : AB.Models.DbModels.AuditableEntity, IHasTotal
            {
                public decimal Total { get; set; }
            }

            public class Plain
            {
                public int Id { get; set; }
            }
        }
        """
    )
    assert [decl.name for decl in declarations] == ["Invoice", "Plain"]
    assert declarations[0].base_type_expressions == (
        "AB.Models.DbModels.AuditableEntity",
        "IHasTotal",
    )
    assert declarations[1].base_type_expressions == ()


def test_supports_file_scoped_namespace_and_generic_bases() -> None:
    declarations = _extract(
        """
        namespace AB.Models;

        public class Order : BaseEntity<int>
        {
        }
        """
    )
    assert declarations == [TypeDeclaration("Order", ("BaseEntity<int>",))]


def test_includes_nested_classes_after_their_parent() -> None:
    declarations = _extract(
        """
        public class Outer : AuditableEntity
        {
            public class Inner : Entity
            {
            }
        }

        public class Last
        {
        }
        """
    )
    assert [decl.name for decl in declarations] == ["Outer", "Inner", "Last"]
    assert declarations[1].base_type_expressions == ("Entity",)


def test_ignores_interfaces_and_structs() -> None:
    declarations = _extract(
        """
        public interface IAuditable : IEntity
        {
        }

        public struct Money
        {
        }

        public class Ledger : AuditableEntity
        {
        }
        """
    )
    assert [decl.name for decl in declarations] == ["Ledger"]


def test_comments_in_base_list_are_not_base_types() -> None:
    declarations = _extract("class Note : /* legacy */ Entity { }")
    assert declarations == [TypeDeclaration("Note", ("Entity",))]


def test_strict_mode_rejects_syntax_errors() -> None:
    with pytest.raises(ParseError):
        _extract("public class Broken : AuditableEntity {")


def test_lenient_mode_keeps_recovered_declarations() -> None:
    declarations = _extract(
        """
        public class Order : AuditableEntity
        {
            public int Id { get; set; }
            @@@ ;
        }
        """,
        strict=False,
    )
    assert "Order" in [decl.name for decl in declarations]


def test_extract_file_strips_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "Order.cs"
    path.write_bytes(b"\xef\xbb\xbf" + b"public class Order : AuditableEntity { }\n")

    unit = DeclarationExtractor().extract_file(path)

    assert unit.path == path
    assert unit.declarations == [TypeDeclaration("Order", ("AuditableEntity",))]


def test_extract_file_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "Binary.cs"
    path.write_bytes(b"\xff\xfe\x00\xc3\x28")

    with pytest.raises(ParseError) as excinfo:
        DeclarationExtractor().extract_file(path)
    assert "Binary.cs" in str(excinfo.value)


def test_extraction_is_deterministic() -> None:
    source = "class A : Base { } class B : Other.Base { }"
    extractor = DeclarationExtractor()
    assert extractor.extract(source) == extractor.extract(source)


def test_type_declaration_requires_name() -> None:
    with pytest.raises(ValueError):
        TypeDeclaration("")


def test_deeply_nested_classes_are_extracted_in_order() -> None:
    depth = 1200
    source = "".join(f"class C{i} : Entity {{ " for i in range(depth)) + "}" * depth

    declarations = DeclarationExtractor().extract(source)

    assert [decl.name for decl in declarations] == [f"C{i}" for i in range(depth)]
    assert declarations[-1].base_type_expressions == ("Entity",)
