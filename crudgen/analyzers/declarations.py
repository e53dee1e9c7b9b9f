"""Tree-sitter powered class declaration extractor for C# sources."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from ..logging import get_logger
from ..models import SourceUnit, TypeDeclaration

_CLASS_NODE = "class_declaration"
_BASE_LIST_NODE = "base_list"
# base_list children that are not base types themselves.
_NON_TYPE_NODES = {"argument_list", "comment"}


class ParseError(RuntimeError):
    """Raised when a source file cannot be turned into declarations."""


class DeclarationExtractor:
    """Extracts class declarations and their base-type lists from C# text."""

    def __init__(self, *, strict: bool = True, parser: Optional[Parser] = None) -> None:
        self.strict = strict
        self._parser = parser
        self.logger = get_logger("extractor")

    def extract(self, text: str) -> List[TypeDeclaration]:
        """Return class declarations in source order.

        Nested classes are included after their enclosing class. In strict
        mode a file whose syntax tree contains error nodes raises ParseError;
        otherwise the recoverable declarations are returned.
        """
        source_bytes = text.encode("utf-8")
        try:
            tree = self._get_parser().parse(source_bytes)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise ParseError(f"tree-sitter failed to parse source: {exc}") from exc
        if tree is None:
            raise ParseError("tree-sitter returned no syntax tree")

        root = tree.root_node
        if root.has_error:
            if self.strict:
                raise ParseError(f"syntax error near line {_first_error_line(root)}")
            self.logger.warning(
                "Syntax errors near line %d; keeping recovered declarations",
                _first_error_line(root),
            )
        try:
            return list(self._collect_classes(root, source_bytes))
        except RecursionError as exc:
            raise ParseError("syntax tree too deeply nested") from exc

    def extract_file(self, path: Path) -> SourceUnit:
        """Read ``path`` and extract its declarations."""
        try:
            # utf-8-sig drops the BOM Visual Studio writes by default.
            text = Path(path).read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"{path} is not valid UTF-8: {exc}") from exc
        try:
            declarations = self.extract(text)
        except ParseError as exc:
            raise ParseError(f"{path}: {exc}") from exc
        self.logger.debug("Extracted %d class declaration(s) from %s", len(declarations), path)
        return SourceUnit(path=Path(path), declarations=declarations)

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_c_sharp.language()))
        return self._parser

    def _collect_classes(self, root: Node, source_bytes: bytes) -> Iterable[TypeDeclaration]:
        # Explicit stack: syntax trees can be deeper than the recursion limit.
        stack = list(reversed(root.children))
        while stack:
            node = stack.pop()
            if node.type == _CLASS_NODE:
                name_node = node.child_by_field_name("name")
                name = _node_text(name_node, source_bytes) if name_node else ""
                if name:
                    yield TypeDeclaration(
                        name=name,
                        base_type_expressions=tuple(self._base_types(node, source_bytes)),
                    )
            stack.extend(reversed(node.children))

    @staticmethod
    def _base_types(class_node: Node, source_bytes: bytes) -> Iterable[str]:
        for child in class_node.children:
            if child.type != _BASE_LIST_NODE:
                continue
            for base in child.named_children:
                if base.type in _NON_TYPE_NODES:
                    continue
                if base.type == "primary_constructor_base_type":
                    type_node = base.named_children[0] if base.named_children else None
                    if type_node is None:
                        continue
                    base = type_node
                yield _node_text(base, source_bytes)
            return


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _first_error_line(node: Node) -> int:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current.start_point[0] + 1
        stack.extend(reversed(current.children))
    return node.start_point[0] + 1


__all__ = ["DeclarationExtractor", "ParseError"]
