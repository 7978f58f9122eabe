"""Extract declared symbols from a Go Tree-sitter AST."""

from __future__ import annotations

from typing import Iterator

from .models import KIND_FUNCTION, KIND_METHOD, KIND_TYPE, KIND_VALUE, Position, Symbol
from .parser import ParsedSource


DEFAULT_TAB_WIDTH = 8

TYPE_SPEC_TYPES = {"type_spec", "type_alias"}
VALUE_SPEC_TYPES = {"var_spec", "const_spec"}


def iter_symbols(
    parsed: ParsedSource,
    package: str,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> Iterator[Symbol]:
    """Yield every declared symbol of one file in source order.

    Declarations nested in function bodies are included. Import specs,
    short variable declarations and function literals are not symbols.
    """
    source_bytes = parsed.source_bytes

    def position(node) -> Position:
        return _position(parsed.path, source_bytes, node.start_byte, tab_width)

    def walk(node):
        node_type = node.type

        if node_type in ("function_declaration", "method_declaration"):
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                kind = KIND_FUNCTION if node_type == "function_declaration" else KIND_METHOD
                yield Symbol(
                    kind=kind,
                    name=_node_text(name_node, source_bytes),
                    package=package,
                    position=position(node),
                )

        elif node_type in TYPE_SPEC_TYPES:
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                yield Symbol(
                    kind=KIND_TYPE,
                    name=_node_text(name_node, source_bytes),
                    package=package,
                    position=position(name_node),
                )

        elif node_type in VALUE_SPEC_TYPES:
            for name_node in node.children_by_field_name("name"):
                yield Symbol(
                    kind=KIND_VALUE,
                    name=_node_text(name_node, source_bytes),
                    package=package,
                    position=position(name_node),
                )

        for child in node.children:
            yield from walk(child)

    yield from walk(parsed.tree.root_node)


def _node_text(node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def _position(path: str, source_bytes: bytes, offset: int, tab_width: int) -> Position:
    line_start = source_bytes.rfind(b"\n", 0, offset) + 1
    line = source_bytes.count(b"\n", 0, offset) + 1
    prefix = source_bytes[line_start:offset].decode("utf-8", errors="replace")
    return Position(
        filename=path,
        line=line,
        column=len(prefix.expandtabs(tab_width)) + 1,
    )
