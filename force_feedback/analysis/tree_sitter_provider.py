"""Syntax provider for C# source built on tree-sitter."""

import asyncio
import logging
from typing import Any

from tree_sitter import Language, Node, Parser

from ..models import Declaration, DeclarationKind, Span, TextSnapshot

logger = logging.getLogger(__name__)

BLOCK_NODE_TYPE = "block"


def _declaration_kind(node_type: str) -> DeclarationKind | None:
    match node_type:
        case "method_declaration":
            return DeclarationKind.METHOD
        case "constructor_declaration":
            return DeclarationKind.CONSTRUCTOR
        case _:
            return None


class _OffsetMap:
    """Converts tree-sitter byte offsets into character offsets."""

    def __init__(self, content: str, content_bytes: bytes):
        self._bytes = content_bytes
        self._ascii = len(content) == len(content_bytes)

    def __call__(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return len(self._bytes[:byte_offset].decode("utf-8"))


class TreeSitterSyntaxProvider:
    """Reports method and constructor declarations of a C# snapshot.

    Only `{}` block bodies count as bodies; abstract, extern, interface and
    expression-bodied members are reported without one.
    """

    def __init__(self, language_module: Any | None = None):
        if language_module is None:
            import tree_sitter_c_sharp as language_module

        if hasattr(language_module, "language"):
            # Grammar packages expose the language as a function
            self.parser = Parser(Language(language_module.language()))
        else:
            self.parser = Parser(language_module)

    async def get_declarations(self, snapshot: TextSnapshot) -> list[Declaration]:
        """Parse the snapshot off the event loop and collect declarations."""
        return await asyncio.to_thread(self.collect_declarations, snapshot.text)

    def collect_declarations(self, content: str) -> list[Declaration]:
        """Parse content and collect declarations synchronously."""
        content_bytes = content.encode("utf-8")
        tree = self.parser.parse(content_bytes)
        to_char = _OffsetMap(content, content_bytes)

        declarations: list[Declaration] = []
        stack: list[Node] = [tree.root_node]
        while stack:
            node = stack.pop()
            kind = _declaration_kind(node.type)
            if kind is not None:
                declarations.append(self._to_declaration(node, kind, to_char))
            stack.extend(reversed(node.children))

        if tree.root_node.has_error:
            logger.debug("Parsed snapshot contains syntax errors")
        return declarations

    def _to_declaration(
        self, node: Node, kind: DeclarationKind, to_char: _OffsetMap
    ) -> Declaration:
        body = next(
            (child for child in node.children if child.type == BLOCK_NODE_TYPE),
            None,
        )
        body_span = (
            Span(to_char(body.start_byte), to_char(body.end_byte))
            if body is not None
            else None
        )

        name_node = node.child_by_field_name("name")
        name = name_node.text.decode("utf-8") if name_node is not None else None

        return Declaration(
            kind=kind,
            span=Span(to_char(node.start_byte), to_char(node.end_byte)),
            body_span=body_span,
            child_positions=tuple(
                to_char(child.start_byte) for child in node.named_children
            ),
            name=name,
        )
