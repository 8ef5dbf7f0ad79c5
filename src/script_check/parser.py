"""tree-sitter setup for JavaScript and JSX sources.

This module centralises parser instantiation so that the grammar and the
strict-mode error reporting stay in one place.
"""

from __future__ import annotations

import logging

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from .errors import SourceParseError

LOGGER = logging.getLogger(__name__)

# The JavaScript grammar parses JSX without extra flags.
JAVASCRIPT = Language(tree_sitter_javascript.language())


def build_parser() -> Parser:
    """Return a new parser for the JavaScript grammar."""
    return Parser(JAVASCRIPT)


def encode_source(source: str | bytes) -> bytes:
    return source.encode("utf-8") if isinstance(source, str) else source


def offset_to_position(source: bytes, offset: int) -> tuple[int, int]:
    """Convert a byte offset into a 1-based (line, character column) pair."""

    offset = max(0, min(offset, len(source)))
    line = source.count(b"\n", 0, offset) + 1
    line_start = source.rfind(b"\n", 0, offset) + 1
    column = len(source[line_start:offset].decode("utf-8", errors="replace")) + 1
    return line, column


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_source(
    source: str | bytes,
    *,
    strict: bool = True,
    parser: Parser | None = None,
) -> Tree:
    """Parse ``source`` into a syntax tree.

    Args:
            source: JavaScript/JSX source text (``str`` or UTF-8 ``bytes``)
            strict: Raise :class:`SourceParseError` when the tree contains
                    syntax errors instead of checking the recovered tree
            parser: Optional parser to reuse across files

    Returns:
            The parsed tree
    """

    data = encode_source(source)
    tree = (parser or build_parser()).parse(data)
    if tree.root_node.has_error:
        error_node = _first_error(tree.root_node)
        offset = error_node.start_byte if error_node is not None else 0
        line, column = offset_to_position(data, offset)
        if strict:
            raise SourceParseError(
                f"Syntax error at line {line}, column {column}",
                line=line,
                column=column,
            )
        LOGGER.warning(
            "Syntax error at line %d, column %d; checking the recovered tree",
            line,
            column,
        )
    return tree
