"""Turn syntax-tree nodes into the text spans that get checked.

Each helper returns a :class:`Candidate` holding the text to test and the
excerpt to show in a message. String literals are tested without their
quotes but reported with them; template chunks are the raw static text
between interpolations; comments lose their ``//`` or ``/* */`` markers.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from src.models import NodeKind, NodeType

STRING_TYPES = frozenset({"string", "jsx_string"})
TEMPLATE_TYPE = "template_string"
SUBSTITUTION_TYPE = "template_substitution"
JSX_TEXT_TYPE = "jsx_text"
COMMENT_TYPE = "comment"
IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
    }
)

# Element and attribute names inside JSX tags are JSX names, not identifiers.
_JSX_NAME_OWNERS = frozenset(
    {
        "jsx_opening_element",
        "jsx_closing_element",
        "jsx_self_closing_element",
        "jsx_attribute",
    }
)
_JSX_NAME_PARTS = frozenset({"member_expression", "nested_identifier", "jsx_namespace_name"})


@dataclass
class Candidate:
    """Text from one syntax node, ready for script matching.

    ``node`` is the tree node used for ancestor lookups; for a template chunk
    it is the owning ``template_string``. ``start_byte``/``end_byte`` locate
    the span itself.
    """

    kind: NodeKind
    node_type: NodeType
    text: str
    excerpt: str
    node: Node
    start_byte: int
    end_byte: int


def _decode(source: bytes, start: int, end: int) -> str:
    return source[start:end].decode("utf-8", errors="replace")


def string_candidate(node: Node, source: bytes) -> Candidate:
    raw = _decode(source, node.start_byte, node.end_byte)
    text = raw
    if len(raw) >= 2 and raw[0] in "'\"" and raw[-1] == raw[0]:
        text = raw[1:-1]
    return Candidate(
        kind=NodeKind.STRING_LITERAL,
        node_type=NodeType.LITERAL,
        text=text,
        excerpt=raw,
        node=node,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def template_chunk_candidate(template: Node, source: bytes, start: int, end: int) -> Candidate:
    end = max(start, end)
    text = _decode(source, start, end)
    return Candidate(
        kind=NodeKind.TEMPLATE_CHUNK,
        node_type=NodeType.TEMPLATE_ELEMENT,
        text=text,
        excerpt=text,
        node=template,
        start_byte=start,
        end_byte=end,
    )


def split_template(template: Node, source: bytes) -> list[Candidate | Node]:
    """Split a template literal into static chunks and substitution nodes.

    The result alternates chunk, substitution, chunk ... in source order and
    always starts and ends with a chunk (possibly empty).
    """

    parts: list[Candidate | Node] = []
    cursor = template.start_byte + 1  # opening backtick
    closing = template.end_byte - 1
    for child in template.children:
        if child.type != SUBSTITUTION_TYPE:
            continue
        parts.append(template_chunk_candidate(template, source, cursor, child.start_byte))
        parts.append(child)
        cursor = child.end_byte
    parts.append(template_chunk_candidate(template, source, cursor, closing))
    return parts


def jsx_text_candidate(node: Node, source: bytes) -> Candidate:
    text = _decode(source, node.start_byte, node.end_byte).strip()
    return Candidate(
        kind=NodeKind.JSX_TEXT,
        node_type=NodeType.JSX_TEXT,
        text=text,
        excerpt=text,
        node=node,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def comment_candidate(node: Node, source: bytes) -> Candidate | None:
    """Return the comment body, or ``None`` for comment forms we do not check."""

    raw = _decode(source, node.start_byte, node.end_byte)
    if raw.startswith("//"):
        node_type = NodeType.LINE
        body = raw[2:]
    elif raw.startswith("/*"):
        node_type = NodeType.BLOCK
        body = raw[2:-2] if raw.endswith("*/") and len(raw) >= 4 else raw[2:]
    else:
        return None
    text = body.strip()
    return Candidate(
        kind=NodeKind.COMMENT,
        node_type=node_type,
        text=text,
        excerpt=text,
        node=node,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def is_jsx_name(node: Node) -> bool:
    current = node
    parent = node.parent
    while parent is not None and parent.type in _JSX_NAME_PARTS:
        current = parent
        parent = parent.parent
    return parent is not None and parent.type in _JSX_NAME_OWNERS


def identifier_candidate(node: Node, source: bytes) -> Candidate | None:
    if is_jsx_name(node):
        return None
    text = _decode(source, node.start_byte, node.end_byte)
    return Candidate(
        kind=NodeKind.IDENTIFIER,
        node_type=NodeType.IDENTIFIER,
        text=text,
        excerpt=text,
        node=node,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )
