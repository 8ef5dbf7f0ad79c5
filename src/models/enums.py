"""Enumerations shared by the script checker models.

Values are the human-readable names written to reports, so they are safe to
serialise as JSON or CSV fields.
"""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    """The five kinds of syntax node whose text is checked.

    Values:
        STRING_LITERAL: quoted string literal (including JSX attribute strings)
        TEMPLATE_CHUNK: one static segment of a template literal
        JSX_TEXT: raw text between JSX tags
        COMMENT: line or block comment
        IDENTIFIER: declared names, references and property keys
    """

    STRING_LITERAL = "STRING_LITERAL"
    TEMPLATE_CHUNK = "TEMPLATE_CHUNK"
    JSX_TEXT = "JSX_TEXT"
    COMMENT = "COMMENT"
    IDENTIFIER = "IDENTIFIER"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class NodeType(str, Enum):
    """Node type tags reported with each finding.

    These follow the ESTree names that JavaScript lint tooling reports, so a
    ``COMMENT`` candidate is tagged either ``Line`` or ``Block``.
    """

    LITERAL = "Literal"
    TEMPLATE_ELEMENT = "TemplateElement"
    JSX_TEXT = "JSXText"
    LINE = "Line"
    BLOCK = "Block"
    IDENTIFIER = "Identifier"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
