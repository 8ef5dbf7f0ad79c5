"""Model for a single reported use of a restricted script.

A finding pairs the excerpt that triggered it with the formatted message and
the source location of the node that produced it. Findings carry no identity
beyond that: the same literal reported twice yields two findings.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import NodeKind, NodeType


class Finding(BaseModel):
    """A restricted-script occurrence reported by one rule.

    Fields:
    - rule_id: rule that produced the finding (e.g. ``no-chinese-character``)
    - script: display name of the script (e.g. ``Chinese``)
    - message: ``"Using <script> characters: <excerpt>"``
    - node_type: ESTree-style tag of the originating node
    - kind: which candidate kind produced the finding
    - excerpt: verbatim node text (string literals keep their quotes)
    - matches: every maximal run of restricted characters, in order
    - line/column: 1-based start position (columns count characters)
    - end_line/end_column: 1-based end position, exclusive column
    - filename: optional, set by the file runner
    """

    model_config = ConfigDict(extra="forbid")

    rule_id: str
    script: str
    message: str
    node_type: NodeType
    kind: NodeKind
    excerpt: str
    matches: List[str] = Field(default_factory=list)
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    end_line: int = Field(ge=1)
    end_column: int = Field(ge=1)
    filename: str | None = None

    @field_validator("rule_id", "script", mode="before")
    def _strip(cls, value: object) -> str:
        return str(value or "").strip()

    @model_validator(mode="after")
    def final_checks(self) -> "Finding":
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.script:
            raise ValueError("script must not be empty")
        if not self.matches:
            raise ValueError("a finding needs at least one matched run")
        if (self.end_line, self.end_column) < (self.line, self.column):
            raise ValueError("finding ends before it starts")
        return self

    @classmethod
    def format_message(cls, script: str, excerpt: str) -> str:
        return f"Using {script} characters: {excerpt}"

    @property
    def location(self) -> str:
        prefix = f"{self.filename}:" if self.filename else ""
        return f"{prefix}{self.line}:{self.column}"
