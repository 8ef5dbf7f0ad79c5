"""Walk a syntax tree and report text written in a restricted script.

:class:`ScriptRule` is the single engine behind every ``no-<script>-character``
rule; the script itself is an injected :class:`ScriptPredicate`. One call to
:meth:`ScriptRule.check_tree` processes one tree and keeps no state.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from tree_sitter import Node, Tree

from src.models import Finding, RuleOptions

from .errors import MalformedTreeError
from .extractor import (
    COMMENT_TYPE,
    IDENTIFIER_TYPES,
    JSX_TEXT_TYPE,
    STRING_TYPES,
    TEMPLATE_TYPE,
    Candidate,
    comment_candidate,
    identifier_candidate,
    jsx_text_candidate,
    split_template,
    string_candidate,
)
from .matcher import Match, find_matches
from .parser import encode_source, offset_to_position, parse_source
from .scripts import ScriptPredicate, get_script
from .suppression import is_suppressed

LOGGER = logging.getLogger(__name__)

_LEAF_TYPES = STRING_TYPES | IDENTIFIER_TYPES | {JSX_TEXT_TYPE, COMMENT_TYPE}


def coerce_options(options: RuleOptions | Mapping[str, Any] | None) -> RuleOptions:
    if options is None:
        return RuleOptions()
    if isinstance(options, RuleOptions):
        return options
    return RuleOptions.model_validate(dict(options))


class ScriptRule:
    """Rule that flags one script in strings, templates, JSX text, comments and identifiers."""

    def __init__(
        self,
        script: ScriptPredicate | str,
        options: RuleOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self.script = get_script(script) if isinstance(script, str) else script
        self.options = coerce_options(options)

    @property
    def rule_id(self) -> str:
        return self.script.rule_id

    def __repr__(self) -> str:
        return f"ScriptRule({self.script.name!r}, {self.options!r})"

    def _candidate_for(self, node: Node, source: bytes) -> Candidate | None:
        node_type = node.type
        if node_type in STRING_TYPES:
            return string_candidate(node, source)
        if node_type == JSX_TEXT_TYPE:
            return jsx_text_candidate(node, source)
        if node_type == COMMENT_TYPE:
            return comment_candidate(node, source) if self.options.include_comment else None
        if node_type in IDENTIFIER_TYPES:
            return identifier_candidate(node, source) if self.options.include_identifier else None
        return None

    def iter_candidates(self, tree: Tree, source: bytes) -> Iterator[Candidate]:
        """Yield eligible candidates in source order (pre-order, left to right)."""

        root = tree.root_node
        if root.type != "program":
            raise MalformedTreeError(f"Expected a 'program' root node, got {root.type!r}")

        # Explicit stack: long concatenation chains nest deeper than the
        # interpreter's recursion limit.
        stack: list[Node | Candidate] = [root]
        while stack:
            item = stack.pop()
            if isinstance(item, Candidate):
                yield item
                continue
            if item.type == TEMPLATE_TYPE:
                stack.extend(reversed(split_template(item, source)))
                continue
            candidate = self._candidate_for(item, source)
            if candidate is not None:
                yield candidate
            if item.type in _LEAF_TYPES:
                continue
            stack.extend(reversed(item.children))

    def _make_finding(
        self,
        candidate: Candidate,
        matches: list[Match],
        source: bytes,
        filename: str | None,
    ) -> Finding:
        line, column = offset_to_position(source, candidate.start_byte)
        end_line, end_column = offset_to_position(source, candidate.end_byte)
        return Finding(
            rule_id=self.rule_id,
            script=self.script.name,
            message=Finding.format_message(self.script.name, candidate.excerpt),
            node_type=candidate.node_type,
            kind=candidate.kind,
            excerpt=candidate.excerpt,
            matches=[match.text for match in matches],
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            filename=filename,
        )

    def check_tree(
        self,
        tree: Tree,
        source: str | bytes,
        *,
        filename: str | None = None,
    ) -> list[Finding]:
        """Return the findings for one parsed tree, in source order."""

        data = encode_source(source)
        findings: list[Finding] = []
        checked = 0
        for candidate in self.iter_candidates(tree, data):
            checked += 1
            if is_suppressed(candidate, self.options):
                continue
            matches = find_matches(candidate.text, self.script.is_restricted)
            if not matches:
                continue
            findings.append(self._make_finding(candidate, matches, data, filename))
        LOGGER.debug(
            "%s: %d candidate(s) checked, %d finding(s)%s",
            self.rule_id,
            checked,
            len(findings),
            f" in {filename}" if filename else "",
        )
        return findings

    def check_source(
        self,
        source: str | bytes,
        *,
        filename: str | None = None,
        strict: bool = True,
    ) -> list[Finding]:
        """Parse ``source`` and check it. See :func:`parse_source` for ``strict``."""

        data = encode_source(source)
        tree = parse_source(data, strict=strict)
        return self.check_tree(tree, data, filename=filename)
