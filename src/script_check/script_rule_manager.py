"""Rule setup helpers.

This module centralises :class:`ScriptRule` instantiation so that every rule
in a run shares one options object and one parser.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from tree_sitter import Parser

from src.models import Finding, RuleOptions

from .engine import ScriptRule, coerce_options
from .parser import build_parser, encode_source, parse_source
from .scripts import SCRIPTS, ScriptPredicate, get_script


class ScriptRuleManager:
    """Factory class responsible for configuring script rules."""

    def __init__(
        self,
        *,
        options: RuleOptions | Mapping[str, Any] | None = None,
        parser: Parser | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.options = coerce_options(options)
        self.parser = parser or build_parser()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _prepare_scripts(
        scripts: Iterable[ScriptPredicate | str] | None,
    ) -> tuple[ScriptPredicate, ...]:
        if scripts is None:
            return tuple(SCRIPTS.values())
        deduped: list[ScriptPredicate] = []
        for script in scripts:
            predicate = get_script(script) if isinstance(script, str) else script
            if predicate not in deduped:
                deduped.append(predicate)
        return tuple(deduped)

    def build_rule(self, script: ScriptPredicate | str) -> ScriptRule:
        return ScriptRule(script, self.options)

    def build_rules(self, scripts: Iterable[ScriptPredicate | str] | None = None) -> list[ScriptRule]:
        """Build one rule per script (all registered scripts when ``scripts`` is None)."""

        rules = [self.build_rule(script) for script in self._prepare_scripts(scripts)]
        self.logger.info(
            "Checking for %s characters",
            ", ".join(rule.script.name for rule in rules) or "no",
        )
        return rules

    def check_source(
        self,
        source: str | bytes,
        rules: Iterable[ScriptRule],
        *,
        filename: str | None = None,
        strict: bool = True,
    ) -> list[Finding]:
        """Parse ``source`` once and run every rule over the tree."""

        data = encode_source(source)
        tree = parse_source(data, strict=strict, parser=self.parser)
        findings: list[Finding] = []
        for rule in rules:
            findings.extend(rule.check_tree(tree, data, filename=filename))
        return findings


def check_source_all(
    source: str | bytes,
    *,
    scripts: Iterable[ScriptPredicate | str] | None = None,
    options: RuleOptions | Mapping[str, Any] | None = None,
    filename: str | None = None,
    strict: bool = True,
) -> list[Finding]:
    """Run several script rules over one source and concatenate their findings."""

    manager = ScriptRuleManager(options=options)
    rules = manager.build_rules(scripts)
    return manager.check_source(source, rules, filename=filename, strict=strict)
