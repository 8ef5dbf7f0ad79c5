"""Decide whether a candidate sits in an exempt syntactic position.

Two independent policies exist and either one suppresses a candidate:

1. Excluded call argument: the text is an argument of a call whose callee
   resolves to a dotted path listed in ``exclude_args_for_functions``.
2. Module specifier: with ``exclude_module_imports`` enabled, the text names a
   module in ``import``/``export ... from``, ``import(...)`` or ``require(...)``.

In both cases the text may reach the exempt position through pure string
composition: parentheses, ``+``, ``||``, ``??`` and ternary branches. Template
interpolation slots count as composition for call arguments only; for module
specifiers just the static chunks of the specifier template are exempt.

All lookups walk the read-only parent links of tree-sitter nodes.
"""

from __future__ import annotations

import logging
from typing import AbstractSet

from tree_sitter import Node

from src.models import NodeKind, RuleOptions

from .extractor import Candidate

LOGGER = logging.getLogger(__name__)

COMPOSITION_OPERATORS = frozenset({"+", "||", "??"})
MODULE_STATEMENTS = frozenset({"import_statement", "export_statement"})
MODULE_LOADERS = frozenset({"require"})


def _node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def resolve_dotted_path(node: Node | None) -> str | None:
    """Resolve a call target such as ``a.b.c.d`` into its dotted name.

    Identifiers, ``this``, member chains (optional chaining included) and
    subscripts keyed by a plain identifier resolve. Anything else returns
    ``None`` and can never match a configured name.
    """

    if node is None:
        return None
    node_type = node.type
    if node_type in ("identifier", "property_identifier", "this"):
        return _node_text(node)
    if node_type == "parenthesized_expression":
        inner = node.named_children
        return resolve_dotted_path(inner[0]) if len(inner) == 1 else None
    if node_type == "member_expression":
        prefix = resolve_dotted_path(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if prefix is None or prop is None or prop.type != "property_identifier":
            return None
        return f"{prefix}.{_node_text(prop)}"
    if node_type == "subscript_expression":
        prefix = resolve_dotted_path(node.child_by_field_name("object"))
        index = node.child_by_field_name("index")
        if prefix is None or index is None or index.type != "identifier":
            return None
        return f"{prefix}.{_node_text(index)}"
    return None


def _composes(child: Node, parent: Node, *, through_templates: bool) -> bool:
    parent_type = parent.type
    if parent_type == "parenthesized_expression":
        return True
    if parent_type == "binary_expression":
        operator = parent.child_by_field_name("operator")
        return operator is not None and operator.type in COMPOSITION_OPERATORS
    if parent_type == "ternary_expression":
        return child == parent.child_by_field_name("consequence") or child == parent.child_by_field_name(
            "alternative"
        )
    if through_templates:
        if parent_type == "template_substitution":
            return True
        if parent_type == "template_string" and child.type == "template_substitution":
            return True
    return False


def composition_root(node: Node, *, through_templates: bool) -> Node:
    """Climb from ``node`` through string-composition parents and return the top."""

    current = node
    parent = current.parent
    while parent is not None and _composes(current, parent, through_templates=through_templates):
        current = parent
        parent = current.parent
    return current


def enclosing_call(expression: Node) -> tuple[Node, int] | None:
    """Return ``(call, argument_index)`` when ``expression`` is a call argument."""

    arguments = expression.parent
    if arguments is None or arguments.type != "arguments":
        return None
    call = arguments.parent
    if call is None or call.type != "call_expression":
        return None
    index = 0
    for argument in arguments.named_children:
        if argument == expression:
            return call, index
        if argument.type != "comment":
            index += 1
    return None


def is_excluded_call_argument(node: Node, functions: AbstractSet[str]) -> bool:
    if not functions:
        return False
    root = composition_root(node, through_templates=True)
    found = enclosing_call(root)
    if found is None:
        return False
    call, _ = found
    path = resolve_dotted_path(call.child_by_field_name("function"))
    return path is not None and path in functions


def is_module_specifier(node: Node) -> bool:
    root = composition_root(node, through_templates=False)
    parent = root.parent
    if parent is not None and parent.type in MODULE_STATEMENTS:
        return parent.child_by_field_name("source") == root
    found = enclosing_call(root)
    if found is None:
        return False
    call, index = found
    if index != 0:
        return False
    callee = call.child_by_field_name("function")
    if callee is None:
        return False
    if callee.type == "import":
        return True
    return callee.type == "identifier" and _node_text(callee) in MODULE_LOADERS


def is_suppressed(candidate: Candidate, options: RuleOptions) -> bool:
    """Return ``True`` when either suppression policy exempts ``candidate``."""

    if candidate.kind is NodeKind.COMMENT:
        return False
    node = candidate.node
    if is_excluded_call_argument(node, options.exclude_args_for_functions):
        LOGGER.debug("Suppressed %s (excluded call argument)", candidate.excerpt)
        return True
    if (
        options.exclude_module_imports
        and candidate.kind in (NodeKind.STRING_LITERAL, NodeKind.TEMPLATE_CHUNK)
        and is_module_specifier(node)
    ):
        LOGGER.debug("Suppressed %s (module specifier)", candidate.excerpt)
        return True
    return False
