"""Public model exports for the project.

Tests and other modules should import
``from src.models import Finding, RuleOptions``.
"""

from __future__ import annotations

from .enums import NodeKind, NodeType
from .finding import Finding
from .rule_options import RuleOptions, load_options

__all__ = ["Finding", "NodeKind", "NodeType", "RuleOptions", "load_options"]
