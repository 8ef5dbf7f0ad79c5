"""Script check package exports.

This package exposes the key helpers used by other parts of the project
so callers can import from ``src.script_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .engine import ScriptRule
    from .errors import (
        MalformedTreeError,
        ScriptCheckError,
        SourceParseError,
        UnknownScriptError,
    )
    from .matcher import Match, find_matches
    from .parser import parse_source
    from .report_utils import build_report_csv, build_report_markdown
    from .script_check import (
        FileReport,
        check_file,
        check_files,
        iter_source_files,
        run_script_checks,
    )
    from .script_rule_manager import ScriptRuleManager, check_source_all
    from .scripts import SCRIPTS, ScriptPredicate, get_script
    from .suppression import is_suppressed, resolve_dotted_path

__all__ = [
    "ScriptRule",
    "ScriptRuleManager",
    "ScriptPredicate",
    "SCRIPTS",
    "get_script",
    "Match",
    "find_matches",
    "is_suppressed",
    "resolve_dotted_path",
    "parse_source",
    "check_source_all",
    "FileReport",
    "check_file",
    "check_files",
    "iter_source_files",
    "run_script_checks",
    "build_report_markdown",
    "build_report_csv",
    "ScriptCheckError",
    "MalformedTreeError",
    "SourceParseError",
    "UnknownScriptError",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "ScriptRule": (".engine", "ScriptRule"),
    "ScriptRuleManager": (".script_rule_manager", "ScriptRuleManager"),
    "check_source_all": (".script_rule_manager", "check_source_all"),
    "ScriptPredicate": (".scripts", "ScriptPredicate"),
    "SCRIPTS": (".scripts", "SCRIPTS"),
    "get_script": (".scripts", "get_script"),
    "Match": (".matcher", "Match"),
    "find_matches": (".matcher", "find_matches"),
    "is_suppressed": (".suppression", "is_suppressed"),
    "resolve_dotted_path": (".suppression", "resolve_dotted_path"),
    "parse_source": (".parser", "parse_source"),
    "FileReport": (".script_check", "FileReport"),
    "check_file": (".script_check", "check_file"),
    "check_files": (".script_check", "check_files"),
    "iter_source_files": (".script_check", "iter_source_files"),
    "run_script_checks": (".script_check", "run_script_checks"),
    "build_report_markdown": (".report_utils", "build_report_markdown"),
    "build_report_csv": (".report_utils", "build_report_csv"),
    "ScriptCheckError": (".errors", "ScriptCheckError"),
    "MalformedTreeError": (".errors", "MalformedTreeError"),
    "SourceParseError": (".errors", "SourceParseError"),
    "UnknownScriptError": (".errors", "UnknownScriptError"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    This avoids loading the tree-sitter grammar until a parser-backed helper
    is actually used.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.script_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
