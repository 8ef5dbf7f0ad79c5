"""Exceptions raised by the script checker."""

from __future__ import annotations


class ScriptCheckError(Exception):
    """Base class for script checker errors."""


class UnknownScriptError(ScriptCheckError, ValueError):
    """Raised when a script name or rule id is not registered."""


class MalformedTreeError(ScriptCheckError, ValueError):
    """Raised when a syntax tree does not have the expected node shapes."""


class SourceParseError(ScriptCheckError):
    """Raised when the parser reports syntax errors in strict mode."""

    def __init__(self, message: str, *, line: int, column: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
