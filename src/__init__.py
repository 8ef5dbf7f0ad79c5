"""Restricted-script checker for JavaScript sources."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "models",
    "script_check",
]
