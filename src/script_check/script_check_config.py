"""Defaults for script checking runs.

This module defines which scripts are checked, which files are scanned and
which directories are skipped when no overrides are given on the command line
or in the environment.
"""

# Scripts checked when neither --script nor SCRIPT_CHECK_SCRIPTS is given
DEFAULT_SCRIPTS = ("chinese", "japanese", "korean", "greek", "russian", "thai")

# Source file extensions parsed with the JavaScript grammar
DEFAULT_EXTENSIONS = {".js", ".jsx", ".mjs", ".cjs"}

# Directory names never descended into
DEFAULT_IGNORED_DIRS = {
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
}

# Environment variables read by the CLI (a .env file is loaded first)
ENV_SCRIPTS = "SCRIPT_CHECK_SCRIPTS"
ENV_EXCLUDE_FUNCTIONS = "SCRIPT_CHECK_EXCLUDE_FUNCTIONS"

DEFAULT_REPORT_NAME = "script-check-report.md"
