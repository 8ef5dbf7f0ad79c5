"""Command-line entrypoint for the restricted-script checker."""

from __future__ import annotations

from src.script_check.script_check import main

if __name__ == "__main__":
    raise SystemExit(main())
