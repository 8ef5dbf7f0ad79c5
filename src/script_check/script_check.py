"""Restricted-script checks for JavaScript and JSX source trees.

This module scans a directory of source files, runs one script rule per
configured script over each file and writes a Markdown report (plus a CSV
copy) that summarises the findings per rule and per file.
"""

from __future__ import annotations

import argparse
import csv
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from src.models import Finding, RuleOptions, load_options

from .engine import ScriptRule
from .errors import ScriptCheckError, SourceParseError
from .report_utils import build_report_csv, build_report_markdown
from .script_check_config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORED_DIRS,
    DEFAULT_REPORT_NAME,
    DEFAULT_SCRIPTS,
    ENV_EXCLUDE_FUNCTIONS,
    ENV_SCRIPTS,
)
from .script_rule_manager import ScriptRuleManager

LOGGER = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Compilation of findings for a specific source file."""

    path: Path
    findings: list[Finding] = field(default_factory=list)
    root: Path | None = None
    error: str | None = None

    @property
    def display_name(self) -> str:
        if self.root is not None:
            try:
                return self.path.relative_to(self.root).as_posix()
            except ValueError:
                pass
        return self.path.as_posix()


def _split_env_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def iter_source_files(
    root: Path,
    *,
    extensions: Iterable[str] | None = None,
    ignored_dirs: Iterable[str] | None = None,
) -> list[Path]:
    """Return a sorted list of source files under ``root``.

    ``root`` may also be a single file, which is returned as-is.
    """

    if root.is_file():
        return [root]
    if not root.is_dir():
        return []

    wanted = {ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS)}
    skipped = set(ignored_dirs if ignored_dirs is not None else DEFAULT_IGNORED_DIRS)

    files: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in wanted:
            continue
        relative_parts = path.relative_to(root).parts[:-1]
        if any(part in skipped for part in relative_parts):
            continue
        files.append(path)
    return sorted(files, key=lambda item: item.as_posix().lower())


def check_file(
    path: Path,
    rules: list[ScriptRule],
    *,
    manager: ScriptRuleManager,
    root: Path | None = None,
    strict: bool = True,
) -> FileReport:
    """Run every rule over a single source file.

    Read and parse failures are recorded on the report instead of raised so a
    single bad file does not abort the run.
    """

    report = FileReport(path=path, root=root)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.exception("Could not read %s", path)
        report.error = f"Could not read file: {exc}"
        return report

    try:
        report.findings = manager.check_source(
            text, rules, filename=report.display_name, strict=strict
        )
    except SourceParseError as exc:
        LOGGER.warning("Skipping %s: %s", report.display_name, exc)
        report.error = str(exc)
    return report


def _run_check_with_logging(
    path: Path,
    rules: list[ScriptRule],
    manager: ScriptRuleManager,
    root: Path | None,
    strict: bool,
    running_total: int,
) -> tuple[FileReport, int]:
    """Run a check and emit consistent progress logging."""
    LOGGER.debug("Checking %s", path)
    report = check_file(path, rules, manager=manager, root=root, strict=strict)
    running_total += len(report.findings)
    if report.findings:
        LOGGER.info(
            "Completed %s: %d finding(s) (running total: %d)",
            report.display_name,
            len(report.findings),
            running_total,
        )
    return report, running_total


def check_files(
    root: Path,
    *,
    scripts: Iterable[str] | None = None,
    options: RuleOptions | None = None,
    extensions: Iterable[str] | None = None,
    ignored_dirs: Iterable[str] | None = None,
    strict: bool = True,
) -> list[FileReport]:
    """Check every source file under ``root`` and return one report per file.

    Raises:
            FileNotFoundError: ``root`` does not exist
            UnknownScriptError: a requested script is not registered
    """

    if not root.exists():
        raise FileNotFoundError(f"Source root not found: {root}")

    manager = ScriptRuleManager(options=options, logger=LOGGER)
    rules = manager.build_rules(scripts if scripts is not None else DEFAULT_SCRIPTS)
    base = root if root.is_dir() else root.parent
    files = iter_source_files(root, extensions=extensions, ignored_dirs=ignored_dirs)
    LOGGER.info("Found %d source file(s) under %s", len(files), root)

    reports: list[FileReport] = []
    running_total = 0
    for path in files:
        report, running_total = _run_check_with_logging(
            path, rules, manager, base, strict, running_total
        )
        reports.append(report)
    return reports


def write_reports(reports: list[FileReport], report_path: Path) -> Path:
    """Write the Markdown report and a sibling CSV report; return the Markdown path."""

    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_report_markdown(reports), encoding="utf-8")

    csv_path = report_path.with_suffix(".csv")
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_report_csv(reports))
    return report_path


def run_script_checks(
    root: Path,
    *,
    report_path: Optional[Path] = None,
    scripts: Iterable[str] | None = None,
    options: RuleOptions | None = None,
    strict: bool = True,
) -> Path:
    """Run script checks across all source files and write a report.

    Args:
            root: Directory (or single file) to scan
            report_path: Path to write the Markdown report
            scripts: Script names or rule ids (default: every script)
            options: Rule options shared by all rules
            strict: Record files with syntax errors as failures instead of
                    checking the recovered tree
    """

    reports = check_files(root, scripts=scripts, options=options, strict=strict)
    if report_path is None:
        base = root if root.is_dir() else root.parent
        report_path = base / DEFAULT_REPORT_NAME
    return write_reports(reports, report_path)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Flag JavaScript/JSX text written in restricted scripts."
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Directory or file to check (default: current directory)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help=f"Path to write the Markdown report (default: <root>/{DEFAULT_REPORT_NAME})",
    )
    parser.add_argument(
        "--script",
        action="append",
        dest="scripts",
        help="Script name or rule id to check (repeatable). "
        f"Default: env {ENV_SCRIPTS} or all of: {', '.join(DEFAULT_SCRIPTS)}",
    )
    parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="JSON file with rule options (includeComment, excludeArgsForFunctions, ...)",
    )
    parser.add_argument(
        "--include-comment",
        action="store_true",
        help="Also check comment text",
    )
    parser.add_argument(
        "--include-identifier",
        action="store_true",
        help="Also check identifier names",
    )
    parser.add_argument(
        "--exclude-function",
        action="append",
        dest="exclude_functions",
        help="Dotted call target whose arguments are not checked, e.g. i18n.t "
        f"(repeatable; env {ENV_EXCLUDE_FUNCTIONS} adds more)",
    )
    parser.add_argument(
        "--exclude-module-imports",
        action="store_true",
        help="Do not check import/export/require module specifiers",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Path to a .env file to load before reading environment defaults",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Check files with syntax errors using the recovered tree",
    )
    parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 1 when any finding is reported",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def resolve_options(args: argparse.Namespace) -> RuleOptions:
    """Combine the options file, environment defaults and CLI flags."""

    base = load_options(args.options) if args.options is not None else RuleOptions()
    functions = list(args.exclude_functions or [])
    functions.extend(_split_env_list(os.environ.get(ENV_EXCLUDE_FUNCTIONS)))
    return base.merged(
        include_comment=True if args.include_comment else None,
        include_identifier=True if args.include_identifier else None,
        exclude_args_for_functions=functions or None,
        exclude_module_imports=True if args.exclude_module_imports else None,
    )


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.dotenv is not None:
        # Do not override variables already set in the environment
        load_dotenv(dotenv_path=args.dotenv)
    else:
        load_dotenv()

    scripts = args.scripts or _split_env_list(os.environ.get(ENV_SCRIPTS)) or None

    try:
        options = resolve_options(args)
        reports = check_files(
            args.root, scripts=scripts, options=options, strict=not args.lenient
        )
    except (FileNotFoundError, ValidationError, ValueError, ScriptCheckError) as exc:
        LOGGER.error("%s", exc)
        return 1

    report_path = args.report
    if report_path is None:
        base = args.root if args.root.is_dir() else args.root.parent
        report_path = base / DEFAULT_REPORT_NAME
    write_reports(reports, report_path)

    total = sum(len(report.findings) for report in reports)
    print(f"Script check report written to {report_path.resolve()}")
    print(f"CSV report written to {report_path.with_suffix('.csv').resolve()}")
    print(f"{total} finding(s) in {len(reports)} file(s)")
    if args.fail_on_findings and total:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
