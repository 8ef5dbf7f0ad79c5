"""Markdown and CSV builders for script check reports.

Both builders take the per-file reports produced by the runner and order
files by path so repeated runs produce identical output.
"""

from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .script_check import FileReport


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _format_matches(matches: list[str] | None, max_matches: int = 3) -> str:
    """Return the matched runs as a short, truncated list.

    If there are more than ``max_matches`` runs, the first ``max_matches`` are
    shown followed by "(+N more)".
    """
    if not matches:
        return "-"
    if len(matches) <= max_matches:
        return ", ".join(matches)
    visible = ", ".join(matches[:max_matches])
    remaining = len(matches) - max_matches
    return f"{visible} (+{remaining} more)"


def build_report_markdown(reports: Iterable["FileReport"]) -> str:
    """Convert the collected file reports into Markdown output."""

    report_list = list(reports)
    total_files = len(report_list)
    total_findings = sum(len(report.findings) for report in report_list)
    total_failures = sum(1 for report in report_list if report.error)

    rule_totals: dict[str, int] = {}
    for report in report_list:
        for finding in report.findings:
            rule_totals[finding.rule_id] = rule_totals.get(finding.rule_id, 0) + 1

    lines: list[str] = []
    lines.append("# Script Check Report")
    lines.append("")
    lines.append(f"- Checked {total_files} file(s)")
    lines.append(f"- Total findings: {total_findings}")
    if total_failures:
        lines.append(f"- Files that could not be checked: {total_failures}")

    lines.append("")
    lines.append("## Totals by Rule")
    if rule_totals:
        for rule_id in sorted(rule_totals):
            lines.append(f"- `{rule_id}`: {rule_totals[rule_id]} finding(s)")
    else:
        lines.append("- No findings.")

    lines.append("")
    lines.append("---")
    lines.append("")
    lines.append("## File Details")
    if not report_list:
        lines.append("")
        lines.append("_No source files found for checking._")
        return "\n".join(lines)

    for report in sorted(report_list, key=lambda item: str(item.path).lower()):
        lines.append("")
        lines.append(f"### {report.display_name}")
        lines.append("")
        if report.error:
            lines.append(f"_Check failed: {_escape_cell(report.error)}_")
            continue
        if not report.findings:
            lines.append("_No findings._")
            continue

        lines.append(f"Found {len(report.findings)} finding(s).")
        lines.append("")
        lines.append("| Line | Column | Rule | Node | Message | Matches |")
        lines.append("| --- | --- | --- | --- | --- | --- |")
        for finding in report.findings:
            lines.append(
                f"| {finding.line} | {finding.column} | `{finding.rule_id}` | "
                f"{finding.node_type.value} | {_escape_cell(finding.message)} | "
                f"{_escape_cell(_format_matches(finding.matches))} |"
            )

    return "\n".join(lines)


def build_report_csv(reports: Iterable["FileReport"]) -> list[list[str]]:
    """Convert the collected file reports into CSV data.

    Returns a list of rows, where each row is a list of string values.
    The first row contains the column headers.
    """

    rows: list[list[str]] = []

    rows.append([
        "Filename",
        "Line",
        "Column",
        "Rule ID",
        "Script",
        "Node Type",
        "Excerpt",
        "Message",
        "Matches",
    ])

    for report in sorted(reports, key=lambda item: str(item.path).lower()):
        if report.error:
            rows.append([
                report.display_name,
                "",
                "",
                "CHECK_FAILURE",
                "",
                "",
                "",
                report.error,
                "",
            ])
            continue
        for finding in report.findings:
            rows.append([
                report.display_name,
                str(finding.line),
                str(finding.column),
                finding.rule_id,
                finding.script,
                finding.node_type.value,
                finding.excerpt,
                finding.message,
                "; ".join(finding.matches),
            ])

    return rows
