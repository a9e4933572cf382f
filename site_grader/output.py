"""Console output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from site_grader import __version__
from site_grader.rules.base import Finding, Severity
from site_grader.scoring import CategoryRecord
from site_grader.store import ResultStore


def render_human(name: str, record: CategoryRecord, *, limit: int = 10) -> str:
    """Render a compact colorized category summary."""
    status, color = ("PASSED", "green") if record.passed else ("NEEDS WORK", "red")
    lines: list[str] = [
        click.style(
            f"{name.upper()} score: {format_points(record.score)}/{format_points(record.max_score)}"
            f" ({record.percentage}%) {status}",
            fg=color,
            bold=True,
        )
    ]

    if record.file_scores:
        passed_files = sum(1 for item in record.file_scores if item.passed)
        summary = f"Files: {passed_files}/{len(record.file_scores)} passed"
        lines.append(click.style(summary, bold=True))
        for file_score in record.file_scores:
            marker = "ok" if file_score.passed else "!!"
            lines.append(
                f"- [{marker}] {file_score.file}: "
                f"{format_points(file_score.score)}/{format_points(file_score.max_score)}"
            )

    sections = (("Issues", Severity.ISSUE, "red"), ("Warnings", Severity.WARNING, "yellow"))
    for label, severity, fg in sections:
        selected = [item for item in record.findings if item.severity is severity]
        if not selected:
            continue
        lines.append(click.style(f"{label} ({len(selected)}):", fg=fg, bold=True))
        lines.extend(f"  {item.message}" for item in selected[:limit])
        if len(selected) > limit:
            lines.append(f"  ... and {len(selected) - limit} more")
    return "\n".join(lines)


def render_json(name: str, record: CategoryRecord, store: ResultStore) -> str:
    """Render stable JSON output for CI and automation."""
    payload: dict[str, Any] = {
        "category": name,
        "record": record.to_dict(),
        "store": {"total": store.total, "passed": store.passed},
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "version": __version__,
        },
    }
    return json.dumps(payload, sort_keys=True)


def format_points(value: float) -> str:
    """Render points without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def finding_line(finding: Finding) -> str:
    prefix = "Issue" if finding.severity is Severity.ISSUE else "Warning"
    return f"{prefix}: {finding.message}"
