"""Score aggregation for files and categories."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from site_grader.rules.base import Finding, RuleResult, Severity

FILE_PASS_PERCENT = 60
CATEGORY_PASS_PERCENT = 70


@dataclass(frozen=True, slots=True)
class FileScore:
    """Clamped score of one file within a category run."""

    file: str
    score: float
    max_score: float
    findings: tuple[Finding, ...] = ()
    passed: bool = False
    complexity: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "file": self.file,
            "score": self.score,
            "maxScore": self.max_score,
            "passed": self.passed,
            "findings": [finding_to_dict(item) for item in self.findings],
        }
        if self.complexity is not None:
            payload["complexity"] = self.complexity
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileScore:
        return cls(
            file=str(data.get("file", "")),
            score=_as_number(data.get("score")),
            max_score=_as_number(data.get("maxScore")),
            findings=tuple(_findings_from(data.get("findings"))),
            passed=bool(data.get("passed", False)),
            complexity=data.get("complexity") if isinstance(data.get("complexity"), str) else None,
        )


@dataclass(frozen=True, slots=True)
class CategoryRecord:
    """Aggregated result of one grading category."""

    score: float
    max_score: float
    percentage: int
    passed: bool
    findings: tuple[Finding, ...] = ()
    file_scores: tuple[FileScore, ...] = field(default_factory=tuple)

    @property
    def issues(self) -> list[Finding]:
        return [item for item in self.findings if item.severity is Severity.ISSUE]

    @property
    def warnings(self) -> list[Finding]:
        return [item for item in self.findings if item.severity is Severity.WARNING]

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "passed": self.passed,
            "findings": [finding_to_dict(item) for item in self.findings],
            "fileScores": [item.to_dict() for item in self.file_scores],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CategoryRecord:
        raw_files = data.get("fileScores")
        file_scores = (
            tuple(FileScore.from_dict(item) for item in raw_files if isinstance(item, dict))
            if isinstance(raw_files, list)
            else ()
        )
        score = _as_number(data.get("score"))
        max_score = _as_number(data.get("maxScore"))
        if "score" not in data and ("htmlScore" in data or "cssScore" in data):
            # comment records that keep HTML and CSS totals apart
            score = _as_number(data.get("htmlScore")) + _as_number(data.get("cssScore"))
            max_score = _as_number(data.get("htmlMax")) + _as_number(data.get("cssMax"))
        raw_percentage = data.get("percentage")
        percentage = (
            raw_percentage
            if isinstance(raw_percentage, int) and not isinstance(raw_percentage, bool)
            else percentage_of(score, max_score)
        )
        return cls(
            score=score,
            max_score=max_score,
            percentage=percentage,
            passed=bool(data.get("passed", False)),
            findings=tuple(_findings_from(data.get("findings"))),
            file_scores=file_scores,
        )


def aggregate(
    results: Iterable[RuleResult],
    per_file_cap: float,
    file: str = "",
    *,
    complexity: str | None = None,
) -> FileScore:
    """Fold one file's rule results into a clamped ``FileScore``.

    Findings keep checker invocation order. Zero results yield a neutral,
    failing record.
    """
    total: float = 0
    findings: list[Finding] = []
    for result in results:
        total += result.score_delta
        findings.extend(result.findings)

    score = _clamp(total, upper=per_file_cap)
    return FileScore(
        file=file,
        score=score,
        max_score=per_file_cap,
        findings=tuple(findings),
        passed=file_passed(score, per_file_cap),
        complexity=complexity,
    )


def aggregate_category(
    file_scores: Iterable[FileScore],
    max_score: float,
    category_results: Iterable[RuleResult] = (),
) -> CategoryRecord:
    """Fold file scores and category-wide bonuses into a ``CategoryRecord``.

    Bonuses are added after the per-file clamp and are not clamped themselves.
    """
    scored_files = tuple(file_scores)
    score: float = sum(item.score for item in scored_files)
    findings: list[Finding] = [finding for item in scored_files for finding in item.findings]
    for result in category_results:
        score += result.score_delta
        findings.extend(result.findings)

    percentage = percentage_of(score, max_score)
    return CategoryRecord(
        score=score,
        max_score=max_score,
        percentage=percentage,
        passed=category_passed(percentage),
        findings=tuple(findings),
        file_scores=scored_files,
    )


def file_passed(score: float, max_score: float) -> bool:
    return max_score > 0 and 100 * score >= max_score * FILE_PASS_PERCENT


def category_passed(percentage: int) -> bool:
    return percentage >= CATEGORY_PASS_PERCENT


def percentage_of(score: float, max_score: float) -> int:
    """Return ``100 * score / max_score`` rounded half up, or 0 without a maximum."""
    if max_score <= 0:
        return 0
    return int(math.floor(100 * score / max_score + 0.5))


def finding_to_dict(finding: Finding) -> dict[str, Any]:
    return {
        "severity": finding.severity.value,
        "message": finding.message,
        "rule": finding.rule_id,
    }


def _findings_from(value: Any) -> list[Finding]:
    if not isinstance(value, list):
        return []
    findings: list[Finding] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        try:
            severity = Severity(item.get("severity", Severity.ISSUE.value))
        except ValueError:
            severity = Severity.ISSUE
        findings.append(
            Finding(
                severity=severity,
                message=str(item.get("message", "")),
                rule_id=str(item.get("rule", "")),
            )
        )
    return findings


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    return max(lower, min(upper, value))
