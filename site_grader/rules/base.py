"""Base rule protocols and finding model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from site_grader.project import ProjectRoot, SourceFile


class Severity(str, Enum):
    """Issues block quality; warnings are advisory."""

    ISSUE = "issue"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single human-readable finding emitted by a rule."""

    severity: Severity
    message: str
    rule_id: str = ""

    @property
    def is_issue(self) -> bool:
        return self.severity is Severity.ISSUE


@dataclass(frozen=True, slots=True)
class RuleResult:
    """Additive score contribution and findings of one check."""

    score_delta: float = 0
    findings: tuple[Finding, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.score_delta < 0:
            raise ValueError(f"score_delta must be non-negative, got {self.score_delta}")


class RuleBuilder:
    """Accumulates points and findings while a checker runs."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        self.score: float = 0
        self.findings: list[Finding] = []

    def award(self, points: float) -> None:
        self.score += points

    def issue(self, message: str) -> None:
        self.findings.append(Finding(Severity.ISSUE, message, self.rule_id))

    def warning(self, message: str) -> None:
        self.findings.append(Finding(Severity.WARNING, message, self.rule_id))

    def result(self) -> RuleResult:
        return RuleResult(score_delta=self.score, findings=tuple(self.findings))


class FileRule(Protocol):
    """Protocol for deterministic per-file checkers."""

    rule_id: str

    def inspect(self, source: SourceFile) -> RuleResult:
        """Inspect one file and return its score contribution."""


class ProjectRule(Protocol):
    """Protocol for checkers that look at the whole project tree."""

    rule_id: str

    def inspect(self, project: ProjectRoot) -> RuleResult:
        """Inspect the project and return its score contribution."""
