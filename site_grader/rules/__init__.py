"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from site_grader.rules.base import FileRule, Finding, ProjectRule, RuleResult, Severity
from site_grader.rules.comments import CssCommentRule, HtmlCommentRule
from site_grader.rules.css_formatting import CssFormattingRule
from site_grader.rules.css_metrics import CssClassUsageRule
from site_grader.rules.css_practices import CssBestPracticeRule
from site_grader.rules.css_syntax import CssSyntaxRule
from site_grader.rules.html_tags import HtmlTagBalanceRule
from site_grader.rules.structure import StructureRule

__all__ = [
    "CATEGORIES",
    "FileRule",
    "Finding",
    "ProjectRule",
    "RuleInfo",
    "RuleResult",
    "Severity",
    "list_rule_info",
    "select_rules",
    "validate_rule_ids",
]

CATEGORIES = ("html", "css", "structure", "comments")
TARGETS = {"html", "css", "project", "pages"}


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str
    target: str
    max_points: float


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[], Any]
    name: str
    description: str
    category: str
    target: str
    max_points: float


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules in evaluation order."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            category=spec.category,
            target=spec.target,
            max_points=spec.max_points,
        )
        for spec in _ordered_rule_specs()
    ]


def select_rules(
    category: str,
    target: str,
    *,
    disabled_rule_ids: list[str] | None = None,
) -> list[Any]:
    """Build the enabled rules of ``category`` that apply to ``target``.

    Targets are ``html`` and ``css`` for per-file rules, ``project`` for rules
    that inspect the whole tree and ``pages`` for category bonuses computed
    from every HTML page at once.
    """
    if category not in CATEGORIES:
        choices = ", ".join(CATEGORIES)
        raise ValueError(f"Unknown category '{category}'. Expected one of: {choices}")
    if target not in TARGETS:
        raise ValueError(f"Unknown rule target '{target}'")
    validate_rule_ids(disabled_rule_ids or [])

    disabled = set(disabled_rule_ids or [])
    return [
        spec.factory()
        for spec in _ordered_rule_specs()
        if spec.category == category and spec.target == target and spec.rule_id not in disabled
    ]


def validate_rule_ids(rule_ids: list[str]) -> None:
    known = {spec.rule_id for spec in _ordered_rule_specs()}
    unknown = sorted({rule_id for rule_id in rule_ids if rule_id not in known})
    if unknown:
        raise ValueError(f"Unknown rule ids: {', '.join(unknown)}")


def _ordered_rule_specs() -> list[_RuleSpec]:
    return [
        _spec(HtmlTagBalanceRule, category="html", target="html"),
        _spec(CssSyntaxRule, category="css", target="css"),
        _spec(CssBestPracticeRule, category="css", target="css"),
        _spec(CssFormattingRule, category="css", target="css"),
        _spec(CssClassUsageRule, category="css", target="pages"),
        _spec(StructureRule, category="structure", target="project"),
        _spec(HtmlCommentRule, category="comments", target="html"),
        _spec(CssCommentRule, category="comments", target="css"),
    ]


def _spec(rule_cls: type, *, category: str, target: str) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=rule_cls,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        category=category,
        target=target,
        max_points=rule_cls.max_points,
    )
