"""Stylesheet size metrics and HTML class-usage bonus."""

from __future__ import annotations

import re
from dataclasses import dataclass

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

RULE_RE = re.compile(r"[^{}]+\{[^{}]*\}")
SELECTOR_RE = re.compile(r"[^{}]+(?=\{)")
DECLARATION_RE = re.compile(r"[\w-]+\s*:[^;}]+[;}]")
CLASS_ATTR_RE = re.compile(r"class=[\"']([^\"']+)[\"']", re.IGNORECASE)
ID_ATTR_RE = re.compile(r"id=[\"']([^\"']+)[\"']", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class CssComplexity:
    """Size metrics for one stylesheet."""

    rules: int
    selectors: int
    declarations: int
    lines: int

    @property
    def label(self) -> str:
        if self.rules > 40 or self.declarations > 100:
            return "advanced"
        if self.rules > 20 or self.declarations > 50:
            return "intermediate"
        return "basic"


def analyze_complexity(content: str) -> CssComplexity:
    return CssComplexity(
        rules=len(RULE_RE.findall(content)),
        selectors=len(SELECTOR_RE.findall(content)),
        declarations=len(DECLARATION_RE.findall(content)),
        lines=len(content.split("\n")),
    )


class CssClassUsageRule:
    """Category bonus for HTML pages that actually use CSS classes."""

    rule_id = "css_class_usage"
    max_points = 2

    def inspect_pages(self, pages: list[SourceFile]) -> RuleResult:
        rule = RuleBuilder(self.rule_id)
        classes, _ids = collect_selectors_used(pages)
        if classes:
            rule.award(2)
        else:
            rule.warning("No CSS classes found in the HTML pages, is the styling applied?")
        return rule.result()


def collect_selectors_used(pages: list[SourceFile]) -> tuple[set[str], set[str]]:
    """Return the class names and ids referenced by ``class``/``id`` attributes."""
    classes: set[str] = set()
    ids: set[str] = set()
    for page in pages:
        for value in CLASS_ATTR_RE.findall(page.content):
            classes.update(item for item in value.split() if item)
        for value in ID_ATTR_RE.findall(page.content):
            if value.strip():
                ids.add(value.strip())
    return classes, ids
