"""Stylesheet best-practice rule."""

from __future__ import annotations

import re

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

IMPORTANT_RE = re.compile(r"!important", re.IGNORECASE)
ID_SELECTOR_RE = re.compile(r"#[a-zA-Z][\w-]*")
CLASS_SELECTOR_RE = re.compile(r"\.[a-zA-Z][\w-]*")
LEADING_WHITESPACE_RE = re.compile(r"^(\s+)")
VENDOR_PROPERTY_RE = re.compile(r"-(?:webkit|moz|ms|o)-[\w-]+")
MEDIA_QUERY_RE = re.compile(r"@media[^{]+\{")
HEX_COLOR_RE = re.compile(r"#(?:[A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")
RGB_COLOR_RE = re.compile(r"rgb\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*\)")
NAMED_COLOR_RE = re.compile(
    r":\s*(?:red|blue|green|white|black|yellow|purple|orange|pink|gray|grey)\s*[;}]",
    re.IGNORECASE,
)

MAX_ID_SELECTORS = 2
MIN_CLASS_SELECTORS = 3
MIN_LINES_FOR_INDENT_CREDIT = 10
MAX_NAMED_COLORS = 3


class CssBestPracticeRule:
    """Rewards class selectors, responsive blocks and consistent style habits."""

    rule_id = "css_best_practice"
    max_points = 11

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)
        if not content.strip():
            return rule.result()

        important = len(IMPORTANT_RE.findall(content))
        if important == 0:
            rule.award(2)
        else:
            rule.warning(f"{name}: !important used {important} times, try to avoid it")

        ids = len(ID_SELECTOR_RE.findall(content))
        if ids <= MAX_ID_SELECTORS:
            rule.award(1)
        else:
            rule.warning(f"{name}: many id selectors ({ids}), prefer classes for styling")

        classes = len(CLASS_SELECTOR_RE.findall(content))
        if classes >= MIN_CLASS_SELECTORS:
            rule.award(2)
        elif classes > 0:
            rule.award(1)
            rule.warning(f"{name}: consider using more class selectors")

        lines = content.split("\n")
        if has_mixed_indentation(lines):
            rule.issue(f"{name}: inconsistent indentation (mix of spaces and tabs)")
        elif len(lines) > MIN_LINES_FOR_INDENT_CREDIT:
            rule.award(2)

        if VENDOR_PROPERTY_RE.search(content):
            rule.award(1)

        if MEDIA_QUERY_RE.search(content):
            rule.award(2)
        else:
            rule.warning(f"{name}: consider adding media queries for responsive design")

        if HEX_COLOR_RE.search(content) or RGB_COLOR_RE.search(content):
            rule.award(1)

        named = len(NAMED_COLOR_RE.findall(content))
        if named > MAX_NAMED_COLORS:
            rule.warning(f"{name}: {named} named colours used, consider hex codes")

        return rule.result()


def has_mixed_indentation(lines: list[str]) -> bool:
    """Return True when indented lines disagree with the first indent style."""
    style: str | None = None
    for line in lines:
        if not line.strip():
            continue
        match = LEADING_WHITESPACE_RE.match(line)
        if match is None:
            continue
        whitespace = match.group(1)
        has_spaces = " " in whitespace
        has_tabs = "\t" in whitespace
        if style is None:
            style = "spaces" if has_spaces else "tabs"
        elif (style == "spaces" and has_tabs) or (style == "tabs" and has_spaces):
            return True
    return False
