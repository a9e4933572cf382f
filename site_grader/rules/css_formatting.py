"""Stylesheet formatting rule."""

from __future__ import annotations

import re

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

SPACED_COLON_RE = re.compile(r"[\w-]+\s*:\s+[^;{}]+")
UNSPACED_COLON_RE = re.compile(r"[\w-]+\s*:[^\s][^;{}]+")
NEWLINE_AFTER_OPEN_RE = re.compile(r"\{\s*\n")
CONTENT_AFTER_OPEN_RE = re.compile(r"\{[^\n\s]")
CLOSING_ON_OWN_LINE_RE = re.compile(r"\n\s*\}")


class CssFormattingRule:
    """Checks colon spacing and brace placement."""

    rule_id = "css_formatting"
    max_points = 5

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)
        if not content.strip():
            return rule.result()

        spaced = len(SPACED_COLON_RE.findall(content))
        unspaced = len(UNSPACED_COLON_RE.findall(content))
        if spaced > unspaced:
            rule.award(2)
        else:
            rule.issue(f"{name}: add a space after the colon in declarations")

        with_newline = len(NEWLINE_AFTER_OPEN_RE.findall(content))
        without_newline = len(CONTENT_AFTER_OPEN_RE.findall(content))
        if with_newline > without_newline:
            rule.award(2)
        elif without_newline:
            rule.issue(f"{name}: start a new line after an opening brace {{")

        own_line = len(CLOSING_ON_OWN_LINE_RE.findall(content))
        if own_line == content.count("}"):
            rule.award(1)
        else:
            rule.issue(f"{name}: put every closing brace }} on its own line")

        return rule.result()
