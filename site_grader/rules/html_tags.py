"""HTML document skeleton rule."""

from __future__ import annotations

import re

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

DOCTYPE_RE = re.compile(r"<!DOCTYPE\s+html>", re.IGNORECASE)
CONTAINER_TAGS = ("html", "head", "body")


class HtmlTagBalanceRule:
    """Checks the doctype and the html/head/body containers."""

    rule_id = "html_tag_balance"
    max_points = 4

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)

        if DOCTYPE_RE.search(content):
            rule.award(1)
        else:
            rule.issue(f"{name}: missing or incorrect <!DOCTYPE html>")

        counts = {tag: tag_counts(content, tag) for tag in CONTAINER_TAGS}
        if all(opened > 0 for opened, _closed in counts.values()):
            rule.award(2)
        else:
            rule.issue(f"{name}: missing basic tags (html, head or body)")

        for tag, (opened, closed) in counts.items():
            if opened == closed == 1:
                rule.award(0.5)
            else:
                rule.issue(f"{name}: <{tag}> is not opened and closed exactly once")

        return rule.result()


def tag_counts(content: str, tag: str) -> tuple[int, int]:
    """Return (opening, closing) counts of ``tag``."""
    opened = len(re.findall(rf"<{tag}[^>]*>", content, re.IGNORECASE))
    closed = len(re.findall(rf"</{tag}>", content, re.IGNORECASE))
    return opened, closed
