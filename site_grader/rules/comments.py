"""Comment quality rules for HTML pages and stylesheets.

Both variants count comments with plain regular expressions. A comment is
"meaningful" when its body, stripped of delimiters, is longer than five
characters; the HTML variant also ignores placeholder bodies such as ``todo``.
"""

from __future__ import annotations

import re

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

MIN_MEANINGFUL_LENGTH = 5

HTML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
HTML_DELIMITER_RE = re.compile(r"<!--\s*|\s*-->")
HTML_HEADER_RE = re.compile(
    r"<!--[\s\S]*?(?:titel|title|auteur|author|datum|date)[\s\S]*?-->",
    re.IGNORECASE,
)
HTML_PLACEHOLDER_RE = re.compile(r"^(?:test|todo|fix|temp)$", re.IGNORECASE)
HTML_SECTION_RE = re.compile(r"navigatie|nav|header|footer|main|sectie|section", re.IGNORECASE)

CSS_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
CSS_DELIMITER_RE = re.compile(r"/\*\s*|\s*\*/")
CSS_HEADER_RE = re.compile(
    r"/\*[\s\S]*?(?:bestand|file|auteur|author|datum|date|project)[\s\S]*?\*/",
    re.IGNORECASE,
)
CSS_DIVIDER_RE = re.compile(r"^/\*\s*={3,}.*={3,}\s*\*/$", re.MULTILINE)


class HtmlCommentRule:
    """Scores header, meaningful and section comments in an HTML page."""

    rule_id = "html_comments"
    max_points = 7
    min_meaningful = 5
    min_sections = 2

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)

        if HTML_HEADER_RE.search(content):
            rule.award(2)
        else:
            rule.issue(f"{name}: no header comment with title/author/date")

        comments = HTML_COMMENT_RE.findall(content)
        meaningful = [
            body for body in _bodies(comments, HTML_DELIMITER_RE) if _is_meaningful_html(body)
        ]
        if len(meaningful) >= self.min_meaningful:
            rule.award(3)
        else:
            rule.issue(
                f"{name}: only {len(meaningful)}/{self.min_meaningful} meaningful comments, "
                "describe important sections such as navigation, header and footer"
            )

        sections = [comment for comment in comments if HTML_SECTION_RE.search(comment)]
        if len(sections) >= self.min_sections:
            rule.award(2)
        else:
            rule.warning(f"{name}: add more section comments (nav, header, main, footer)")

        return rule.result()


class CssCommentRule:
    """Scores header, meaningful and divider comments in a stylesheet."""

    rule_id = "css_comments"
    max_points = 8
    min_meaningful = 8
    min_dividers = 3

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)

        if CSS_HEADER_RE.search(content):
            rule.award(2)
        else:
            rule.issue(
                f"{name}: no header comment, for example "
                "/* Project: My Website | Author: Name | Date: 2024 */"
            )

        comments = CSS_COMMENT_RE.findall(content)
        meaningful = [
            body
            for body in _bodies(comments, CSS_DELIMITER_RE)
            if len(body) > MIN_MEANINGFUL_LENGTH
        ]
        if len(meaningful) >= self.min_meaningful:
            rule.award(4)
        else:
            rule.issue(f"{name}: only {len(meaningful)}/{self.min_meaningful} CSS comments")

        dividers = [comment for comment in comments if CSS_DIVIDER_RE.search(comment)]
        if len(dividers) >= self.min_dividers:
            rule.award(2)
        else:
            rule.warning(f"{name}: use section dividers such as /* === NAVIGATION === */")

        return rule.result()


def _bodies(comments: list[str], delimiter: re.Pattern[str]) -> list[str]:
    return [delimiter.sub("", comment).strip() for comment in comments]


def _is_meaningful_html(body: str) -> bool:
    return len(body) > MIN_MEANINGFUL_LENGTH and not HTML_PLACEHOLDER_RE.match(body)
