"""Tests for HTML and CSS comment quality checkers."""

from __future__ import annotations

from site_grader.rules.base import Severity
from site_grader.rules.comments import CssCommentRule, HtmlCommentRule
from tests.helpers_project import STYLESHEET, page, source


def test_nine_css_comments_with_three_dividers() -> None:
    comments = [
        "/* === NAVIGATION === */",
        "/* Styles for the menu links */",
        "/* === CONTENT === */",
        "/* Spacing around paragraphs */",
        "/* Larger headings on wide screens */",
        "/* === FOOTER === */",
        "/* Footer text stays centred */",
        "/* Muted colour for small print */",
        "/* Hover state of the buttons */",
    ]
    result = CssCommentRule().inspect(source("\n".join(comments) + "\n"))

    # no header comment, so only meaningful (+4) and divider (+2) credit
    assert result.score_delta == 4 + 2
    assert [finding.severity for finding in result.findings] == [Severity.ISSUE]
    assert "no header comment" in result.findings[0].message


def test_css_comments_full_marks_with_header() -> None:
    result = CssCommentRule().inspect(source(STYLESHEET))

    assert result.score_delta == CssCommentRule.max_points
    assert result.findings == ()


def test_css_comments_count_only_meaningful_bodies() -> None:
    content = "/* x */\n/* nav */\n/* Project header for the site */\n"
    result = CssCommentRule().inspect(source(content))

    assert result.score_delta == 2
    messages = [finding.message for finding in result.findings]
    assert "style.css: only 1/8 CSS comments" in messages
    assert result.findings[-1].severity is Severity.WARNING


def test_html_comments_full_marks() -> None:
    result = HtmlCommentRule().inspect(source(page("Home"), name="index.html"))

    assert result.score_delta == HtmlCommentRule.max_points
    assert result.findings == ()


def test_html_without_comments() -> None:
    result = HtmlCommentRule().inspect(source("<p>Hello</p>", name="index.html"))

    assert result.score_delta == 0
    severities = [finding.severity for finding in result.findings]
    assert severities == [Severity.ISSUE, Severity.ISSUE, Severity.WARNING]
    assert "only 0/5 meaningful comments" in result.findings[1].message


def test_html_short_comments_are_not_meaningful() -> None:
    content = "\n".join(
        [
            "<!-- Author: Student, date 2024 -->",
            "<!-- todo -->",
            "<!-- nav -->",
            "<!-- footer -->",
            "<!-- Main content area -->",
        ]
    )
    result = HtmlCommentRule().inspect(source(content, name="index.html"))

    # header (+2) and section comments (+2), but "todo" and "nav" are too short
    assert result.score_delta == 4
    assert "only 3/5 meaningful comments" in result.findings[0].message
