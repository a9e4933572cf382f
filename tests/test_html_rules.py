"""Tests for the HTML document skeleton checker."""

from __future__ import annotations

from site_grader.rules.base import Severity
from site_grader.rules.html_tags import HtmlTagBalanceRule, tag_counts
from tests.helpers_project import page, source


def test_well_formed_page_scores_full_points() -> None:
    result = HtmlTagBalanceRule().inspect(source(page("Home"), name="index.html"))

    assert result.score_delta == 4
    assert result.findings == ()


def test_missing_doctype_and_body() -> None:
    content = "<html>\n<head><title>x</title></head>\n</html>\n"
    result = HtmlTagBalanceRule().inspect(source(content, name="index.html"))

    # html and head are each opened and closed once
    assert result.score_delta == 1
    messages = [finding.message for finding in result.findings]
    assert "index.html: missing or incorrect <!DOCTYPE html>" in messages
    assert "index.html: missing basic tags (html, head or body)" in messages
    assert "index.html: <body> is not opened and closed exactly once" in messages
    assert all(finding.severity is Severity.ISSUE for finding in result.findings)


def test_duplicate_body_loses_balance_point() -> None:
    content = "<!DOCTYPE html><html><head></head><body></body><body></body></html>"
    result = HtmlTagBalanceRule().inspect(source(content, name="index.html"))

    assert result.score_delta == 1 + 2 + 0.5 + 0.5
    assert len(result.findings) == 1


def test_tag_counts_is_case_insensitive() -> None:
    assert tag_counts("<HTML lang='en'></html>", "html") == (1, 1)
    assert tag_counts("<body class='x'>", "body") == (1, 0)
