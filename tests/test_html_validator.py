"""Tests for the external HTML validator boundary."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from site_grader.html_validator import (
    CommandHtmlValidator,
    HtmlValidatorError,
    ValidationMessage,
    ValidationReport,
    parse_messages,
    render_feedback,
)


def _command(script: str) -> list[str]:
    return [sys.executable, "-c", script]


def test_parse_messages_flattens_results() -> None:
    payload = [
        {"filePath": "-", "messages": [{"line": 3, "message": "Unclosed <p>"}]},
        {"messages": [{"message": "no line"}, "junk"]},
        "junk",
    ]

    assert parse_messages(payload) == [
        ValidationMessage(line=3, message="Unclosed <p>"),
        ValidationMessage(line=0, message="no line"),
    ]


def test_parse_messages_rejects_non_list() -> None:
    with pytest.raises(HtmlValidatorError):
        parse_messages({"messages": []})


def test_command_validator_reports_messages() -> None:
    script = (
        "import json, sys; html = sys.stdin.read(); "
        "print(json.dumps([{'messages': [{'line': 1, 'message': html.strip()}]}]))"
    )
    validator = CommandHtmlValidator(_command(script))

    report = validator.validate("<p>broken\n", Path("index.html"))

    assert report.valid is False
    assert report.messages == [ValidationMessage(line=1, message="<p>broken")]


def test_command_validator_silent_success_is_valid() -> None:
    validator = CommandHtmlValidator(_command("import sys; sys.stdin.read()"))

    assert validator.validate("<p>ok</p>", Path("index.html")) == ValidationReport(valid=True)


def test_command_validator_failures_raise() -> None:
    failing = CommandHtmlValidator(_command("import sys; sys.exit('boom')"))
    with pytest.raises(HtmlValidatorError, match="boom"):
        failing.validate("", Path("index.html"))

    garbled = CommandHtmlValidator(_command("print('not json')"))
    with pytest.raises(HtmlValidatorError, match="invalid JSON"):
        garbled.validate("", Path("index.html"))

    missing = CommandHtmlValidator(["definitely-not-a-real-validator-binary"])
    with pytest.raises(HtmlValidatorError, match="could not run"):
        missing.validate("", Path("index.html"))


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        CommandHtmlValidator([])


def test_render_feedback() -> None:
    text = render_feedback(
        [
            ("index.html", ValidationReport(valid=True)),
            (
                "contact.html",
                ValidationReport(valid=False, messages=[ValidationMessage(4, "Bad attribute")]),
            ),
        ]
    )

    assert text.splitlines() == [
        "index.html: HTML validation passed",
        "contact.html: 1 HTML errors found",
        "   - Line 4: Bad attribute",
    ]
