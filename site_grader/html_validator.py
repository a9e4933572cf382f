"""External HTML grammar validator.

The validator is a separate command line tool (``html-validate`` by default)
that reads markup on stdin and prints JSON results. It is independent of the
built-in tag balance rule and never contributes to scores.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import run
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_VALIDATOR_COMMAND = (
    "npx",
    "--no-install",
    "html-validate",
    "--stdin",
    "--formatter",
    "json",
)


class HtmlValidatorError(RuntimeError):
    """Raised when the validator command cannot be run or its output parsed."""


@dataclass(frozen=True, slots=True)
class ValidationMessage:
    """One grammar problem reported by the validator."""

    line: int
    message: str


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Validity flag plus the problems found in one document."""

    valid: bool
    messages: list[ValidationMessage] = field(default_factory=list)


class HtmlValidator(Protocol):
    def validate(self, html: str, path: Path) -> ValidationReport:
        """Validate raw markup; ``path`` is used for reporting only."""


class CommandHtmlValidator:
    """Runs a validator command that prints html-validate style JSON."""

    def __init__(self, command: list[str] | tuple[str, ...] = DEFAULT_VALIDATOR_COMMAND) -> None:
        if not command:
            raise ValueError("validator command must not be empty")
        self.command = list(command)

    def validate(self, html: str, path: Path) -> ValidationReport:
        try:
            completed = run(
                self.command,
                input=html,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise HtmlValidatorError(f"could not run {self.command[0]}: {exc}") from exc

        stdout = completed.stdout.strip()
        if not stdout:
            if completed.returncode == 0:
                return ValidationReport(valid=True)
            stderr = (completed.stderr or "").strip()
            raise HtmlValidatorError(stderr or f"{' '.join(self.command)} failed for {path}")

        try:
            payload = json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise HtmlValidatorError(f"validator printed invalid JSON for {path}: {exc}") from exc

        messages = parse_messages(payload)
        logger.debug("Validated markup (path=%s messages=%d)", path, len(messages))
        return ValidationReport(valid=not messages, messages=messages)


def parse_messages(payload: Any) -> list[ValidationMessage]:
    """Flatten html-validate JSON results into ``ValidationMessage`` records."""
    if not isinstance(payload, list):
        raise HtmlValidatorError("validator output must be a JSON list of results")
    messages: list[ValidationMessage] = []
    for result in payload:
        if not isinstance(result, dict):
            continue
        for item in result.get("messages") or []:
            if not isinstance(item, dict):
                continue
            line = item.get("line")
            messages.append(
                ValidationMessage(
                    line=line if isinstance(line, int) else 0,
                    message=str(item.get("message", "")),
                )
            )
    return messages


def render_feedback(reports: list[tuple[str, ValidationReport]]) -> str:
    """Render validator reports as the plain-text ``feedback.txt`` artifact."""
    lines: list[str] = []
    for name, report in reports:
        if report.valid:
            lines.append(f"{name}: HTML validation passed")
            continue
        lines.append(f"{name}: {len(report.messages)} HTML errors found")
        for message in report.messages:
            lines.append(f"   - Line {message.line}: {message.message}")
    return "\n".join(lines)
