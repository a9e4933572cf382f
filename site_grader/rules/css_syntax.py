"""Stylesheet syntax rule."""

from __future__ import annotations

import re

from site_grader.project import SourceFile
from site_grader.rules.base import RuleBuilder, RuleResult

RULE_BLOCK_RE = re.compile(r"[^{}]+\{[^{}]+\}")
DECLARATION_RE = re.compile(r"[a-zA-Z-]+\s*:\s*[^;{}]+[;}]")
UNTERMINATED_RE = re.compile(r"[a-zA-Z-]+\s*:\s*[^;{}]+\s*(?=\})")

KNOWN_PROPERTIES = (
    "color",
    "background",
    "background-color",
    "font-size",
    "font-family",
    "font-weight",
    "margin",
    "padding",
    "width",
    "height",
    "display",
    "position",
    "top",
    "left",
    "right",
    "bottom",
    "border",
    "border-color",
    "border-width",
    "border-style",
    "text-align",
    "text-decoration",
    "float",
    "clear",
    "overflow",
    "z-index",
    "opacity",
    "cursor",
    "line-height",
    "letter-spacing",
    "word-spacing",
    "text-transform",
    "vertical-align",
    "white-space",
    "list-style",
    "content",
    "flex",
    "grid",
    "justify-content",
    "align-items",
    "min-width",
    "max-width",
    "min-height",
    "max-height",
)
VENDOR_PREFIXES = ("-webkit-", "-moz-", "-ms-")


class CssSyntaxRule:
    """Checks braces, rule blocks, semicolons and property names."""

    rule_id = "css_syntax"
    max_points = 9

    def inspect(self, source: SourceFile) -> RuleResult:
        content = source.content
        name = source.relative_path
        rule = RuleBuilder(self.rule_id)

        if not content.strip():
            rule.issue(f"{name}: stylesheet is empty")
            return rule.result()

        opening = content.count("{")
        closing = content.count("}")
        if opening == closing and opening > 0:
            rule.award(3)
        else:
            rule.issue(f"{name}: unbalanced braces ({opening} '{{' vs {closing} '}}')")

        if RULE_BLOCK_RE.search(content):
            rule.award(2)
        else:
            rule.issue(f"{name}: no valid CSS rules found")

        declarations = DECLARATION_RE.findall(content)
        unterminated = UNTERMINATED_RE.findall(content)
        if len(declarations) > len(unterminated):
            rule.award(2)
        elif unterminated:
            rule.warning(f"{name}: {len(unterminated)} declarations are missing a semicolon")

        suspicious = suspicious_properties(declarations)
        if not suspicious and declarations:
            rule.award(2)
        elif suspicious:
            rule.warning(f"{name}: possibly invalid properties: {', '.join(suspicious[:3])}")

        return rule.result()


def suspicious_properties(declarations: list[str]) -> list[str]:
    """Return declared property names that match no whitelist entry."""
    suspicious: list[str] = []
    for declaration in declarations:
        prop = declaration.split(":", 1)[0].strip()
        if len(prop) <= 2 or _is_known_property(prop):
            continue
        suspicious.append(prop)
    return suspicious


def _is_known_property(prop: str) -> bool:
    if prop.startswith(VENDOR_PREFIXES):
        return True
    return any(prop.startswith(known) or known in prop for known in KNOWN_PROPERTIES)
