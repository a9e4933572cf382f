"""Configuration loading for site-grader."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from site_grader.html_validator import DEFAULT_VALIDATOR_COMMAND
from site_grader.rules import validate_rule_ids
from site_grader.store import RESULTS_FILENAME

CONFIG_FILENAMES = (".site-grader.toml", "site-grader.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("site_grader", "site-grader")
LOG_LEVELS = {"debug", "info", "warning", "error"}


@dataclass(slots=True)
class HtmlValidatorConfig:
    """External HTML validator command."""

    command: list[str] = field(default_factory=lambda: list(DEFAULT_VALIDATOR_COMMAND))

    def to_dict(self) -> dict[str, Any]:
        return {"validator": list(self.command)}


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    results_file: str = RESULTS_FILENAME
    reports_dir: str = "."
    log_level: str = "warning"
    rule_disable: list[str] = field(default_factory=list)
    html: HtmlValidatorConfig = field(default_factory=HtmlValidatorConfig)
    source: str | None = None

    def results_path(self, root: Path) -> Path:
        return _under(root, self.results_file)

    def reports_path(self, root: Path) -> Path:
        return _under(root, self.reports_dir)

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "results_file": self.results_file,
            "reports_dir": self.reports_dir,
            "log_level": self.log_level,
            "rules": {"disable": list(self.rule_disable)},
            "html": self.html.to_dict(),
            "source": self.source,
        }


def load_app_config(root: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or project-local files with precedence."""
    root = root.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (root / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = root / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = root / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    validator = ", ".join(f'"{part}"' for part in DEFAULT_VALIDATOR_COMMAND)
    return "\n".join(
        [
            'format = "human"',
            f'results_file = "{RESULTS_FILENAME}"',
            'reports_dir = "."',
            'log_level = "warning"',
            "",
            "[rules]",
            '# disable = ["css_best_practice"]',
            "disable = []",
            "",
            "[html]",
            f"validator = [{validator}]",
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    html_mapping = _as_table(mapping.get("html"), "html")

    rule_disable = _as_str_list(rules_mapping.get("disable"), "rules.disable")
    validate_rule_ids(rule_disable)

    validator = html_mapping.get("validator")
    command = (
        _as_str_list(validator, "html.validator")
        if validator is not None
        else list(DEFAULT_VALIDATOR_COMMAND)
    )
    if not command:
        raise ValueError("html.validator must not be empty")

    return AppConfig(
        format=_as_choice(mapping.get("format", "human"), {"human", "json"}, "format"),
        results_file=_as_str(mapping.get("results_file", RESULTS_FILENAME), "results_file"),
        reports_dir=_as_str(mapping.get("reports_dir", "."), "reports_dir"),
        log_level=_as_choice(mapping.get("log_level", "warning"), LOG_LEVELS, "log_level"),
        rule_disable=rule_disable,
        html=HtmlValidatorConfig(command=command),
        source=source,
    )


def _under(root: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else root / path


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value
