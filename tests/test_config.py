"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from site_grader.config import AppConfig, default_config_template, load_app_config
from site_grader.html_validator import DEFAULT_VALIDATOR_COMMAND
from tests.helpers_project import write_file


def test_defaults_without_config_files(tmp_path) -> None:
    config = load_app_config(tmp_path)

    assert config == AppConfig()
    assert config.results_path(tmp_path) == tmp_path / "test-results.json"
    assert config.html.command == list(DEFAULT_VALIDATOR_COMMAND)


def test_dotfile_takes_precedence_over_pyproject(tmp_path) -> None:
    write_file(tmp_path, ".site-grader.toml", 'format = "json"\n')
    write_file(tmp_path, "pyproject.toml", '[tool.site_grader]\nformat = "human"\n')

    config = load_app_config(tmp_path)

    assert config.format == "json"
    assert config.source is not None
    assert config.source.endswith(".site-grader.toml")


def test_pyproject_tool_section(tmp_path) -> None:
    write_file(
        tmp_path,
        "pyproject.toml",
        "\n".join(
            [
                "[tool.site-grader]",
                'results_file = "out/results.json"',
                'reports_dir = "reports"',
                'log_level = "DEBUG"',
                "[tool.site-grader.rules]",
                'disable = ["css_best_practice"]',
                "[tool.site-grader.html]",
                'validator = ["tidy", "-q"]',
                "",
            ]
        ),
    )

    config = load_app_config(tmp_path)

    assert config.results_path(tmp_path.resolve()) == tmp_path.resolve() / "out/results.json"
    assert config.reports_path(Path("/srv/site")) == Path("/srv/site/reports")
    assert config.log_level == "debug"
    assert config.rule_disable == ["css_best_practice"]
    assert config.html.command == ["tidy", "-q"]


def test_pyproject_without_section_uses_defaults(tmp_path) -> None:
    write_file(tmp_path, "pyproject.toml", '[project]\nname = "site"\n')

    assert load_app_config(tmp_path).source is None


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('format = "xml"\n', "format must be one of"),
        ("log_level = 3\n", "log_level must be one of"),
        ('results_file = ["a"]\n', "results_file must be a string"),
        ('rules = "all"\n', "rules must be a table"),
        ('[rules]\ndisable = ["no_such_rule"]\n', "Unknown rule ids: no_such_rule"),
        ("[html]\nvalidator = []\n", "html.validator must not be empty"),
        ("format = \n", "Invalid TOML"),
    ],
)
def test_invalid_values_raise(tmp_path, content: str, message: str) -> None:
    write_file(tmp_path, "site-grader.toml", content)

    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_explicit_missing_config_raises(tmp_path) -> None:
    with pytest.raises(ValueError, match="Config file does not exist"):
        load_app_config(tmp_path, config_path=Path("missing.toml"))


def test_template_round_trips_through_loader(tmp_path) -> None:
    write_file(tmp_path, "custom.toml", default_config_template())

    config = load_app_config(tmp_path, config_path=Path("custom.toml"))

    assert config.to_dict() | {"source": None} == AppConfig().to_dict()
