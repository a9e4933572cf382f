"""CLI entrypoint for site-grader."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from site_grader import __version__
from site_grader.categories import grade_category
from site_grader.config import LOG_LEVELS, AppConfig, default_config_template, load_app_config
from site_grader.html_validator import (
    CommandHtmlValidator,
    HtmlValidatorError,
    ValidationReport,
    render_feedback,
)
from site_grader.output import render_human, render_json
from site_grader.project import ProjectRoot, SourceReadError
from site_grader.report import (
    FALLBACK_FEEDBACK,
    FEEDBACK_FILENAME,
    QUICK_FEEDBACK_FILENAME,
    REPORT_FILENAMES,
    VALIDATOR_FEEDBACK_FILENAME,
    build_category_report,
    build_fallback_report,
    build_feedback,
    build_quick_feedback,
    calculate_progress,
    write_report,
)
from site_grader.rules import list_rule_info
from site_grader.scoring import CATEGORY_PASS_PERCENT
from site_grader.store import load, record_category

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="site-grader",
    no_args_is_help=True,
    help="Grade static student websites and write feedback reports.",
)

RootOption = Annotated[Path, typer.Option("--root", help="Project root to grade.")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config TOML file."),
]
FormatOption = Annotated[
    str | None, typer.Option(help="Output format: human|json.", show_default="human")
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="debug|info|warning|error.", show_default="warning"),
]


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version


def configure_logging(level: str = "warning") -> None:
    """Configure application logging with a Rich handler."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )


@app.command("html")
def html_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    format: FormatOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Check the document skeleton of every HTML page."""
    _run_category("html", root, config_file, format, log_level)


@app.command("css")
def css_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    format: FormatOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Check syntax, practices and formatting of every stylesheet."""
    _run_category("css", root, config_file, format, log_level)


@app.command("structure")
def structure_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    format: FormatOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Check folder layout, naming, stylesheet links and menus."""
    _run_category("structure", root, config_file, format, log_level)


@app.command("comments")
def comments_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    format: FormatOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Check comment quality in HTML pages and stylesheets."""
    _run_category("comments", root, config_file, format, log_level)


@app.command("feedback")
def feedback_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    log_level: LogLevelOption = None,
    seed: Annotated[
        int | None, typer.Option(help="Seed for the encouragement picked in FEEDBACK.md.")
    ] = None,
) -> None:
    """Write FEEDBACK.md and QUICK_FEEDBACK.md from the recorded results."""
    app_config = _load_config_or_raise(root, config_file)
    _configure_from(app_config, log_level)
    reports_dir = app_config.reports_path(root)
    feedback_path = reports_dir / FEEDBACK_FILENAME

    try:
        store = load(app_config.results_path(root))
        write_report(feedback_path, build_feedback(store, rng=random.Random(seed)))
        write_report(reports_dir / QUICK_FEEDBACK_FILENAME, build_quick_feedback(store))
        progress = calculate_progress(store)
    except Exception:
        logger.exception("Feedback generation failed")
        write_report(feedback_path, FALLBACK_FEEDBACK)
        raise typer.Exit(code=1) from None

    typer.echo(f"Progress: {progress.percentage}% ({store.passed}/{store.total} categories)")
    typer.echo(f"Wrote feedback: {feedback_path}")
    if progress.percentage < CATEGORY_PASS_PERCENT:
        raise typer.Exit(code=1)


@app.command("validate-html")
def validate_html_command(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Run the external HTML validator over every page and write feedback.txt."""
    app_config = _load_config_or_raise(root, config_file)
    _configure_from(app_config, log_level)
    project = ProjectRoot.at(root)
    feedback_path = app_config.reports_path(root) / VALIDATOR_FEEDBACK_FILENAME
    validator = CommandHtmlValidator(app_config.html.command)

    reports: list[tuple[str, ValidationReport]] = []
    try:
        for path in project.html_files():
            source = project.read(path)
            reports.append((source.relative_path, validator.validate(source.content, path)))
    except (HtmlValidatorError, SourceReadError) as exc:
        logger.error("HTML validation could not run: %s", exc)
        write_report(feedback_path, f"HTML validation could not run: {exc}\n")
        raise typer.Exit(code=1) from None

    if not reports:
        text = "No HTML files found to validate"
    else:
        text = render_feedback(reports)
    write_report(feedback_path, text + "\n")
    typer.echo(text)
    if not reports or not all(report.valid for _, report in reports):
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    root: RootOption = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: ConfigOption = None,
) -> None:
    """List available rules with their category and enabled state."""
    output_format = _choice(format, "--format")
    app_config = _load_config_or_raise(root, config_file)
    disabled = set(app_config.rule_disable)
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "category": item.category,
                    "max_points": item.max_points,
                    "enabled": item.rule_id not in disabled,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "disabled" if item.rule_id in disabled else "enabled"
        lines.append(f"- {item.rule_id} ({item.category}) [{status}] - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    root: RootOption = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: ConfigOption = None,
) -> None:
    """Show resolved configuration."""
    output_format = _choice(format, "--format")
    app_config = _load_config_or_raise(root, config_file)
    payload = app_config.to_dict()

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- results_file: {payload['results_file']}",
        f"- reports_dir: {payload['reports_dir']}",
        f"- log_level: {payload['log_level']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- html.validator: {payload['html']['validator']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".site-grader.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _run_category(
    name: str,
    root: Path,
    config_file: Path | None,
    format: str | None,
    log_level: str | None,
) -> None:
    app_config = _load_config_or_raise(root, config_file)
    output_format = _choice(format or app_config.format, "--format")
    _configure_from(app_config, log_level)
    report_path = app_config.reports_path(root) / REPORT_FILENAMES[name]

    try:
        project = ProjectRoot.at(root)
        record = grade_category(name, project, disabled_rule_ids=app_config.rule_disable)
        store = record_category(app_config.results_path(root), name, record)
        write_report(report_path, build_category_report(name, record))
    except Exception as exc:
        logger.exception("Grading failed (category=%s)", name)
        write_report(report_path, build_fallback_report(name, exc))
        raise typer.Exit(code=1) from None

    if output_format == "json":
        typer.echo(render_json(name, record, store))
    else:
        typer.echo(render_human(name, record))

    if not record.passed:
        raise typer.Exit(code=1)


def _load_config_or_raise(root: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(root, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _configure_from(app_config: AppConfig, log_level: str | None) -> None:
    level = (log_level or app_config.log_level).lower()
    if level not in LOG_LEVELS:
        choices = ", ".join(sorted(LOG_LEVELS))
        raise typer.BadParameter(f"log level must be one of: {choices}", param_hint="--log-level")
    configure_logging(level)


def _choice(value: str, param_hint: str) -> str:
    resolved = value.lower()
    if resolved not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint=param_hint)
    return resolved
