"""Category drivers: discover inputs, run rules and aggregate."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from site_grader.project import ProjectRoot, SourceFile, SourceReadError
from site_grader.rules import select_rules
from site_grader.rules.base import RuleBuilder, RuleResult
from site_grader.rules.css_metrics import analyze_complexity
from site_grader.scoring import CategoryRecord, FileScore, aggregate, aggregate_category

logger = logging.getLogger(__name__)

HTML_FILE_CAP = 4
CSS_FILE_CAP = 12
CSS_CATEGORY_MAX = 25
STRUCTURE_MAX = 20
HTML_COMMENT_CAP = 7
CSS_COMMENT_CAP = 8

ALL_PASSED_BONUS = 3
SINGLE_STYLESHEET_BONUS = 2


def grade_html(
    project: ProjectRoot, *, disabled_rule_ids: list[str] | None = None
) -> CategoryRecord:
    """Grade the document skeleton of every HTML page."""
    rules = select_rules("html", "html", disabled_rule_ids=disabled_rule_ids)
    paths = project.html_files()
    if not paths:
        return _missing_input("html", "No HTML files found in the project", HTML_FILE_CAP)

    file_scores = _score_files(project, paths, rules, HTML_FILE_CAP)
    return aggregate_category(file_scores, HTML_FILE_CAP * len(paths))


def grade_css(
    project: ProjectRoot, *, disabled_rule_ids: list[str] | None = None
) -> CategoryRecord:
    """Grade every stylesheet, then add the category-wide bonuses."""
    paths = project.css_files()
    if not paths:
        return _missing_input("css", "No stylesheet found in the project", CSS_CATEGORY_MAX)

    rules = select_rules("css", "css", disabled_rule_ids=disabled_rule_ids)
    file_scores = _score_files(project, paths, rules, CSS_FILE_CAP, complexity=_complexity_label)

    bonuses: list[RuleResult] = []
    pages = _read_quietly(project, project.html_files())
    for rule in select_rules("css", "pages", disabled_rule_ids=disabled_rule_ids):
        bonuses.append(rule.inspect_pages(pages))

    stylesheet_bonus = RuleBuilder("css_category")
    if all(item.passed for item in file_scores):
        stylesheet_bonus.award(ALL_PASSED_BONUS)
    if len(paths) == 1:
        stylesheet_bonus.award(SINGLE_STYLESHEET_BONUS)
    else:
        stylesheet_bonus.warning(
            f"Several stylesheets found ({len(paths)}), use a single stylesheet"
        )
    bonuses.append(stylesheet_bonus.result())

    return aggregate_category(file_scores, CSS_CATEGORY_MAX, bonuses)


def grade_structure(
    project: ProjectRoot, *, disabled_rule_ids: list[str] | None = None
) -> CategoryRecord:
    """Grade the project layout as a whole."""
    results = [
        rule.inspect(project)
        for rule in select_rules("structure", "project", disabled_rule_ids=disabled_rule_ids)
    ]
    return aggregate_category((), STRUCTURE_MAX, results)


def grade_comments(
    project: ProjectRoot, *, disabled_rule_ids: list[str] | None = None
) -> CategoryRecord:
    """Grade comment quality of HTML pages and stylesheets together."""
    html_paths = project.html_files()
    css_paths = project.css_files()
    if not html_paths and not css_paths:
        return _missing_input(
            "comments",
            "No HTML or CSS files found to check for comments",
            HTML_COMMENT_CAP + CSS_COMMENT_CAP,
        )

    html_rules = select_rules("comments", "html", disabled_rule_ids=disabled_rule_ids)
    css_rules = select_rules("comments", "css", disabled_rule_ids=disabled_rule_ids)
    html_scores = _score_files(project, html_paths, html_rules, HTML_COMMENT_CAP)
    css_scores = _score_files(project, css_paths, css_rules, CSS_COMMENT_CAP)
    max_score = HTML_COMMENT_CAP * len(html_paths) + CSS_COMMENT_CAP * len(css_paths)
    return aggregate_category([*html_scores, *css_scores], max_score)


GRADERS: dict[str, Callable[..., CategoryRecord]] = {
    "html": grade_html,
    "css": grade_css,
    "structure": grade_structure,
    "comments": grade_comments,
}


def grade_category(
    name: str, project: ProjectRoot, *, disabled_rule_ids: list[str] | None = None
) -> CategoryRecord:
    grader = GRADERS.get(name)
    if grader is None:
        choices = ", ".join(GRADERS)
        raise ValueError(f"Unknown category '{name}'. Expected one of: {choices}")
    logger.info("Grading category (name=%s root=%s)", name, project.path)
    record = grader(project, disabled_rule_ids=disabled_rule_ids)
    logger.info(
        "Category graded (name=%s score=%s max=%s percentage=%d passed=%s)",
        name,
        record.score,
        record.max_score,
        record.percentage,
        record.passed,
    )
    return record


def _score_files(
    project: ProjectRoot,
    paths: list[Path],
    rules: list[Any],
    cap: float,
    *,
    complexity: Callable[[SourceFile], str] | None = None,
) -> list[FileScore]:
    file_scores: list[FileScore] = []
    for path in paths:
        relative = project.relative(path)
        try:
            source = project.read(path)
        except SourceReadError as exc:
            unreadable = RuleBuilder("read_error")
            unreadable.issue(f"{relative}: could not read file ({exc.reason})")
            file_scores.append(aggregate([unreadable.result()], cap, relative))
            continue

        results = [rule.inspect(source) for rule in rules]
        label = complexity(source) if complexity is not None else None
        file_score = aggregate(results, cap, relative, complexity=label)
        logger.debug("Scored file (path=%s score=%s max=%s)", relative, file_score.score, cap)
        file_scores.append(file_score)
    return file_scores


def _read_quietly(project: ProjectRoot, paths: list[Path]) -> list[SourceFile]:
    sources: list[SourceFile] = []
    for path in paths:
        try:
            sources.append(project.read(path))
        except SourceReadError:
            # already logged by ProjectRoot.read
            continue
    return sources


def _complexity_label(source: SourceFile) -> str:
    metrics = analyze_complexity(source.content)
    logger.debug(
        "Stylesheet metrics (path=%s rules=%d declarations=%d lines=%d)",
        source.relative_path,
        metrics.rules,
        metrics.declarations,
        metrics.lines,
    )
    return metrics.label


def _missing_input(category: str, message: str, max_score: float) -> CategoryRecord:
    logger.warning("Missing input (category=%s)", category)
    rule = RuleBuilder(f"{category}_input")
    rule.issue(message)
    return aggregate_category((), max_score, [rule.result()])
