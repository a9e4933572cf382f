"""Markdown reports rendered from scoring records.

Everything here is a projection of ``CategoryRecord``/``ResultStore`` data and
carries no scoring logic. The only non-determinism in the package lives in
``build_feedback``, which picks an encouragement with the ``random.Random``
instance it is given.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from site_grader.output import finding_line, format_points
from site_grader.scoring import CategoryRecord, percentage_of
from site_grader.store import ResultStore

logger = logging.getLogger(__name__)

REPORT_FILENAMES = {
    "html": "html-report.md",
    "css": "css-validation-report.md",
    "structure": "structure-report.md",
    "comments": "comment-feedback.md",
}
FEEDBACK_FILENAME = "FEEDBACK.md"
QUICK_FEEDBACK_FILENAME = "QUICK_FEEDBACK.md"
VALIDATOR_FEEDBACK_FILENAME = "feedback.txt"

ENCOURAGEMENTS = (
    "Every mistake is a chance to learn and grow!",
    "You are on the right track, keep practising and improving!",
    "Focus on one improvement at a time, that works best.",
    "Great that you actively follow up on feedback!",
    "Every small step forward counts, you are doing well!",
    "You are showing real progress, keep it up!",
    "Making mistakes teaches you faster than getting everything right at once.",
    "Perfection is a journey, not a destination.",
)

TIPS_OF_THE_DAY = (
    "Discuss blockers with your project partner, two know more than one.",
    "Have another look at the examples from class.",
    "Use the browser developer tools to track down CSS problems.",
    "Plan small daily improvements instead of everything at once.",
    "Ask questions in class, others often have the same ones.",
    "Test your website in different browsers.",
    "Check how your site looks on a phone.",
    "Looking for inspiration? Study other websites and analyse how they are built.",
)

CATEGORY_TIPS = {
    "html": {
        "warning": (
            "Check that every tag is closed correctly",
            "Make sure DOCTYPE, html, head and body appear in the right order",
            "Use semantic HTML5 elements where possible",
        ),
        "critical": (
            "Start from a correct HTML5 skeleton (DOCTYPE, html, head, body)",
            "Every opening tag needs a closing tag",
            "Validate your HTML at https://validator.w3.org",
            "Do not use style attributes in HTML tags",
        ),
    },
    "css": {
        "warning": (
            "Check that the stylesheet is linked correctly",
            "Avoid !important unless really necessary",
            "Use consistent naming conventions",
        ),
        "critical": (
            "Link your stylesheet with <link rel='stylesheet' href='css/style.css'>",
            "Only use external CSS (no inline styles)",
            "Check that your CSS changes are visible in the browser",
            "Use class selectors instead of ids for styling",
        ),
    },
    "structure": {
        "warning": (
            "Check file names (lowercase, no spaces)",
            "Keep a logical folder structure",
            "Put all images in an images/ folder",
        ),
        "critical": (
            "Create a clear folder structure (css/, images/)",
            "Use lowercase file names with hyphens",
            "index.html must be in the project root",
            "Every file must be reachable from the pages that use it",
        ),
    },
}

ACTION_STEPS = {
    "html": (
        "Open your HTML files and check the basic structure",
        "Validate at https://validator.w3.org/",
        "Fix one error at a time and test in between",
    ),
    "css": (
        "Check that your stylesheet is linked correctly",
        "Test styling changes directly in the browser",
        "Use the browser developer tools (F12) to find problems",
    ),
    "structure": (
        "Move files into css/ and images/ folders",
        "Rename files to lowercase names without spaces",
        "Make every page link the same stylesheet and menu",
    ),
    "comments": (
        "Add a header comment to every file",
        "Describe what each important section does",
        "Explain tricky CSS in your own words",
    ),
}

NEXT_CHALLENGES = (
    "Experiment with new CSS properties",
    "Add interactivity with CSS :hover effects",
    "Make your website responsive for phones",
    "Try CSS Flexbox or Grid for layout",
)

TEAMWORK_SECTION = """\
## Teamwork

**For you and your project partner:**
- Discuss which parts you find hardest
- Share the work fairly, everyone does both HTML and CSS
- Review each other's code and give constructive feedback
- Use Git to collaborate and commit often with clear messages
- Plan short regular check-ins to discuss progress

**Git tips:**
- `git add .` then `git commit -m "Descriptive message"` then `git push`
- Commit small changes often instead of large changes rarely
- Write clear commit messages such as "Fix navigation styling" or "Add contact page"
"""

RESOURCES_SECTION = """\
## Resources

**Validation & testing:**
- [HTML Validator](https://validator.w3.org/)
- [CSS Validator](https://jigsaw.w3.org/css-validator/)
- [Can I Use](https://caniuse.com/)

**Learning & inspiration:**
- [MDN Web Docs](https://developer.mozilla.org/)
- [W3Schools](https://www.w3schools.com/)
- [CSS-Tricks](https://css-tricks.com/)
"""

FALLBACK_FEEDBACK = """\
# Technical error in the feedback system

A technical error occurred while generating your feedback.
This does not mean something is wrong with your code!

## What to do now
1. Try pushing to GitHub again
2. Check that all files were uploaded correctly
3. Ask your instructor for help if the problem persists

## Manual checklist
- HTML files have a correct DOCTYPE and structure
- The stylesheet is linked and works
- Code is neatly indented
- Comments have been added
- The menu works on every page
"""


@dataclass(frozen=True, slots=True)
class Progress:
    """Points earned across every recorded category."""

    earned: float
    possible: float
    percentage: int


def calculate_progress(store: ResultStore) -> Progress:
    earned: float = sum(record.score for record in store.categories.values())
    possible: float = sum(record.max_score for record in store.categories.values())
    return Progress(earned=earned, possible=possible, percentage=percentage_of(earned, possible))


def progress_bar(percentage: int) -> str:
    filled = max(0, min(10, percentage // 10))
    return "█" * filled + "░" * (10 - filled) + f" {percentage}%"


def motivational_header(percentage: int) -> tuple[str, str]:
    if percentage >= 90:
        return (
            "EXCELLENT WORK!",
            "You master the basics of HTML/CSS very well. You are ready for the next challenge!",
        )
    if percentage >= 75:
        return (
            "VERY WELL DONE!",
            "You are well on your way! A few small improvements and you are there.",
        )
    if percentage >= 50:
        return (
            "NICE PROGRESS!",
            "You have the basics down. Now focus on the improvement points below.",
        )
    return (
        "GOOD START!",
        "Rome was not built in a day. Work through the feedback below step by step.",
    )


def build_category_report(name: str, record: CategoryRecord) -> str:
    """Render the detailed Markdown report of one category."""
    status = "PASSED" if record.passed else "NEEDS IMPROVEMENT"
    lines: list[str] = [
        f"# {name.upper()} Report",
        "",
        f"**Score:** {_points(record.score, record.max_score)} ({record.percentage}%)",
        f"**Status:** {status}",
        f"**Files checked:** {len(record.file_scores)}",
        "",
    ]

    if name == "comments" and record.file_scores:
        for label, suffix in (("HTML", ".html"), ("CSS", ".css")):
            selected = [item for item in record.file_scores if item.file.endswith(suffix)]
            score = sum(item.score for item in selected)
            max_score = sum(item.max_score for item in selected)
            lines.append(f"**{label} comments:** {_points(score, max_score)}")
        lines.append("")

    if record.file_scores:
        lines.append("## Per file")
        lines.append("")
        for file_score in record.file_scores:
            lines.append(f"### {file_score.file}")
            lines.append(f"- Score: {_points(file_score.score, file_score.max_score)}")
            lines.append(f"- Status: {'Good' if file_score.passed else 'Needs attention'}")
            if file_score.complexity is not None:
                lines.append(f"- Complexity: {file_score.complexity}")
            for finding in file_score.findings:
                lines.append(f"  - {finding_line(finding)}")
            lines.append("")

    issues = record.issues
    if issues:
        lines.append("## Action points")
        lines.extend(f"- {item.message}" for item in issues[:10])
        lines.append("")

    warnings = record.warnings
    if warnings:
        lines.append("## Suggestions")
        lines.extend(f"- {item.message}" for item in warnings[:10])
        lines.append("")

    if name == "comments":
        lines.extend(
            [
                "## Tips for good comments",
                "- Explain complex code in your own words",
                "- Use section comments for overview",
                "- Write comments as if explaining to a classmate",
                "- Update comments when you change code",
                "",
            ]
        )
    return "\n".join(lines)


def build_fallback_report(name: str, error: BaseException) -> str:
    return "\n".join(
        [
            f"# {name.upper()} Report",
            "",
            "The grader hit an internal error and could not score this category.",
            "This does not mean something is wrong with your code.",
            "",
            f"Error: `{error.__class__.__name__}: {error}`",
            "",
        ]
    )


def build_category_feedback(name: str, record: CategoryRecord) -> str:
    lines = [f"### {name.upper()}"]
    score = _points(record.score, record.max_score)
    if name == "comments":
        if record.percentage >= 80:
            lines.append("**Excellent!** Your comments are clear and helpful.")
        elif record.percentage >= 60:
            lines.append("**Good job!** Your comments could be a bit more thorough.")
            lines.append("**Tips:**")
            lines.append("   - Explain more complex CSS selectors")
            lines.append("   - Add section comments to your HTML")
            lines.append("   - Describe what code does, not only what it is")
        else:
            lines.append("**Attention:** more and better comments are needed.")
            lines.append("**Essential improvements:**")
            lines.append("   - Add a header comment with project info")
            lines.append("   - At least 5 meaningful HTML comments per page")
            lines.append("   - At least 8 CSS comments with section dividers")
    elif record.passed or record.percentage >= 80:
        lines.append(f"**Great!** {name} checks passed! ({score})")
    elif record.percentage >= 60:
        lines.append(f"**Almost there!** {score} points.")
        lines.extend(_tips(name, "warning"))
    else:
        lines.append(f"**Needs attention:** {score} points.")
        lines.extend(_tips(name, "critical"))

    if record.issues:
        lines.append("")
        lines.append("**Specific points of attention:**")
        lines.extend(f"   - {item.message}" for item in record.issues)
    return "\n".join(lines)


def build_action_plan(store: ResultStore) -> str:
    lines = ["## Your action plan for the next session", "*Work through these one by one:*", ""]
    ranked = sorted(store.categories.items(), key=lambda item: item[1].percentage)
    priority = 1
    for name, record in ranked[:3]:
        if record.passed:
            continue
        lines.append(f"**{priority}. Improve {name.upper()}**")
        lines.extend(f"   - {step}" for step in ACTION_STEPS.get(name, ()))
        lines.append("")
        priority += 1

    if priority == 1:
        lines.append("**You are ready for the next challenge!**")
        lines.extend(f"   - {step}" for step in NEXT_CHALLENGES)
    return "\n".join(lines)


def build_feedback(
    store: ResultStore,
    *,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> str:
    """Render the combined ``FEEDBACK.md`` document."""
    rng = rng or random.Random()
    now = now or datetime.now()
    progress = calculate_progress(store)
    title, message = motivational_header(progress.percentage)

    lines: list[str] = [
        f"# {title}",
        "",
        f"**{message}**",
        "",
        "## Your progress",
        progress_bar(progress.percentage),
        f"**Score: {_points(progress.earned, progress.possible)} points**",
        "",
        "## Overview",
        f"**{store.passed}/{store.total}** categories completed",
    ]
    if store.total and store.passed == store.total:
        lines.append("**CONGRATULATIONS!** All checks passed!")
    else:
        lines.append(f"**{store.total - store.passed}** categories still need attention")
    lines.append("")

    lines.append("## Detailed feedback")
    lines.append("")
    for name, record in store.categories.items():
        lines.append(build_category_feedback(name, record))
        lines.append("")

    lines.append(build_action_plan(store))
    lines.append("")
    lines.append(TEAMWORK_SECTION)
    lines.append(RESOURCES_SECTION)
    lines.extend(
        [
            "---",
            "",
            "## Personal message",
            "",
            _personal_message(progress.percentage),
            "",
            rng.choice(ENCOURAGEMENTS),
            "",
            f"**Tip of the day:** {rng.choice(TIPS_OF_THE_DAY)}",
            "",
            "---",
            f"*This report was generated automatically on {now:%A %d %B %Y %H:%M}*",
            "",
        ]
    )
    return "\n".join(lines)


def build_quick_feedback(store: ResultStore) -> str:
    """Render the short ``QUICK_FEEDBACK.md`` summary."""
    progress = calculate_progress(store)
    _title, message = motivational_header(progress.percentage)
    plan = build_action_plan(store).split("\n")[2:8]
    return "\n".join(
        [
            f"# Quick feedback - {progress.percentage}%",
            "",
            message,
            "",
            "**Top 3 action points:**",
            *plan,
            "",
            ENCOURAGEMENTS[0],
            "",
        ]
    )


def write_report(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote report (path=%s)", path)
    return path


def _personal_message(percentage: int) -> str:
    if percentage >= 80:
        return "You show that you really understand the basics, a strong foundation to build on!"
    if percentage >= 60:
        return "You are doing well and making clear progress. This feedback gets you over the line!"
    return (
        "Every expert was once a beginner. "
        "You are learning, and that is exactly where you should be!"
    )


def _tips(name: str, level: str) -> list[str]:
    tips = CATEGORY_TIPS.get(name, {}).get(level)
    if not tips:
        return []
    return ["", "**Improvement points:**", *(f"   - {tip}" for tip in tips)]


def _points(score: float, max_score: float) -> str:
    return f"{format_points(score)}/{format_points(max_score)}"
