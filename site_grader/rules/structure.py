"""Project layout, naming, stylesheet linking and menu consistency rule."""

from __future__ import annotations

import re
from pathlib import Path

from site_grader.project import IMAGE_RE, ProjectRoot, SourceFile, SourceReadError
from site_grader.rules.base import RuleBuilder, RuleResult

STYLESHEET_DIR = "css"
IMAGE_DIRS = ("images", "img")
RECOGNIZED_STYLESHEET_RE = re.compile(r"^(?:style|styles|main|index)\.css$", re.IGNORECASE)
HTML_NAME_RE = re.compile(r"^[a-z0-9\-]+\.html$")

STYLESHEET_LINK_RE = re.compile(r"<link[^>]*rel=[\"']stylesheet[\"'][^>]*>", re.IGNORECASE)
HREF_RE = re.compile(r"href=[\"']([^\"']+)[\"']", re.IGNORECASE)
INLINE_STYLE_RE = re.compile(r"style=[\"'][^\"']*[\"']", re.IGNORECASE)
STYLE_BLOCK_RE = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
NAV_RE = re.compile(r"<nav[^>]*>([\s\S]*?)</nav>", re.IGNORECASE)
ANCHOR_RE = re.compile(r"<a[^>]*?href=[\"']([^\"']+)[\"'][^>]*>([\s\S]*?)</a>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]*>")

MenuItems = tuple[tuple[str, str], ...]


class StructureRule:
    """Checks folder layout, file naming, stylesheet links and shared menus."""

    rule_id = "structure"
    max_points = 20

    def inspect(self, project: ProjectRoot) -> RuleResult:
        rule = RuleBuilder(self.rule_id)
        pages = self._read_pages(project, rule)

        self._check_layout(project, rule)
        self._check_naming(project, rule)
        for page in pages:
            self._check_linking(page, rule)
        self._check_menus(pages, rule)
        return rule.result()

    def _read_pages(self, project: ProjectRoot, rule: RuleBuilder) -> list[SourceFile]:
        pages: list[SourceFile] = []
        for path in project.html_files():
            try:
                pages.append(project.read(path))
            except SourceReadError as exc:
                rule.issue(f"{project.relative(path)}: could not read file ({exc.reason})")
        return pages

    def _check_layout(self, project: ProjectRoot, rule: RuleBuilder) -> None:
        if (project.path / "index.html").is_file():
            rule.award(3)
        else:
            rule.issue("index.html is missing from the project root")

        css_dir = project.path / STYLESHEET_DIR
        if css_dir.is_dir():
            rule.award(2)
            stylesheets = sorted(
                item.name for item in css_dir.iterdir() if item.is_file() and item.suffix == ".css"
            )
            if stylesheets:
                rule.award(3)
                if any(RECOGNIZED_STYLESHEET_RE.match(name) for name in stylesheets):
                    rule.award(1)
                else:
                    rule.warning(
                        "Consider a conventional stylesheet name (style.css, styles.css, main.css)"
                    )
            else:
                rule.issue("No stylesheets found in the css/ folder")
        else:
            rule.issue("css/ folder is missing, keep your stylesheets in a css/ folder")

        if any((project.path / name).exists() for name in IMAGE_DIRS):
            rule.award(1)
        else:
            loose_images = [
                item
                for item in project.path.iterdir()
                if item.is_file() and IMAGE_RE.search(item.name)
            ]
            if loose_images:
                rule.warning(
                    "Images found in the project root, move them to an images/ or img/ folder"
                )

    def _check_naming(self, project: ProjectRoot, rule: RuleBuilder) -> None:
        for path in project.html_files():
            name = path.name
            if name == name.lower():
                rule.award(0.5)
            else:
                rule.issue(f"{name}: use lowercase file names")
            if " " in name:
                rule.issue(f"{name}: no spaces in file names, use hyphens")
            else:
                rule.award(0.5)
            if HTML_NAME_RE.match(name):
                rule.award(0.5)

        for path in project.css_files():
            name = path.name
            if name == name.lower():
                rule.award(0.5)
            else:
                rule.issue(f"{name}: use lowercase file names")
            if " " in name:
                rule.issue(f"{name}: no spaces in file names")
            else:
                rule.award(0.5)

        for path in project.image_files():
            name = path.name
            if name != name.lower():
                rule.issue(f"{name}: use lowercase image names")
            if " " in name:
                rule.issue(f"{name}: no spaces in image names")

    def _check_linking(self, page: SourceFile, rule: RuleBuilder) -> None:
        name = page.relative_path
        links = STYLESHEET_LINK_RE.findall(page.content)
        if not links:
            rule.issue(f"{name}: no stylesheet linked")
        elif len(links) == 1:
            rule.award(2)
            href = HREF_RE.search(links[0])
            if href is not None:
                target = href.group(1)
                if _resolve_link(page.path, target).exists():
                    rule.award(1)
                else:
                    rule.issue(f"{name}: linked stylesheet '{target}' does not exist")
        else:
            rule.warning(f"{name}: several stylesheets linked, use a single stylesheet")

        inline_styles = len(INLINE_STYLE_RE.findall(page.content))
        if inline_styles:
            rule.issue(f"{name}: {inline_styles} inline style attributes found, use external CSS")
        else:
            rule.award(1)

        if STYLE_BLOCK_RE.search(page.content):
            rule.issue(f"{name}: <style> blocks found, use external CSS")
        else:
            rule.award(1)

    def _check_menus(self, pages: list[SourceFile], rule: RuleBuilder) -> None:
        if len(pages) == 1:
            rule.award(3)
            return
        if not pages:
            return

        menus: list[tuple[str, MenuItems]] = []
        for page in pages:
            items = extract_menu(page.content)
            if items is None:
                rule.issue(f"{page.relative_path}: no <nav> element found")
                continue
            menus.append((page.relative_path, items))

        if len(menus) > 1:
            first = menus[0][1]
            if all(items == first for _name, items in menus):
                rule.award(3)
            else:
                rule.issue("Menus are not identical on every page")

        for _name, items in menus:
            if items:
                rule.award(1)


def extract_menu(content: str) -> MenuItems | None:
    """Return the ordered ``(href, text)`` pairs of the first ``<nav>`` block."""
    nav = NAV_RE.search(content)
    if nav is None:
        return None
    return tuple(
        (href, TAG_RE.sub("", text).strip()) for href, text in ANCHOR_RE.findall(nav.group(1))
    )


def _resolve_link(page_path: Path, href: str) -> Path:
    return (page_path.parent / href).resolve()
