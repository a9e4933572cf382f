"""Tests for project discovery and reading."""

from __future__ import annotations

import pytest

from site_grader.project import ProjectRoot, SourceReadError
from tests.helpers_project import write_file


def test_discovery_is_sorted_and_skips_hidden_and_vendor_dirs(tmp_path) -> None:
    write_file(tmp_path, "b.html", "")
    write_file(tmp_path, "a.html", "")
    write_file(tmp_path, "pages/c.html", "")
    write_file(tmp_path, ".git/d.html", "")
    write_file(tmp_path, ".hidden.html", "")
    write_file(tmp_path, "node_modules/pkg/e.html", "")
    write_file(tmp_path, "bower_components/f.css", "")

    project = ProjectRoot.at(tmp_path)

    assert [project.relative(path) for path in project.html_files()] == [
        "a.html",
        "b.html",
        "pages/c.html",
    ]
    assert project.css_files() == []


def test_image_discovery_is_case_insensitive(tmp_path) -> None:
    write_file(tmp_path, "images/logo.PNG", b"png")
    write_file(tmp_path, "images/notes.txt", "x")

    project = ProjectRoot.at(tmp_path)

    assert [path.name for path in project.image_files()] == ["logo.PNG"]


def test_read_returns_source_with_relative_path(tmp_path) -> None:
    path = write_file(tmp_path, "css/style.css", "body {}\n")
    project = ProjectRoot.at(tmp_path)

    source = project.read(project.path / "css" / "style.css")

    assert source.relative_path == "css/style.css"
    assert source.name == "style.css"
    assert source.content == path.read_text(encoding="utf-8")


def test_read_rejects_invalid_utf8(tmp_path) -> None:
    write_file(tmp_path, "index.html", b"\xff\xfe\xfa")
    project = ProjectRoot.at(tmp_path)

    with pytest.raises(SourceReadError) as exc_info:
        project.read(project.path / "index.html")

    assert exc_info.value.path.name == "index.html"
