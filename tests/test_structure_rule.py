"""Tests for the project structure checker."""

from __future__ import annotations

from site_grader.project import ProjectRoot
from site_grader.rules.base import Severity
from site_grader.rules.structure import StructureRule, extract_menu
from tests.helpers_project import build_site, page, write_file

SWAPPED_NAV = """\
  <!-- Navigation menu for every page -->
  <nav class="menu">
    <a href="contact.html">Contact</a>
    <a href="index.html">Home</a>
  </nav>
"""


def test_complete_site_has_no_findings(tmp_path) -> None:
    build_site(tmp_path)

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    # layout 10, naming 4, linking 2 x 5, identical menus 3 + 2
    assert result.score_delta == 29
    assert result.findings == ()


def test_menus_in_different_order_are_an_issue(tmp_path) -> None:
    build_site(tmp_path)
    write_file(tmp_path, "contact.html", page("Contact", nav=SWAPPED_NAV))

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    assert result.score_delta == 26
    issues = [finding.message for finding in result.findings if finding.is_issue]
    assert issues == ["Menus are not identical on every page"]


def test_single_page_gets_menu_credit(tmp_path) -> None:
    write_file(tmp_path, "index.html", page("Home", nav=""))

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    # index.html 3, naming 1.5, one link 2, no inline styles 1, no style block 1, menu 3;
    # the linked stylesheet and css/ folder are missing
    assert result.score_delta == 11.5
    messages = [finding.message for finding in result.findings]
    assert "css/ folder is missing, keep your stylesheets in a css/ folder" in messages
    assert "index.html: linked stylesheet 'css/style.css' does not exist" in messages


def test_page_without_nav_is_reported(tmp_path) -> None:
    build_site(tmp_path)
    write_file(tmp_path, "contact.html", page("Contact", nav=""))

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    messages = [finding.message for finding in result.findings]
    assert "contact.html: no <nav> element found" in messages
    assert "Menus are not identical on every page" not in messages


def test_loose_images_and_bad_names(tmp_path) -> None:
    write_file(tmp_path, "index.html", page("Home"))
    write_file(tmp_path, "About Us.html", page("About"))
    write_file(tmp_path, "css/Site.css", "body {\n  margin: 0;\n}\n")
    write_file(tmp_path, "Photo.JPG", b"jpg")

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    messages = {finding.message: finding.severity for finding in result.findings}
    assert messages["About Us.html: use lowercase file names"] is Severity.ISSUE
    assert messages["About Us.html: no spaces in file names, use hyphens"] is Severity.ISSUE
    assert messages["Site.css: use lowercase file names"] is Severity.ISSUE
    assert messages["Photo.JPG: use lowercase image names"] is Severity.ISSUE
    assert (
        messages["Images found in the project root, move them to an images/ or img/ folder"]
        is Severity.WARNING
    )


def test_inline_styles_and_style_blocks(tmp_path) -> None:
    build_site(tmp_path)
    styled = page("Home").replace(
        "<main class=\"content\">", "<main class=\"content\" style=\"color: red\">"
    )
    styled = styled.replace("</head>", "<style>p { margin: 0; }</style>\n</head>")
    write_file(tmp_path, "index.html", styled)

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    issues = [finding.message for finding in result.findings if finding.is_issue]
    assert "index.html: 1 inline style attributes found, use external CSS" in issues
    assert "index.html: <style> blocks found, use external CSS" in issues


def test_extract_menu_strips_markup() -> None:
    content = '<nav><a href="a.html"><b>A</b></a> <a href="b.html">B </a></nav>'

    assert extract_menu(content) == (("a.html", "A"), ("b.html", "B"))
    assert extract_menu("<p>no menu</p>") is None


def test_page_without_stylesheet_link(tmp_path) -> None:
    build_site(tmp_path)
    unlinked = page("Home").replace('  <link rel="stylesheet" href="css/style.css">\n', "")
    write_file(tmp_path, "index.html", unlinked)

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    # the page loses the +2 link and +1 existing target points
    assert result.score_delta == 29 - 3
    issues = [finding.message for finding in result.findings if finding.is_issue]
    assert issues == ["index.html: no stylesheet linked"]


def test_several_stylesheet_links_get_no_link_points(tmp_path) -> None:
    build_site(tmp_path)
    write_file(tmp_path, "css/extra.css", "p {\n  margin: 0;\n}\n")
    doubled = page("Home").replace(
        "</head>", '  <link rel="stylesheet" href="css/extra.css">\n</head>'
    )
    write_file(tmp_path, "index.html", doubled)

    result = StructureRule().inspect(ProjectRoot.at(tmp_path))

    # -3 for the index links, +1 for naming the extra stylesheet
    assert result.score_delta == 29 - 3 + 1
    assert [(finding.severity, finding.message) for finding in result.findings] == [
        (Severity.WARNING, "index.html: several stylesheets linked, use a single stylesheet")
    ]


def test_single_link_to_existing_stylesheet_scores_three(tmp_path) -> None:
    write_file(tmp_path, "index.html", page("Home", nav=""))
    write_file(tmp_path, "css/style.css", "body {\n  margin: 0;\n}\n")

    linked = StructureRule().inspect(ProjectRoot.at(tmp_path))

    # layout 9, naming 2.5, link 2 + existing target 1, no inline styles 2, menu 3
    assert linked.score_delta == 19.5
    assert linked.findings == ()

    (tmp_path / "css" / "style.css").rename(tmp_path / "css" / "main.css")
    broken = StructureRule().inspect(ProjectRoot.at(tmp_path))

    assert broken.score_delta == 18.5
    assert [finding.message for finding in broken.findings] == [
        "index.html: linked stylesheet 'css/style.css' does not exist"
    ]


def test_extract_menu_reads_first_href_attribute() -> None:
    content = '<nav><a data-href="x.html" href="y.html">Y</a></nav>'

    assert extract_menu(content) == (("x.html", "Y"),)
