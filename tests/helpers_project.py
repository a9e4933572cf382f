"""Helpers for building small student website projects in tests."""

from __future__ import annotations

from pathlib import Path

from site_grader.project import SourceFile

NAV = """\
  <!-- Navigation menu for every page -->
  <nav class="menu">
    <a href="index.html">Home</a>
    <a href="contact.html">Contact</a>
  </nav>
"""

STYLESHEET = """\
/* Project: Test site | Author: Student | Date: 2024 */

/* === LAYOUT === */
body {
  margin: 0;
  font-family: Arial, sans-serif;
  color: #333333;
}

/* Main container of every page */
.content {
  padding: 10px;
}

/* === NAVIGATION === */
.menu {
  display: flex;
  -webkit-box-sizing: border-box;
}

/* Links inside the menu bar */
.menu a {
  color: rgb(0, 0, 0);
}

/* === FOOTER === */
.footer {
  text-align: center;
}

/* Introduction paragraph styling */
.intro {
  font-size: 18px;
}

/* Responsive layout for small screens */
@media (max-width: 600px) {
  .content {
    padding: 4px;
  }
}
"""


def page(title: str, nav: str = NAV) -> str:
    """Return a well-formed, well-commented HTML page linking css/style.css."""
    return f"""\
<!DOCTYPE html>
<!-- Title: {title} | Author: Student | Date: 2024 -->
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <link rel="stylesheet" href="css/style.css">
</head>
<body>
{nav}  <!-- Main content of the page -->
  <main class="content">
    <p class="intro">Welcome</p>
  </main>
  <!-- Footer with contact details -->
  <footer class="footer">(c) 2024</footer>
  <!-- Closing area of the document -->
</body>
</html>
"""


def write_file(root: Path, rel_path: str, content: str | bytes) -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def build_site(root: Path) -> Path:
    """Create a complete two-page site that passes every category."""
    write_file(root, "index.html", page("Home"))
    write_file(root, "contact.html", page("Contact"))
    write_file(root, "css/style.css", STYLESHEET)
    write_file(root, "images/logo.png", b"\x89PNG\r\n")
    return root


def source(content: str, name: str = "style.css") -> SourceFile:
    return SourceFile(path=Path(name), relative_path=name, content=content)
