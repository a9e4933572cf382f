"""Project root handling and source discovery."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SKIPPED_DIRS = frozenset({"node_modules", "bower_components", "jspm_packages"})
IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|svg|webp)$", re.IGNORECASE)


class SourceReadError(RuntimeError):
    """Raised when a project file cannot be read as UTF-8 text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"could not read {path.name}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A project file and its raw text content."""

    path: Path
    relative_path: str
    content: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class ProjectRoot:
    """Explicit root directory of a student project."""

    path: Path

    @classmethod
    def at(cls, path: Path | str) -> ProjectRoot:
        return cls(Path(path).resolve())

    def relative(self, file_path: Path) -> str:
        try:
            return file_path.relative_to(self.path).as_posix()
        except ValueError:
            return file_path.as_posix()

    def html_files(self) -> list[Path]:
        return self.find_files(lambda name: name.endswith(".html"))

    def css_files(self) -> list[Path]:
        return self.find_files(lambda name: name.endswith(".css"))

    def image_files(self) -> list[Path]:
        return self.find_files(lambda name: IMAGE_RE.search(name) is not None)

    def find_files(self, accept: Callable[[str], bool]) -> list[Path]:
        """Walk the project and return files whose name satisfies ``accept``.

        Dot entries and dependency-manager directories are skipped. Results are
        sorted so every run sees the same order.
        """
        found: list[Path] = []
        for current, dirnames, filenames in os.walk(self.path):
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith(".") and name not in SKIPPED_DIRS
            )
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                if accept(filename):
                    found.append(Path(current) / filename)
        return found

    def read(self, file_path: Path) -> SourceFile:
        """Read one project file, raising ``SourceReadError`` on failure."""
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed reading file (path=%s error=%s)", file_path, exc)
            raise SourceReadError(file_path, str(exc)) from exc
        return SourceFile(path=file_path, relative_path=self.relative(file_path), content=content)
