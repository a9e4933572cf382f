"""Persisted scoring record shared by category runs.

Each category runs as its own process: it loads the record, replaces its own
category entry and writes the record back. There is no locking, so category
runs must be serialized by the caller; concurrent runs are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from site_grader.scoring import CategoryRecord

logger = logging.getLogger(__name__)

RESULTS_FILENAME = "test-results.json"


@dataclass(frozen=True, slots=True)
class ResultStore:
    """Latest record of every category plus pass totals.

    ``raw`` keeps the entries exactly as they were loaded. Entries that no run
    replaced are written back untouched, so records in another shape survive a
    save by a different category.
    """

    categories: dict[str, CategoryRecord] = field(default_factory=dict)
    total: int = 0
    passed: int = 0
    raw: dict[str, dict[str, Any]] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "categories": {
                name: self.raw[name] if name in self.raw else item.to_dict()
                for name, item in self.categories.items()
            },
        }

    @classmethod
    def from_categories(
        cls,
        categories: dict[str, CategoryRecord],
        raw: dict[str, dict[str, Any]] | None = None,
    ) -> ResultStore:
        return cls(
            categories=categories,
            total=len(categories),
            passed=sum(1 for record in categories.values() if record.passed),
            raw=dict(raw or {}),
        )


def load(path: Path) -> ResultStore:
    """Load the store, falling back to an empty one when it is absent or unusable."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ResultStore()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Results file unreadable, starting empty (path=%s error=%s)", path, exc)
        return ResultStore()

    try:
        loaded = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "Results file is not valid JSON, starting empty (path=%s error=%s)", path, exc
        )
        return ResultStore()

    if not isinstance(loaded, dict):
        logger.warning("Results file is not a JSON object, starting empty (path=%s)", path)
        return ResultStore()

    raw_categories = loaded.get("categories")
    if not isinstance(raw_categories, dict):
        return ResultStore()

    categories: dict[str, CategoryRecord] = {}
    raw: dict[str, dict[str, Any]] = {}
    for name, raw_record in raw_categories.items():
        if not isinstance(raw_record, dict):
            logger.warning("Skipping malformed category record (name=%s)", name)
            continue
        categories[name] = CategoryRecord.from_dict(raw_record)
        raw[name] = raw_record
    return ResultStore.from_categories(categories, raw)


def merge_category(store: ResultStore, name: str, record: CategoryRecord) -> ResultStore:
    """Return a new store with ``name`` replaced and totals recomputed."""
    categories = dict(store.categories)
    categories[name] = record
    raw = {key: value for key, value in store.raw.items() if key != name}
    return ResultStore.from_categories(categories, raw)


def save(store: ResultStore, path: Path) -> None:
    """Write the store through a temporary sibling file and an atomic rename."""
    payload = dumps(store)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as file_obj:
            file_obj.write(payload)
        os.replace(temp_path, path)
    finally:
        temp_path.unlink(missing_ok=True)


def dumps(store: ResultStore) -> str:
    return json.dumps(store.to_dict(), indent=2, ensure_ascii=False) + "\n"


def record_category(path: Path, name: str, record: CategoryRecord) -> ResultStore:
    """Load, merge and save in one step; returns the store that was written."""
    store = merge_category(load(path), name, record)
    save(store, path)
    logger.info(
        "Recorded category (name=%s passed=%s total=%d passed_total=%d)",
        name,
        record.passed,
        store.total,
        store.passed,
    )
    return store
