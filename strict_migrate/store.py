"""Allow-list store: the persisted record of files already migrated."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable

from strict_migrate.models import Language
from strict_migrate.scanner import is_tracked_path

logger = logging.getLogger(__name__)


class AllowListStore:
    """JSON allow-list of checked files.

    Layout::

        {"include": ["pkg/**/*.py"], "exclude": ["./pkg/legacy.py"], "files": ["./pkg/core.py"]}

    Paths and globs are relative to the directory holding the file; sources
    outside it are written as "../" paths. The checked set is include
    matches minus exclude matches plus ``files``.
    """

    def __init__(self, path: Path, languages: list[Language] | None = None):
        self.path = path.resolve()
        self.root = self.path.parent
        self.languages = languages or [Language.PYTHON]

    def load(self) -> set[str]:
        config = self._read()
        checked: set[str] = set()

        for pattern in config["include"]:
            checked.update(self._glob(pattern))
        for pattern in config["exclude"]:
            checked.difference_update(self._glob(pattern))
        for entry in config["files"]:
            path = (self.root / entry).resolve()
            if is_tracked_path(path, self.languages):
                checked.add(str(path))

        return checked

    def add(self, files: Iterable[str]) -> list[str]:
        """Record files as checked. Returns the entries written.

        A file listed in ``exclude`` is un-excluded rather than added to
        ``files``; nothing is ever removed from the checked set.
        """
        files = sorted(set(files))
        if not files:
            return []

        config = self._read()
        exclude: list[str] = list(config["exclude"])
        listed: set[str] = set(config["files"])
        included: set[str] = set()
        for pattern in config["include"]:
            included.update(self._glob(pattern))
        written: list[str] = []

        for file in files:
            entry = self.entry_for(file)
            aliases = (entry, entry[2:]) if entry.startswith("./") else (entry,)
            excluded_as = next((e for e in aliases if e in exclude), None)
            if excluded_as is not None and str(Path(file).resolve()) in included:
                exclude.remove(excluded_as)
            elif entry not in listed:
                listed.add(entry)
            else:
                continue
            written.append(entry)

        config["exclude"] = exclude
        config["files"] = sorted(listed)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
        logger.info("Recorded %d file(s) in %s", len(written), self.path)
        return written

    def entry_for(self, file: str) -> str:
        """Path of ``file`` relative to the store, as written to the allow-list."""
        rel = Path(os.path.relpath(Path(file).resolve(), self.root)).as_posix()
        return rel if rel.startswith("../") else "./" + rel

    def _glob(self, pattern: str) -> set[str]:
        pattern = pattern[2:] if pattern.startswith("./") else pattern
        if not pattern:
            return set()
        return {
            str(p.resolve()) for p in self.root.glob(pattern)
            if p.is_file() and is_tracked_path(p, self.languages)
        }

    def _read(self) -> dict:
        if not self.path.exists():
            return {"include": [], "exclude": [], "files": []}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid allow-list {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid allow-list {self.path}: expected a JSON object")
        for key in ("include", "exclude", "files"):
            data.setdefault(key, [])
        return data
