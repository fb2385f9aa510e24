"""Abstract base scanner."""

from __future__ import annotations

import abc
import fnmatch
from pathlib import Path

from strict_migrate.models import Language


class BaseScanner(abc.ABC):
    """Base class for language-specific file discovery."""

    language: Language
    extensions: tuple[str, ...]

    def __init__(self, skip_dirs: list[str] | None = None):
        self.skip_dirs = skip_dirs or [
            "node_modules", ".git", "__pycache__", ".mypy_cache",
            "build", "dist", ".venv", "venv", "env",
        ]

    @abc.abstractmethod
    def consider_file(self, path: Path) -> bool:
        """Whether a file with a matching extension should be tracked."""

    def scan_directory(self, directory: Path) -> list[str]:
        """Recursively collect tracked files as canonical absolute paths."""
        root = directory.resolve()
        files: list[str] = []
        for path in sorted(root.rglob("*")):
            if path.is_dir():
                continue
            if self._should_skip(path.relative_to(root)):
                continue
            if self.accepts(path):
                files.append(str(path))
        return files

    def accepts(self, path: Path) -> bool:
        return path.name.endswith(self.extensions) and self.consider_file(path)

    def _should_skip(self, path: Path) -> bool:
        for part in path.parts[:-1]:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
