"""Abstract base import extractor."""

from __future__ import annotations

import abc
from pathlib import Path


class BaseExtractor(abc.ABC):
    """Base class for language-specific import extraction.

    Implementations return the tracked files a source file imports, as
    canonical absolute paths. They never raise for a single bad import;
    unresolvable references are logged and skipped.
    """

    extensions: tuple[str, ...]

    def __init__(self, source_root: Path):
        self.source_root = source_root.resolve()

    @abc.abstractmethod
    def extract_imports(self, file_path: str) -> set[str]:
        """Return the set of files imported by file_path."""

    def handles(self, file_path: str) -> bool:
        return file_path.endswith(self.extensions)

    def _read_source(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")

    def _relative(self, path: Path | str) -> str:
        try:
            return str(Path(path).relative_to(self.source_root))
        except ValueError:
            return str(path)
