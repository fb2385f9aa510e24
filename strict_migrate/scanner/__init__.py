"""Scanner registry and dispatcher."""

from __future__ import annotations

from pathlib import Path

from strict_migrate.models import Language
from strict_migrate.scanner.base import BaseScanner
from strict_migrate.scanner.python_scanner import PythonScanner
from strict_migrate.scanner.ts_scanner import TsScanner

_SCANNERS: dict[Language, type[BaseScanner]] = {
    Language.PYTHON: PythonScanner,
    Language.TYPESCRIPT: TsScanner,
}


def get_scanners(
    languages: list[Language],
    skip_dirs: list[str] | None = None,
) -> list[BaseScanner]:
    return [_SCANNERS[lang](skip_dirs=skip_dirs) for lang in languages]


def discover_files(
    directory: Path,
    languages: list[Language],
    skip_dirs: list[str] | None = None,
) -> list[str]:
    """Collect every tracked source file under a directory, sorted."""
    files: set[str] = set()
    for scanner in get_scanners(languages, skip_dirs):
        files.update(scanner.scan_directory(directory))
    return sorted(files)


def is_tracked_path(path: Path, languages: list[Language]) -> bool:
    """Whether a path looks like a source file of one of the languages."""
    return any(scanner.accepts(path) for scanner in get_scanners(languages))


__all__ = [
    "BaseScanner",
    "PythonScanner",
    "TsScanner",
    "discover_files",
    "get_scanners",
    "is_tracked_path",
]
