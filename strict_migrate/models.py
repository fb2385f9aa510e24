"""Data models for the strict-migrate pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator


class Language(enum.Enum):
    PYTHON = "python"
    TYPESCRIPT = "typescript"


class DriverState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    TESTING = "testing"
    COMMITTING = "committing"
    DONE = "done"


class CheckedSet:
    """Append-only set of migrated files."""

    def __init__(self, files: Iterable[str] = ()):
        self._files: set[str] = set(files)

    def __contains__(self, file: object) -> bool:
        return file in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._files))

    def __len__(self) -> int:
        return len(self._files)

    def add_all(self, files: Iterable[str]) -> list[str]:
        """Add files, returning the ones that were not already present."""
        added = sorted(set(files) - self._files)
        self._files.update(added)
        return added


@dataclass
class CheckResult:
    """Outcome of one oracle call."""
    file: str
    error_count: int

    @property
    def passed(self) -> bool:
        return self.error_count == 0


@dataclass
class PassReport:
    """What happened during one Scanning -> Testing -> Committing pass."""
    number: int
    eligible_components: int = 0
    tested: list[CheckResult] = field(default_factory=list)
    committed: list[str] = field(default_factory=list)
    failures: dict[str, int] = field(default_factory=dict)  # file -> error count


@dataclass
class MigrationResult:
    """Result of a full driver run."""
    passes: list[PassReport] = field(default_factory=list)
    committed: list[str] = field(default_factory=list)
    failures: dict[str, int] = field(default_factory=dict)  # latest failing files
    state: DriverState = DriverState.IDLE
    cancelled: bool = False


@dataclass
class MigrationConfig:
    """Configuration for a migration run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    allowlist_path: Path | None = None
    languages: list[Language] = field(default_factory=lambda: [Language.PYTHON])
    max_workers: int = 4
    skip_dirs: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", ".mypy_cache",
        "build", "dist", ".venv", "venv", "env",
        ".eggs", "*.egg-info", ".tox",
    ])

    @property
    def resolved_allowlist(self) -> Path:
        if self.allowlist_path is not None:
            return self.allowlist_path
        return self.source_dir / "strict-files.json"
