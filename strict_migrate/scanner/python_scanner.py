"""Python source discovery."""

from __future__ import annotations

from pathlib import Path

from strict_migrate.models import Language
from strict_migrate.scanner.base import BaseScanner


class PythonScanner(BaseScanner):
    language = Language.PYTHON
    extensions = (".py",)

    def consider_file(self, path: Path) -> bool:
        return True
