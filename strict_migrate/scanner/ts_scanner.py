"""TypeScript source discovery."""

from __future__ import annotations

from pathlib import Path

from strict_migrate.models import Language
from strict_migrate.scanner.base import BaseScanner


class TsScanner(BaseScanner):
    language = Language.TYPESCRIPT
    extensions = (".ts", ".tsx")

    def consider_file(self, path: Path) -> bool:
        # Storybook stories are never compiled with the app
        if path.name.endswith(".stories.tsx"):
            return False
        return "node_modules" not in path.parts
