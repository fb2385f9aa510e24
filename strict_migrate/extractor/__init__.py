"""Extractor registry."""

from __future__ import annotations

import logging
from pathlib import Path

from strict_migrate.models import Language
from strict_migrate.extractor.base import BaseExtractor
from strict_migrate.extractor.python_extractor import PythonExtractor
from strict_migrate.extractor.ts_extractor import TsExtractor

logger = logging.getLogger(__name__)

_EXTRACTORS: dict[Language, type[BaseExtractor]] = {
    Language.PYTHON: PythonExtractor,
    Language.TYPESCRIPT: TsExtractor,
}


class ImportExtractor:
    """Dispatch import extraction to the extractor for each file's language."""

    def __init__(self, source_root: Path, languages: list[Language]):
        self.extractors = [_EXTRACTORS[lang](source_root) for lang in languages]

    def __call__(self, file_path: str) -> set[str]:
        for extractor in self.extractors:
            if extractor.handles(file_path):
                return extractor.extract_imports(file_path)
        logger.debug("No extractor for %s", file_path)
        return set()


__all__ = [
    "BaseExtractor",
    "ImportExtractor",
    "PythonExtractor",
    "TsExtractor",
]
