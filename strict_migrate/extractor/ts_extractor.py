"""TypeScript import extractor using import-statement matching and path resolution."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from strict_migrate.extractor.base import BaseExtractor

logger = logging.getLogger(__name__)

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)

_SPECIFIER_RES = [
    # import x from '...', import { x } from '...', export * from '...'
    re.compile(r"""\b(?:import|export)\b[^'";]*?\bfrom\s*['"]([^'"]+)['"]"""),
    # import '...'
    re.compile(r"""^\s*import\s*['"]([^'"]+)['"]""", re.MULTILINE),
    # import('...'), require('...')
    re.compile(r"""\b(?:import|require)\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
]

_ASSET_SUFFIXES = (".css", ".scss", ".svg", ".json", ".png")
# .js/.jsx imports are assumed to ship a .d.ts
_SKIP_SUFFIXES = (".js", ".jsx")
_RESOLVE_SUFFIXES = (".ts", ".tsx", ".d.ts")
_INDEX_FILES = ("index.ts", "index.tsx", "index.d.ts")


class TsExtractor(BaseExtractor):
    extensions = (".ts", ".tsx")

    def extract_imports(self, file_path: str) -> set[str]:
        path = Path(file_path)
        source = self._strip_comments(self._read_source(path))

        imports: set[str] = set()
        for specifier in self.find_specifiers(source):
            target = self.resolve(specifier, path)
            if target:
                imports.add(target)

        imports.discard(str(path.resolve()))
        return imports

    def find_specifiers(self, source: str) -> list[str]:
        specifiers: list[str] = []
        for regex in _SPECIFIER_RES:
            for m in regex.finditer(source):
                if m.group(1) not in specifiers:
                    specifiers.append(m.group(1))
        return specifiers

    def resolve(self, specifier: str, importer: Path) -> str | None:
        if specifier.endswith(_ASSET_SUFFIXES) or specifier.endswith(_SKIP_SUFFIXES):
            return None

        if specifier.startswith(("./", "../")) or specifier in (".", ".."):
            base = importer.parent / specifier
        elif "/" in specifier:
            # Non-relative paths are resolved against the source root (baseUrl)
            base = self.source_root / specifier
        else:
            return None  # package import

        # ".", ".." and "dir/" only ever name a directory
        if not (specifier in (".", "..") or specifier.endswith("/")):
            for suffix in _RESOLVE_SUFFIXES:
                candidate = base.with_name(base.name + suffix)
                if candidate.is_file():
                    return str(candidate.resolve())
            if base.is_file():
                return str(base.resolve())
        if base.is_dir():
            for index in _INDEX_FILES:
                candidate = base / index
                if candidate.is_file():
                    logger.warning("Barrel import: %s", self._relative(base.resolve()))
                    return str(candidate.resolve())

        if specifier.startswith("@"):
            logger.debug("Treating %s as a scoped package import", specifier)
        else:
            logger.warning(
                "Unresolved import %s in %s", specifier, self._relative(importer.resolve()),
            )
        return None

    @staticmethod
    def _strip_comments(source: str) -> str:
        return _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", source))
