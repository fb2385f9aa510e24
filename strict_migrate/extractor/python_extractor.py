"""Python import extractor using AST."""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from strict_migrate.extractor.base import BaseExtractor

logger = logging.getLogger(__name__)


class PythonExtractor(BaseExtractor):
    extensions = (".py",)

    def __init__(self, source_root: Path, search_roots: list[Path] | None = None):
        super().__init__(source_root)
        if search_roots is None:
            search_roots = [self.source_root]
            if (self.source_root / "src").is_dir():
                search_roots.append(self.source_root / "src")
        self.search_roots = [r.resolve() for r in search_roots]
        self._first_party = self._find_first_party_names()

    def extract_imports(self, file_path: str) -> set[str]:
        path = Path(file_path)
        try:
            tree = ast.parse(self._read_source(path), filename=file_path)
        except SyntaxError as e:
            logger.warning("Could not parse %s: %s", self._relative(path), e)
            return set()

        package = self._package_parts(path)
        imports: set[str] = set()

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    self._add(imports, self._resolve_import(alias.name), alias.name, path)
            elif isinstance(node, ast.ImportFrom):
                self._collect_from_import(node, package, path, imports)

        imports.discard(str(path.resolve()))
        return imports

    def module_path(self, dotted: str) -> str | None:
        """Resolve a dotted module name to a file under the search roots."""
        if not dotted:
            return None
        parts = dotted.split(".")
        for root in self.search_roots:
            base = root.joinpath(*parts)
            for candidate in (base.with_name(base.name + ".py"), base / "__init__.py"):
                if candidate.is_file():
                    return str(candidate.resolve())
        return None

    def _collect_from_import(
        self,
        node: ast.ImportFrom,
        package: list[str] | None,
        path: Path,
        imports: set[str],
    ) -> None:
        if node.level:
            if package is None or node.level - 1 > len(package):
                logger.warning(
                    "Relative import beyond top-level package in %s (line %d)",
                    self._relative(path), node.lineno,
                )
                return
            base = package[:len(package) - (node.level - 1)]
            module = ".".join(base + (node.module.split(".") if node.module else []))
            first_party = True
        else:
            module = node.module or ""
            first_party = self._is_first_party(module)

        warned = False
        for alias in node.names:
            if alias.name != "*":
                submodule = self.module_path(f"{module}.{alias.name}" if module else alias.name)
                if submodule:
                    imports.add(submodule)
                    continue
            target = self.module_path(module)
            if target:
                imports.add(target)
            elif first_party and not warned:
                logger.warning(
                    "Unresolved import %s in %s",
                    "." * node.level + (node.module or alias.name), self._relative(path),
                )
                warned = True

    def _resolve_import(self, dotted: str) -> str | None:
        # Fall back to the nearest parent that resolves, e.g. a package
        # exposing a name that is not a module of its own.
        parts = dotted.split(".")
        while parts:
            target = self.module_path(".".join(parts))
            if target:
                return target
            parts.pop()
        return None

    def _add(self, imports: set[str], target: str | None, name: str, path: Path) -> None:
        if target:
            imports.add(target)
        elif self._is_first_party(name):
            logger.warning("Unresolved import %s in %s", name, self._relative(path))

    def _package_parts(self, path: Path) -> list[str] | None:
        """Dotted package of a file as a list, or None if outside the search roots."""
        resolved = path.resolve()
        for root in sorted(self.search_roots, key=lambda r: len(r.parts), reverse=True):
            try:
                rel = resolved.relative_to(root)
            except ValueError:
                continue
            # a/b/c.py and a/b/__init__.py both live in package a.b
            return list(rel.parts[:-1])
        return None

    def _is_first_party(self, dotted: str) -> bool:
        return dotted.split(".")[0] in self._first_party

    def _find_first_party_names(self) -> set[str]:
        names: set[str] = set()
        for root in self.search_roots:
            if not root.is_dir():
                continue
            for child in root.iterdir():
                if child.is_dir() and (child / "__init__.py").is_file():
                    names.add(child.name)
                elif child.suffix == ".py":
                    names.add(child.stem)
        return names
