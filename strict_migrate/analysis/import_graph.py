"""Import graph builder: runs the import extractor over the tracked files and keeps only tracked edges."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

from strict_migrate.analysis.graph_models import ImportGraph

logger = logging.getLogger(__name__)

ExtractImports = Callable[[str], Iterable[str]]


class ImportGraphBuilder:
    """Build an import graph from per-file import extraction.

    Extraction results are cached for the lifetime of the builder, so a
    migration run that rebuilds the graph every pass only queries each
    file once.
    """

    def __init__(self, extract: ExtractImports, max_workers: int = 4):
        self._extract = extract
        self._max_workers = max(1, max_workers)
        self._cache: dict[str, frozenset[str]] = {}

    def build(self, files: Iterable[str]) -> ImportGraph:
        tracked = set(files)
        self._fill_cache(sorted(f for f in tracked if f not in self._cache))

        graph = ImportGraph()
        for file in sorted(tracked):
            edges: set[str] = set()
            dropped: list[str] = []
            for target in self._cache[file]:
                if target == file:
                    continue
                if target not in tracked:
                    dropped.append(target)
                    continue
                edges.add(target)
            graph.imports[file] = edges
            if dropped:
                dropped.sort()
                graph.unresolved[file] = dropped
                for target in dropped:
                    logger.warning("Dropping import of untracked file %s in %s", target, file)
        return graph

    @property
    def cached_files(self) -> int:
        return len(self._cache)

    def _fill_cache(self, pending: list[str]) -> None:
        if not pending:
            return
        if self._max_workers == 1 or len(pending) == 1:
            for file in pending:
                self._cache[file] = self._safe_extract(file)
            return

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {pool.submit(self._safe_extract, file): file for file in pending}
            for future in as_completed(futures):
                self._cache[futures[future]] = future.result()

    def _safe_extract(self, file: str) -> frozenset[str]:
        try:
            return frozenset(self._extract(file))
        except Exception as e:
            logger.warning("Import extraction failed for %s: %s", file, e)
            return frozenset()
