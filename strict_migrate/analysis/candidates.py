"""Candidate ranking: order eligible files by how much of the codebase imports them."""

from __future__ import annotations

from dataclasses import dataclass

from strict_migrate.analysis.graph_models import ImportGraph


@dataclass
class Candidate:
    file: str
    direct_importers: int
    importers: int  # up to `order`-th order imports, approximate


def expand_imports(imports: dict[str, set[str]]) -> dict[str, set[str]]:
    """Add the imports of each file's imports (one level deeper)."""
    out: dict[str, set[str]] = {}
    for file, targets in imports.items():
        nested = set(targets)
        for target in targets:
            nested.update(imports.get(target, ()))
        nested.discard(file)
        out[file] = nested
    return out


def count_importers(files: list[str], imports: dict[str, set[str]]) -> dict[str, int]:
    counts = {file: 0 for file in files}
    for targets in imports.values():
        for target in targets:
            if target in counts:
                counts[target] += 1
    return counts


def rank_candidates(graph: ImportGraph, files: list[str], order: int = 3) -> list[Candidate]:
    """Rank files by the number of files importing them, most depended-on first.

    ``order`` bounds how many levels of indirect imports are followed.
    Ties are broken by path so the output is stable.
    """
    direct = count_importers(files, graph.imports)

    expanded = graph.imports
    for _ in range(max(order, 1) - 1):
        expanded = expand_imports(expanded)
    indirect = count_importers(files, expanded)

    ranked = [
        Candidate(file=file, direct_importers=direct[file], importers=indirect[file])
        for file in files
    ]
    ranked.sort(key=lambda c: (-c.importers, c.file))
    return ranked
