"""Data models for the import graph and its condensation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportGraph:
    imports: dict[str, set[str]] = field(default_factory=dict)  # file -> {imported files}
    unresolved: dict[str, list[str]] = field(default_factory=dict)  # file -> [dropped targets]

    @property
    def files(self) -> list[str]:
        return sorted(self.imports)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.imports.values())


@dataclass
class Component:
    """One strongly-connected component of the import graph."""
    id: int
    files: list[str]
    dependencies: list[int] = field(default_factory=list)  # component ids this one imports
    dependents: list[int] = field(default_factory=list)  # component ids importing this one
    dependency_depth: int = -1
    dependent_depth: int = -1

    @property
    def is_cycle(self) -> bool:
        return len(self.files) > 1


@dataclass
class CondensedGraph:
    components: list[Component] = field(default_factory=list)
    file_to_component: dict[str, int] = field(default_factory=dict)

    def component_for(self, file: str) -> Component | None:
        cid = self.file_to_component.get(file)
        if cid is None:
            return None
        return self.components[cid]
