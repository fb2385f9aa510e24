"""Cycle detection: Tarjan SCC decomposition and condensation of the import graph into a DAG."""

from __future__ import annotations

from collections import deque

from strict_migrate.analysis.graph_models import Component, CondensedGraph, ImportGraph


class CycleStructureError(RuntimeError):
    """The condensed graph is not acyclic."""


class CycleDetector:
    """Collapse import cycles into components."""

    def find_sccs(self, graph: ImportGraph) -> list[list[str]]:
        """Strongly-connected components in completion order.

        Completion order puts every component after all components it
        imports from. Iterative, so deep import chains don't hit the
        recursion limit.
        """
        imports = graph.imports
        counter = 0
        index: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        on_stack: set[str] = set()
        stack: list[str] = []
        sccs: list[list[str]] = []

        for root in sorted(imports):
            if root in index:
                continue

            index[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(sorted(imports.get(root, ()))))]

            while work:
                node, neighbors = work[-1]
                advanced = False
                for target in neighbors:
                    if target not in imports:
                        continue
                    if target not in index:
                        index[target] = lowlink[target] = counter
                        counter += 1
                        stack.append(target)
                        on_stack.add(target)
                        work.append((target, iter(sorted(imports.get(target, ())))))
                        advanced = True
                        break
                    if target in on_stack:
                        lowlink[node] = min(lowlink[node], index[target])
                if advanced:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == index[node]:
                    component: list[str] = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    sccs.append(sorted(component))

        return sccs

    def condense(self, graph: ImportGraph) -> CondensedGraph:
        condensed = CondensedGraph()

        for cid, files in enumerate(self.find_sccs(graph)):
            condensed.components.append(Component(id=cid, files=files))
            for file in files:
                condensed.file_to_component[file] = cid

        for component in condensed.components:
            deps: set[int] = set()
            for file in component.files:
                for target in graph.imports.get(file, ()):
                    target_id = condensed.file_to_component.get(target)
                    # Edges inside the cycle collapse away
                    if target_id is None or target_id == component.id:
                        continue
                    deps.add(target_id)
            component.dependencies = sorted(deps)
            for dep_id in component.dependencies:
                condensed.components[dep_id].dependents.append(component.id)

        for component in condensed.components:
            component.dependents.sort()

        return condensed


def verify_acyclic(condensed: CondensedGraph) -> None:
    """Raise CycleStructureError unless the condensation is a DAG."""
    pending = [len(c.dependencies) for c in condensed.components]
    queue = deque(c.id for c in condensed.components if not c.dependencies)
    seen = 0

    while queue:
        cid = queue.popleft()
        seen += 1
        for dependent in condensed.components[cid].dependents:
            pending[dependent] -= 1
            if pending[dependent] == 0:
                queue.append(dependent)

    if seen != len(condensed.components):
        stuck = [c.id for c in condensed.components if pending[c.id] > 0]
        raise CycleStructureError(
            f"Condensed graph contains a cycle through components {stuck[:10]}"
        )
