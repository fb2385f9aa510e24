"""Depth calculator: layer components by dependency chain length and dependent chain length."""

from __future__ import annotations

from collections import deque

from strict_migrate.analysis.cycles import CycleStructureError
from strict_migrate.analysis.graph_models import CondensedGraph


def layer(condensed: CondensedGraph) -> dict[int, tuple[int, int]]:
    """Assign dependency_depth and dependent_depth to every component.

    Returns ``{component_id: (dependency_depth, dependent_depth)}``. The
    depths are also written onto the components.
    """
    components = condensed.components
    dependency_depth = _layer_depths(
        [c.dependencies for c in components],
        [c.dependents for c in components],
    )
    dependent_depth = _layer_depths(
        [c.dependents for c in components],
        [c.dependencies for c in components],
    )

    result: dict[int, tuple[int, int]] = {}
    for c in components:
        c.dependency_depth = dependency_depth[c.id]
        c.dependent_depth = dependent_depth[c.id]
        result[c.id] = (c.dependency_depth, c.dependent_depth)
    return result


def _layer_depths(below: list[list[int]], above: list[list[int]]) -> list[int]:
    """Worklist layering over a DAG.

    ``below[i]`` are the nodes that must be layered before node ``i``;
    ``above[i]`` are the nodes waiting on node ``i``. A node with nothing
    below it gets depth 0, any other node one more than the deepest node
    below it.
    """
    count = len(below)
    depth = [-1] * count
    pending = [len(b) for b in below]
    queue = deque(i for i in range(count) if pending[i] == 0)

    for i in queue:
        depth[i] = 0

    while queue:
        node = queue.popleft()
        for waiting in above[node]:
            depth[waiting] = max(depth[waiting], depth[node] + 1)
            pending[waiting] -= 1
            if pending[waiting] == 0:
                queue.append(waiting)

    unassigned = [i for i in range(count) if pending[i] > 0]
    if unassigned:
        raise CycleStructureError(
            f"Could not layer {len(unassigned)} component(s); condensed graph is not acyclic"
        )
    return depth
