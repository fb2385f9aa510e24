"""Eligibility: which components can be migrated next given the files already checked."""

from __future__ import annotations

from typing import Container

from strict_migrate.analysis.graph_models import Component, CondensedGraph


def is_checked(component: Component, checked: Container[str]) -> bool:
    return all(file in checked for file in component.files)


def eligible(condensed: CondensedGraph, checked: Container[str]) -> list[Component]:
    """Return the frontier: unchecked components whose dependencies are all checked.

    A component is fully checked only when every one of its files is
    checked, so a partially migrated cycle stays on the frontier.
    """
    done = [is_checked(c, checked) for c in condensed.components]
    return [
        c for c in condensed.components
        if not done[c.id] and all(done[dep] for dep in c.dependencies)
    ]


def eligible_files(condensed: CondensedGraph, checked: Container[str]) -> list[str]:
    """Flatten the frontier into its unchecked files, sorted."""
    files: list[str] = []
    for component in eligible(condensed, checked):
        files.extend(f for f in component.files if f not in checked)
    return sorted(files)


def eligible_cycles(condensed: CondensedGraph, checked: Container[str]) -> list[Component]:
    """Only the multi-file components of the frontier."""
    return [c for c in eligible(condensed, checked) if c.is_cycle]
