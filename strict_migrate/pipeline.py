"""Pipeline orchestrator: discover -> extract imports -> graph -> condense -> eligibility / depth."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from strict_migrate.analysis.cycles import CycleDetector, verify_acyclic
from strict_migrate.analysis.depth import layer
from strict_migrate.analysis.eligibility import eligible
from strict_migrate.analysis.graph_models import Component, CondensedGraph, ImportGraph
from strict_migrate.analysis.import_graph import ImportGraphBuilder
from strict_migrate.driver import MigrationDriver
from strict_migrate.extractor import ImportExtractor
from strict_migrate.models import MigrationConfig, MigrationResult
from strict_migrate.oracle.base import BaseOracle
from strict_migrate.scanner import discover_files
from strict_migrate.store import AllowListStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class ScanResult:
    """Snapshot of the project graph against a checked set."""
    files: list[str] = field(default_factory=list)
    graph: ImportGraph = field(default_factory=ImportGraph)
    condensed: CondensedGraph = field(default_factory=CondensedGraph)
    checked: frozenset[str] = frozenset()
    eligible: list[Component] = field(default_factory=list)

    @property
    def eligible_ids(self) -> set[int]:
        return {c.id for c in self.eligible}


class ProjectScanner:
    """Rebuilds the condensed graph from the file tree.

    One instance per run: the import extraction cache lives as long as
    the scanner, so repeated scans only extract new files.
    """

    def __init__(self, config: MigrationConfig):
        self.config = config
        self.builder = ImportGraphBuilder(
            ImportExtractor(config.source_dir, config.languages),
            max_workers=config.max_workers,
        )
        self.detector = CycleDetector()
        self.last_graph: ImportGraph | None = None
        self.last_files: list[str] = []

    def scan(self) -> CondensedGraph:
        self.last_files = discover_files(
            self.config.source_dir, self.config.languages, self.config.skip_dirs,
        )
        self.last_graph = self.builder.build(self.last_files)
        condensed = self.detector.condense(self.last_graph)
        verify_acyclic(condensed)
        logger.info(
            "Scanned %d file(s), %d import edge(s), %d component(s)",
            len(self.last_files), self.last_graph.edge_count(), len(condensed.components),
        )
        return condensed


def make_store(config: MigrationConfig) -> AllowListStore:
    return AllowListStore(config.resolved_allowlist, config.languages)


def run_scan(
    config: MigrationConfig,
    checked: set[str] | None = None,
    progress: ProgressCallback | None = None,
) -> ScanResult:
    """Build the graph, layer it, and compute the current frontier."""
    if checked is None:
        checked = make_store(config).load()

    if progress:
        progress("Scanning", 0, 1)
    scanner = ProjectScanner(config)
    condensed = scanner.scan()
    layer(condensed)
    if progress:
        progress("Scanning", 1, 1)

    return ScanResult(
        files=scanner.last_files,
        graph=scanner.last_graph or ImportGraph(),
        condensed=condensed,
        checked=frozenset(checked),
        eligible=eligible(condensed, checked),
    )


def run_migration(
    config: MigrationConfig,
    oracle: BaseOracle,
    progress: ProgressCallback | None = None,
    max_passes: int | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> MigrationResult:
    """Run the fixpoint migration loop against the allow-list."""
    scanner = ProjectScanner(config)
    driver = MigrationDriver(
        scanner.scan,
        oracle,
        make_store(config),
        progress=progress,
        should_stop=should_stop,
        max_passes=max_passes,
    )
    return driver.run()
