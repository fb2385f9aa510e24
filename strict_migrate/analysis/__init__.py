"""Graph analysis: import graph, cycles, eligibility, depth and candidate ranking."""

from strict_migrate.analysis.candidates import Candidate, rank_candidates
from strict_migrate.analysis.cycles import CycleDetector, CycleStructureError, verify_acyclic
from strict_migrate.analysis.depth import layer
from strict_migrate.analysis.eligibility import eligible, eligible_cycles, eligible_files, is_checked
from strict_migrate.analysis.graph_models import Component, CondensedGraph, ImportGraph
from strict_migrate.analysis.import_graph import ImportGraphBuilder

__all__ = [
    "Candidate",
    "Component",
    "CondensedGraph",
    "CycleDetector",
    "CycleStructureError",
    "ImportGraph",
    "ImportGraphBuilder",
    "eligible",
    "eligible_cycles",
    "eligible_files",
    "is_checked",
    "layer",
    "rank_candidates",
    "verify_acyclic",
]
