"""Generate report.json and data.js for visualizing migration progress."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from strict_migrate.analysis.eligibility import is_checked
from strict_migrate.oracle.base import BaseOracle
from strict_migrate.pipeline import ScanResult

logger = logging.getLogger(__name__)


def count_eligible_errors(result: ScanResult, oracle: BaseOracle) -> dict[int, int]:
    """Error count of the first file of each eligible component."""
    counts: dict[int, int] = {}
    with oracle.session():
        for component in result.eligible:
            file = component.files[0]
            logger.info("Counting errors for eligible file %s", file)
            counts[component.id] = oracle.check_file(file)
    return counts


def build_report(
    result: ScanResult,
    source_dir: Path,
    error_counts: dict[int, int] | None = None,
) -> dict:
    """Summarize every component of the condensed graph."""
    root = source_dir.resolve()
    eligible_ids = result.eligible_ids
    error_counts = error_counts or {}

    nodes = []
    for component in result.condensed.components:
        nodes.append({
            "id": component.id,
            "files": [_relative(f, root) for f in component.files],
            "checked": is_checked(component, result.checked),
            "eligible": component.id in eligible_ids,
            "error_count": error_counts.get(component.id),
            "dependencies": list(component.dependencies),
            "dependents": list(component.dependents),
            "dependency_depth": component.dependency_depth,
            "dependent_depth": component.dependent_depth,
        })

    checked_files = sum(1 for f in result.files if f in result.checked)
    return {
        "version": "1.0",
        "generated": datetime.now().isoformat(),
        "source_directory": str(root),
        "summary": {
            "total_files": len(result.files),
            "checked_files": checked_files,
            "eligible_files": sum(len(c.files) for c in result.eligible),
            "components": len(nodes),
            "cycles": sum(1 for c in result.condensed.components if c.is_cycle),
        },
        "nodes": nodes,
    }


def write_report(report: dict, output_dir: Path) -> list[Path]:
    """Write report.json and data.js (``window.nodes = [...]``) into output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / "report.json"
    report_path.write_text(json.dumps(report, indent=2) + "\n", encoding="utf-8")

    data_path = output_dir / "data.js"
    data_path.write_text(f"window.nodes = {json.dumps(report['nodes'])}\n", encoding="utf-8")

    return [report_path, data_path]


def _relative(file: str, root: Path) -> str:
    try:
        return Path(file).relative_to(root).as_posix()
    except ValueError:
        return file
