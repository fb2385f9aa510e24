"""Migration driver: test frontier files and commit the clean ones until nothing changes."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from strict_migrate.analysis.eligibility import eligible
from strict_migrate.analysis.graph_models import Component, CondensedGraph
from strict_migrate.models import CheckedSet, CheckResult, DriverState, MigrationResult, PassReport
from strict_migrate.oracle.base import BaseOracle, OracleError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class CheckedStore(Protocol):
    def load(self) -> set[str]: ...

    def add(self, files: list[str]) -> list[str]: ...


class MigrationDriver:
    """Drive Scanning -> Testing -> Committing until a pass commits nothing.

    ``scan`` rebuilds the condensed graph from the current file tree. The
    driver owns the checked set: it is loaded from ``store`` once, only
    grows, and every commit is appended to ``store`` before the next scan.
    """

    def __init__(
        self,
        scan: Callable[[], CondensedGraph],
        oracle: BaseOracle,
        store: CheckedStore,
        *,
        progress: ProgressCallback | None = None,
        should_stop: Callable[[], bool] | None = None,
        max_passes: int | None = None,
    ):
        self.scan = scan
        self.oracle = oracle
        self.store = store
        self.progress = progress
        self.should_stop = should_stop
        self.max_passes = max_passes
        self.state = DriverState.IDLE
        self.checked = CheckedSet()

    def run(self) -> MigrationResult:
        self.checked = CheckedSet(self.store.load())
        result = MigrationResult()
        logger.info("Starting migration with %d checked file(s)", len(self.checked))

        while True:
            if self.should_stop and self.should_stop():
                result.cancelled = True
                break
            if self.max_passes is not None and len(result.passes) >= self.max_passes:
                result.cancelled = True
                break

            report = self._run_pass(len(result.passes) + 1)
            result.passes.append(report)
            result.committed.extend(report.committed)
            for file in report.committed:
                result.failures.pop(file, None)
            result.failures.update(report.failures)

            if not report.committed:
                break

        self.state = DriverState.DONE
        result.state = self.state
        logger.info(
            "Migration finished after %d pass(es): %d committed, %d failing",
            len(result.passes), len(result.committed), len(result.failures),
        )
        return result

    def _run_pass(self, number: int) -> PassReport:
        self.state = DriverState.SCANNING
        frontier = eligible(self.scan(), self.checked)
        report = PassReport(number=number, eligible_components=len(frontier))
        total = sum(1 for c in frontier for f in c.files if f not in self.checked)
        logger.info("Pass %d: %d eligible component(s), %d file(s)", number, len(frontier), total)

        self.state = DriverState.TESTING
        passing = self._test_frontier(number, frontier, total, report)

        self.state = DriverState.COMMITTING
        if passing:
            report.committed = self.checked.add_all(passing)
            self.store.add(report.committed)
        return report

    def _test_frontier(
        self,
        number: int,
        frontier: list[Component],
        total: int,
        report: PassReport,
    ) -> list[str]:
        passing: list[str] = []
        considered: set[str] = set()
        done = 0

        with self.oracle.session():
            for component in sorted(frontier, key=lambda c: c.files[0]):
                results: list[CheckResult] = []
                for file in component.files:
                    if file in considered or file in self.checked:
                        continue
                    considered.add(file)
                    done += 1
                    if self.progress:
                        self.progress("Testing", done, total)
                    results.append(CheckResult(file=file, error_count=self._check(number, file)))

                report.tested.extend(results)
                failed = [r for r in results if not r.passed]
                for r in failed:
                    report.failures[r.file] = r.error_count
                    logger.info("%s: %d error(s)", r.file, r.error_count)

                # A cycle is committed as a unit or not at all
                if not failed:
                    passing.extend(r.file for r in results)
                elif component.is_cycle:
                    logger.info(
                        "Cycle of %d files held back by %d failing file(s)",
                        len(component.files), len(failed),
                    )

        return passing

    def _check(self, number: int, file: str) -> int:
        try:
            errors = self.oracle.check_file(file)
        except OracleError as e:
            raise OracleError(f"Pass {number}: checking {file} failed: {e}") from e
        if errors < 0:
            raise OracleError(f"Pass {number}: checker reported a negative error count for {file}")
        return errors
