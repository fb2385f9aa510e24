"""Exporter layer."""

from strict_migrate.exporter.report_generator import build_report, count_eligible_errors, write_report

__all__ = ["build_report", "count_eligible_errors", "write_report"]
