"""Checking oracles."""

from strict_migrate.oracle.base import BaseOracle, OracleError
from strict_migrate.oracle.command_oracle import CommandOracle, MypyOracle, count_errors

__all__ = ["BaseOracle", "CommandOracle", "MypyOracle", "OracleError", "count_errors"]
