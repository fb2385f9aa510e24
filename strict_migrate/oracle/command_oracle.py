"""Checking oracles that run a type checker as a subprocess."""

from __future__ import annotations

import logging
import re
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path

from strict_migrate.oracle.base import BaseOracle, OracleError

logger = logging.getLogger(__name__)

_SUMMARY_RE = re.compile(r"Found (\d+) errors?", re.IGNORECASE)
_ERROR_LINE_RE = re.compile(r":\d+(?::\d+)?: error:|\berror TS\d+:")


def count_errors(output: str) -> int:
    """Error count from checker output: the summary line if any, else error lines."""
    m = _SUMMARY_RE.search(output)
    if m:
        return int(m.group(1))
    return sum(1 for line in output.splitlines() if _ERROR_LINE_RE.search(line))


class CommandOracle(BaseOracle):
    """Run a command template per file and count the errors it reports.

    ``command`` is a shell-style template; ``{file}`` is replaced with the
    path of the candidate file relative to ``cwd``. Exit codes outside
    ``ok_exit_codes`` mean the checker itself broke.
    """

    def __init__(
        self,
        command: str,
        cwd: Path,
        *,
        ok_exit_codes: tuple[int, ...] = (0, 1),
        timeout: float | None = 600,
    ):
        if "{file}" not in command:
            command = f"{command} {{file}}"
        self.command = command
        self.cwd = cwd.resolve()
        self.ok_exit_codes = ok_exit_codes
        self.timeout = timeout

    def build_args(self, file_path: str) -> list[str]:
        return [arg.replace("{file}", self._relative(file_path)) for arg in shlex.split(self.command)]

    def check_file(self, file_path: str) -> int:
        args = self.build_args(file_path)
        logger.debug("Running %s", " ".join(args))
        try:
            proc = subprocess.run(
                args,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise OracleError(f"Checker executable not found: {args[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise OracleError(f"Checker timed out after {self.timeout}s on {file_path}") from e

        output = proc.stdout + proc.stderr
        if proc.returncode not in self.ok_exit_codes:
            raise OracleError(
                f"Checker exited with code {proc.returncode} on {file_path}: "
                f"{output.strip()[:500]}"
            )

        errors = count_errors(output)
        if errors:
            for line in output.splitlines():
                if _ERROR_LINE_RE.search(line):
                    logger.debug("found error in %s: %s", file_path, line)
        return errors

    def _relative(self, file_path: str) -> str:
        try:
            return Path(file_path).resolve().relative_to(self.cwd).as_posix()
        except ValueError:
            return file_path


class MypyOracle(CommandOracle):
    """``mypy --strict`` on one file at a time, sharing a cache within a session."""

    def __init__(
        self,
        cwd: Path,
        *,
        executable: str = "mypy",
        extra_args: list[str] | None = None,
        timeout: float | None = 600,
    ):
        args = [executable, "--strict", "--follow-imports=silent", "--no-color-output"]
        args.extend(extra_args or [])
        super().__init__(
            " ".join(shlex.quote(a) for a in args),
            cwd,
            ok_exit_codes=(0, 1),
            timeout=timeout,
        )
        self._cache_dir: Path | None = None

    def start(self) -> None:
        self._cache_dir = Path(tempfile.mkdtemp(prefix="strict-migrate-mypy-"))

    def stop(self) -> None:
        if self._cache_dir is not None:
            shutil.rmtree(self._cache_dir, ignore_errors=True)
            self._cache_dir = None

    def build_args(self, file_path: str) -> list[str]:
        args = super().build_args(file_path)
        if self._cache_dir is not None:
            args[1:1] = ["--cache-dir", str(self._cache_dir)]
        return args
