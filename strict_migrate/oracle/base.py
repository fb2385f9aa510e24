"""Abstract checking oracle."""

from __future__ import annotations

import abc
import contextlib
from typing import Iterator


class OracleError(RuntimeError):
    """The checking environment itself failed (not a type error in the candidate)."""


class BaseOracle(abc.ABC):
    """Reports how many errors a file has under the stricter mode.

    An oracle may keep state between calls inside a session (caches, a
    watch process), so calls must not be made concurrently.
    """

    @abc.abstractmethod
    def check_file(self, file_path: str) -> int:
        """Return the error count for file_path; 0 means clean."""

    def start(self) -> None:
        """Open a checking session."""

    def stop(self) -> None:
        """Close the checking session and release its resources."""

    @contextlib.contextmanager
    def session(self) -> Iterator[BaseOracle]:
        self.start()
        try:
            yield self
        finally:
            self.stop()
