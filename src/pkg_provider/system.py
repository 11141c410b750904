"""
Filesystem and process environment access.

The provider reaches the host only through these small interfaces, so
tests can substitute in-memory implementations.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager


class Filesystem(ABC):
    """Read-only filesystem access."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_lines(self, path: str) -> list[str]:
        """
        Read *path* as lines, keeping line terminators.

        Raises:
            OSError: the file could not be opened
        """
        pass


class LocalFilesystem(Filesystem):
    """The real filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_lines(self, path: str) -> list[str]:
        # newline="" keeps "\r\n" intact so only one terminator is stripped later
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return f.readlines()


class Environment(ABC):
    """Process environment variables."""

    @abstractmethod
    def get(self, name: str) -> str | None:
        pass

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        pass

    @abstractmethod
    def unset(self, name: str) -> None:
        pass


class ProcessEnvironment(Environment):
    """``os.environ``, inherited by every child process."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def unset(self, name: str) -> None:
        os.environ.pop(name, None)


@contextmanager
def bound_env(environment: Environment, name: str, value: str) -> Iterator[None]:
    """
    Bind *name* to *value* for the duration of the block.

    The previous state is restored on every exit path: the variable is
    unset again if it did not exist before.

    The environment is process-wide; concurrent callers must serialize.
    """
    previous = environment.get(name)
    environment.set(name, value)
    try:
        yield
    finally:
        if previous is None:
            environment.unset(name)
        else:
            environment.set(name, previous)
