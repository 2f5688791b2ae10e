"""Listing refresh signals."""

from dataclasses import dataclass
from typing import Protocol

DASHBOARD_PATH = "/dashboard"


class PathRevalidator(Protocol):
    """Marks logical resource paths stale after a mutation."""

    def revalidate_path(self, path: str) -> None:
        """Signal that views of the path should be re-fetched."""

    def version(self, path: str) -> int:
        """Return the number of times the path has been marked stale."""


@dataclass
class InMemoryPathRevalidator(PathRevalidator):
    """Process-local revalidation registry keyed by path."""

    _versions: dict[str, int]

    def __init__(self) -> None:
        self._versions = {}

    def revalidate_path(self, path: str) -> None:
        """Bump the version for a path."""
        self._versions[path] = self._versions.get(path, 0) + 1

    def version(self, path: str) -> int:
        """Return the current version for a path, zero if never revalidated."""
        return self._versions.get(path, 0)
