"""Exceptions raised when the filesystems panel cannot be built."""

from __future__ import annotations


class LazyMountsError(Exception):
    """Base class for errors the CLI reports instead of a traceback."""


class MountListError(LazyMountsError):
    """Mount enumeration failed or produced nothing worth listing."""

    def __init__(self, details: str) -> None:
        super().__init__(f"mount list error: {details}")
        self.details = details


__all__ = ["LazyMountsError", "MountListError"]
