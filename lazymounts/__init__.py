"""Public package surface for lazymounts.

Exports ``main`` for programmatic CLI invocation.
The filesystems panel itself lives in ``lazymounts.filesystems``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
