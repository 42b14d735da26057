"""Grouping keys: the depth-limited prefix of a file's path below the scan root."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import ConfigurationError

SEPARATOR = "/"


def effective_depth(parts: Sequence[str], depth: int) -> int:
    """
    Depth actually used for a file with the given relative components.
    Never deeper than the file's parent chain and never below 1.
    """
    if depth < 1:
        raise ConfigurationError(f"depth must be at least 1, got {depth}")
    return max(1, min(depth, len(parts) - 1))


def derive_key(parts: Sequence[str], depth: int) -> Optional[str]:
    """
    Map a file's relative path components to its grouping key.

    >>> derive_key(("a", "b", "file2"), 1)
    'a'
    >>> derive_key(("a", "b", "file2"), 5)
    'a/b'
    >>> derive_key(("readme.md",), 1) is None
    True
    """
    if len(parts) <= 1:
        return None
    return SEPARATOR.join(parts[: effective_depth(parts, depth)])
