"""
Exception taxonomy for diskhound.

- ConfigurationError: bad option values, size strings or config files. Raised before traversal.
- FatalRootError: the scan root is missing, not a directory, or cannot be listed.
- TraversalEntryError: a single entry failed during the walk. Carried inside WalkError
  results and handled by the walker's error policy; never raised to callers.
"""

from __future__ import annotations


class DiskhoundError(Exception):
    pass


class ConfigurationError(DiskhoundError, ValueError):
    pass


class FatalRootError(DiskhoundError):
    def __init__(self, root, reason: str):
        super().__init__(f"cannot scan {root}: {reason}")
        self.root = root
        self.reason = reason


class TraversalEntryError(DiskhoundError):
    def __init__(self, path, cause: OSError):
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
