"""
Directory traversal for diskhound.

The walker lists directories with os.scandir, never follows symbolic links and
prunes excluded directory names before descending. Each step produces either a
WalkEntry (success) or a WalkError (a single entry or subdirectory could not be
read). Iterating a Walker applies its ErrorPolicy to the errors and yields only
entries, so callers see a best-effort listing while `skipped` keeps the tally.
"""

from __future__ import annotations

import concurrent.futures
import enum
import logging
import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from .errors import FatalRootError, TraversalEntryError


logger = logging.getLogger(__name__)


class ErrorPolicy(str, enum.Enum):
    SILENT = "silent"
    LOG = "log"


KIND_FILE = "file"
KIND_DIR = "dir"
KIND_SYMLINK = "symlink"
KIND_OTHER = "other"


@dataclass(frozen=True)
class WalkEntry:
    parts: Tuple[str, ...]   # path components relative to the root
    kind: str
    size: int = 0

    @property
    def rel_path(self) -> str:
        return "/".join(self.parts)


@dataclass(frozen=True)
class WalkError:
    parts: Tuple[str, ...]
    error: TraversalEntryError


WalkResult = Union[WalkEntry, WalkError]


def display_name(name: str) -> str:
    """Undecodable bytes in a file name become U+FFFD so keys are always printable."""
    return os.fsencode(name).decode("utf-8", "replace")


def _classify(entry: os.DirEntry) -> Tuple[str, int]:
    st = entry.stat(follow_symlinks=False)
    mode = st.st_mode
    if statmod.S_ISLNK(mode):
        return KIND_SYMLINK, 0
    if statmod.S_ISDIR(mode):
        return KIND_DIR, 0
    if statmod.S_ISREG(mode):
        return KIND_FILE, int(st.st_size)
    return KIND_OTHER, 0


def _list_dir(
    path: Path, parts: Tuple[str, ...], exclude: frozenset
) -> Tuple[List[WalkResult], List[Tuple[Path, Tuple[str, ...]]]]:
    """
    List one directory. Returns (results, subdirs_to_descend).
    A failure to open the directory itself becomes a single WalkError.
    """
    results: List[WalkResult] = []
    subdirs: List[Tuple[Path, Tuple[str, ...]]] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                name = display_name(entry.name)
                child_parts = parts + (name,)
                try:
                    kind, size = _classify(entry)
                except OSError as e:
                    results.append(WalkError(child_parts, TraversalEntryError(entry.path, e)))
                    continue
                if kind == KIND_DIR:
                    if entry.name in exclude or name in exclude:
                        continue
                    subdirs.append((Path(entry.path), child_parts))
                results.append(WalkEntry(child_parts, kind, size))
    except OSError as e:
        results.append(WalkError(parts, TraversalEntryError(path, e)))
    return results, subdirs


class Walker:
    """Pruned, symlink-safe traversal of a directory tree."""

    def __init__(
        self,
        root: Union[str, os.PathLike],
        exclude: Iterable[str] = (),
        *,
        error_policy: ErrorPolicy = ErrorPolicy.SILENT,
        workers: int = 1,
    ):
        self.root = Path(root)
        self.exclude = frozenset(exclude)
        self.error_policy = ErrorPolicy(error_policy)
        self.workers = max(1, int(workers))
        self.skipped = 0

    def _check_root(self) -> None:
        try:
            st = self.root.stat()
        except FileNotFoundError:
            raise FatalRootError(self.root, "no such directory") from None
        except OSError as e:
            raise FatalRootError(self.root, e.strerror or str(e)) from e
        if not statmod.S_ISDIR(st.st_mode):
            raise FatalRootError(self.root, "not a directory")
        try:
            with os.scandir(self.root):
                pass
        except OSError as e:
            raise FatalRootError(self.root, e.strerror or str(e)) from e

    def results(self) -> Iterator[WalkResult]:
        """
        Yield a WalkEntry or WalkError for every step of the walk.
        Raises FatalRootError before yielding anything if the root is unusable.
        """
        self._check_root()
        if self.workers > 1:
            yield from self._results_parallel()
            return

        stack: List[Tuple[Path, Tuple[str, ...]]] = [(self.root, ())]
        while stack:
            path, parts = stack.pop()
            results, subdirs = _list_dir(path, parts, self.exclude)
            yield from results
            stack.extend(subdirs)

    def _results_parallel(self) -> Iterator[WalkResult]:
        level: List[Tuple[Path, Tuple[str, ...]]] = [(self.root, ())]
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as ex:
            while level:
                logger.debug("listing %d directories on %d workers", len(level), self.workers)
                next_level: List[Tuple[Path, Tuple[str, ...]]] = []
                for results, subdirs in ex.map(lambda d: _list_dir(d[0], d[1], self.exclude), level):
                    yield from results
                    next_level.extend(subdirs)
                level = next_level

    def _handle_error(self, err: WalkError) -> None:
        self.skipped += 1
        if self.error_policy is ErrorPolicy.LOG:
            logger.warning("skipped %s", err.error)

    def __iter__(self) -> Iterator[WalkEntry]:
        for result in self.results():
            if isinstance(result, WalkError):
                self._handle_error(result)
                continue
            yield result

