"""
Per-key accumulation of file sizes plus grand totals for a single scan.

The aggregator is fed from one thread only; parallel walkers hand their
entries back to the consuming thread instead of sharing this state.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from .keys import derive_key
from .models import GroupStats, Totals
from .walker import KIND_DIR, KIND_FILE, WalkEntry


logger = logging.getLogger(__name__)


class Aggregator:
    def __init__(self) -> None:
        self.groups: Dict[str, GroupStats] = {}
        self._size = 0
        self._files = 0
        self._dirs = 0

    @property
    def totals(self) -> Totals:
        return Totals(total_size=self._size, total_files=self._files, total_dirs=self._dirs)

    def add_file(self, key: Optional[str], size: int) -> None:
        size = max(0, int(size))
        self._files += 1
        self._size += size
        if key is None:
            return
        self.groups[key] = self.groups.get(key, GroupStats()).add(size)

    def add_dir(self) -> None:
        self._dirs += 1

    def add_entry(self, entry: WalkEntry, depth: int) -> None:
        if entry.kind == KIND_FILE:
            self.add_file(derive_key(entry.parts, depth), entry.size)
        elif entry.kind == KIND_DIR:
            self.add_dir()
        # symlinks and special files are not counted

    def consume(self, entries: Iterable[WalkEntry], depth: int) -> "Aggregator":
        for entry in entries:
            self.add_entry(entry, depth)
        logger.debug(
            "aggregated %d groups from %d files in %d dirs",
            len(self.groups), self.totals.total_files, self.totals.total_dirs,
        )
        return self
