from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class GroupStats:
    size: int = 0
    file_count: int = 0

    def add(self, size: int) -> "GroupStats":
        # Sizes only ever accumulate.
        return GroupStats(self.size + max(0, int(size)), self.file_count + 1)


@dataclass(frozen=True)
class Totals:
    total_size: int = 0
    total_files: int = 0
    total_dirs: int = 0


Group = Tuple[str, GroupStats]


@dataclass(frozen=True)
class ScanResult:
    groups: Tuple[Group, ...]
    totals: Totals
    root: Path = field(default_factory=Path)
    skipped: int = 0  # entries dropped by per-entry I/O errors

    @property
    def shown(self) -> int:
        return len(self.groups)

    @property
    def max_size(self) -> int:
        return max((stats.size for _, stats in self.groups), default=0)
