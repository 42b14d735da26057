"""
One scan, end to end: walk the tree, aggregate per grouping key, then select
the groups to report. Returns a ScanResult for the renderer.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .aggregator import Aggregator
from .config import ScanConfig
from .models import ScanResult
from .selector import select
from .size_utils import format_bytes_binary
from .walker import KIND_FILE, WalkEntry, Walker


logger = logging.getLogger(__name__)


def _with_progress(
    entries: Iterable[WalkEntry],
    progress: Progress,
    min_interval: float = 0.1,
) -> Iterator[WalkEntry]:
    task = progress.add_task("Scanning…", total=None)
    files = 0
    size = 0
    last_update = 0.0
    for entry in entries:
        if entry.kind == KIND_FILE:
            files += 1
            size += entry.size
        now = time.time()
        if now - last_update >= min_interval:
            progress.update(task, description=f"Scanning… {files} files, {format_bytes_binary(size)}")
            last_update = now
        yield entry


def scan(
    config: ScanConfig,
    *,
    show_progress: bool = False,
    console: Optional[Console] = None,
) -> ScanResult:
    """
    Run a scan for `config`.
    Raises FatalRootError if the root is missing or unreadable; per-entry
    failures are handled by the walker according to config.error_policy.
    """
    logger.debug(
        "scan: root=%s depth=%s top=%s min=%s exclude=%s workers=%s",
        config.root, config.depth, config.top, config.min_size,
        sorted(config.exclude), config.workers,
    )
    walker = Walker(
        config.root,
        config.exclude,
        error_policy=config.error_policy,
        workers=config.workers,
    )
    agg = Aggregator()

    if show_progress:
        prog = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            transient=True,
            console=console or Console(stderr=True),
        )
        with prog:
            agg.consume(_with_progress(walker, prog), config.depth)
    else:
        agg.consume(walker, config.depth)

    groups = select(agg.groups, min_size=config.min_size, top=config.top)
    logger.debug("selected %d of %d groups", len(groups), len(agg.groups))
    if walker.skipped:
        logger.debug("%d entries skipped due to read errors", walker.skipped)

    return ScanResult(
        groups=tuple(groups),
        totals=agg.totals,
        root=config.root,
        skipped=walker.skipped,
    )
