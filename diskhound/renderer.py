"""
Output for a ScanResult: a rich bar-chart table for terminals and a plain
dict/JSON summary for machines. Nothing here mutates the result.
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import ScanResult
from .size_utils import format_bytes_binary
from .walker import display_name

Formatter = Callable[[int], str]

BAR_WIDTH = 20
BAR_FILL = "█"
BAR_EMPTY = "░"


def percentage(size: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return size / total * 100.0


def bar_cells(size: int, max_size: int, width: int = BAR_WIDTH) -> int:
    """Filled cells for `size`, with the largest selected group as a full bar."""
    if max_size <= 0:
        return 0
    # half-cells round up
    return int(math.floor(size / max_size * width + 0.5))


def render_bar(size: int, max_size: int, width: int = BAR_WIDTH) -> str:
    filled = bar_cells(size, max_size, width)
    return BAR_FILL * filled + BAR_EMPTY * (width - filled)


def no_groups_message(result: ScanResult) -> str:
    return f"No subdirectories found in {display_name(str(result.root))}"


def summary_line(result: ScanResult, formatter: Formatter = format_bytes_binary) -> str:
    t = result.totals
    return (
        f"Total: {formatter(t.total_size)} in {t.total_files} files, "
        f"{t.total_dirs} directories ({result.shown} shown)"
    )


def build_table(
    result: ScanResult,
    formatter: Formatter = format_bytes_binary,
    width: int = BAR_WIDTH,
) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Directory", style="cyan", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Usage", no_wrap=True)

    max_size = result.max_size
    total = result.totals.total_size
    for idx, (name, stats) in enumerate(result.groups, start=1):
        table.add_row(
            str(idx),
            Text(name),
            formatter(stats.size),
            str(stats.file_count),
            f"{percentage(stats.size, total):.1f}%",
            Text(render_bar(stats.size, max_size, width), style="green"),
        )
    return table


def render_text(
    result: ScanResult,
    console: Console,
    formatter: Formatter = format_bytes_binary,
    width: int = BAR_WIDTH,
) -> None:
    if not result.groups:
        console.print(Text(no_groups_message(result)))
    else:
        console.print(build_table(result, formatter, width))
    console.print(Text(summary_line(result, formatter), style="bold"))
    if result.skipped:
        console.print(Text(f"{result.skipped} entries could not be read and were skipped", style="yellow dim"))


def to_summary(result: ScanResult, formatter: Formatter = format_bytes_binary) -> Dict[str, Any]:
    total = result.totals.total_size
    directories: List[Dict[str, Any]] = [
        {
            "name": name,
            "size": stats.size,
            "size_human": formatter(stats.size),
            "file_count": stats.file_count,
            "percentage": percentage(stats.size, total),
        }
        for name, stats in result.groups
    ]
    return {
        "directories": directories,
        "summary": {
            "total_size": total,
            "total_size_human": formatter(total),
            "total_files": result.totals.total_files,
            "total_dirs": result.totals.total_dirs,
            "shown": result.shown,
        },
    }


def to_json(result: ScanResult, formatter: Formatter = format_bytes_binary) -> str:
    return json.dumps(to_summary(result, formatter), indent=2, ensure_ascii=False)
