"""diskhound: find the subdirectories that use the most disk space."""

__version__ = "0.3.0"

from .aggregator import Aggregator
from .config import ScanConfig, build_scan_config, load_defaults
from .errors import ConfigurationError, DiskhoundError, FatalRootError, TraversalEntryError
from .keys import derive_key, effective_depth
from .models import GroupStats, ScanResult, Totals
from .renderer import render_text, to_json, to_summary
from .scanner import scan
from .selector import filter_min_size, rank, select
from .size_utils import format_bytes_binary, parse_size_to_bytes
from .walker import ErrorPolicy, WalkEntry, WalkError, Walker

__all__ = [
    "__version__",
    "Aggregator",
    "ScanConfig",
    "build_scan_config",
    "load_defaults",
    "ConfigurationError",
    "DiskhoundError",
    "FatalRootError",
    "TraversalEntryError",
    "derive_key",
    "effective_depth",
    "GroupStats",
    "ScanResult",
    "Totals",
    "render_text",
    "to_json",
    "to_summary",
    "scan",
    "filter_min_size",
    "rank",
    "select",
    "format_bytes_binary",
    "parse_size_to_bytes",
    "ErrorPolicy",
    "WalkEntry",
    "WalkError",
    "Walker",
]
