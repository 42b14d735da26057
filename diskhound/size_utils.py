"""
Size parsing and formatting helpers.

- parse_size_to_bytes: parse strings like "500K", "100MB", "1.5GiB" into an int byte count.
- format_bytes_binary: format bytes using binary units (KiB, MiB, GiB, TiB).

Every suffix is 1024-based, including the decimal-looking KB/MB/GB/TB spellings.
"""

from __future__ import annotations

import math
from typing import Optional

from .errors import ConfigurationError


_UNIT_MAP = {
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "gib": 1024**3,
    "t": 1024**4,
    "tb": 1024**4,
    "tib": 1024**4,
}


def parse_size_to_bytes(raw: Optional[str]) -> Optional[int]:
    """
    Parse a human-friendly size string into bytes.

    Accepted forms (case-insensitive, optional space before the unit):
    - "123" -> 123 bytes
    - "15B"
    - "500K", "500KB", "500KiB"
    - "1.5G", "1.5GB", "1.5GiB"

    Returns None if input is None or empty.
    Raises ConfigurationError on an unparseable number or unknown suffix.
    """
    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None

    i = 0
    n = len(s)
    while i < n and (s[i].isdigit() or s[i] == "."):
        i += 1
    num_str = s[:i]
    unit_str = s[i:].strip().lower()

    try:
        value = float(num_str)
    except ValueError as e:
        raise ConfigurationError(f"invalid size format: {raw!r}") from e
    if not math.isfinite(value):
        raise ConfigurationError(f"invalid size format: {raw!r} (number too large)")

    if not unit_str:
        return int(value)

    if unit_str not in _UNIT_MAP:
        raise ConfigurationError(
            f"invalid size format: {raw!r} (unknown unit {unit_str!r}; expected B, K, M, G or T)"
        )
    scaled = value * _UNIT_MAP[unit_str]
    if not math.isfinite(scaled):
        raise ConfigurationError(f"invalid size format: {raw!r} (number too large)")
    return int(scaled)


def format_bytes_binary(num_bytes: int) -> str:
    """
    Format a byte count using binary units with two decimals.

    Examples:
        0 -> "0 B"
        1024 -> "1.00 KiB"
        1048576 -> "1.00 MiB"
    """
    value = float(num_bytes)
    units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
    idx = 0
    while value >= 1024.0 and idx < len(units) - 1:
        value /= 1024.0
        idx += 1
    if units[idx] == "B":
        return f"{int(value)} {units[idx]}"
    return f"{value:.2f} {units[idx]}"
