from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .models import Group, GroupStats

GroupsIn = Union[Mapping[str, GroupStats], Iterable[Tuple[str, GroupStats]]]


def _items(groups: GroupsIn) -> List[Group]:
    if isinstance(groups, Mapping):
        return list(groups.items())
    return list(groups)


def filter_min_size(groups: GroupsIn, min_size: Optional[int]) -> List[Group]:
    """Drop groups strictly smaller than min_size. None keeps everything."""
    items = _items(groups)
    if min_size is None:
        return items
    return [(key, stats) for key, stats in items if stats.size >= min_size]


def rank(groups: GroupsIn) -> List[Group]:
    """Largest first; equal sizes fall back to the key so output is stable."""
    return sorted(_items(groups), key=lambda kv: (-kv[1].size, kv[0]))


def select(groups: GroupsIn, *, min_size: Optional[int] = None, top: int = 10) -> List[Group]:
    if top <= 0:
        return []
    return rank(filter_min_size(groups, min_size))[:top]
