"""Room label ordering and generation.

Prior-room labels come from an external roster ("101", "B-203", "12A");
new rooms are labelled "<prefix>-<counter>". Sorting is natural, so
"M-2" comes before "M-10" and "101" before "1010".
"""

from __future__ import annotations

import re
from collections.abc import Collection
from functools import lru_cache

_CHUNK_RE = re.compile(r"(\d+)")


@lru_cache(maxsize=512)
def room_sort_key(label: str) -> tuple[tuple[int, int, str], ...]:
    """Get a natural sort key for a room label.

    Digit runs compare numerically, everything else case-insensitively.

    Examples:
        sorted(["M-10", "M-2", "M-1"], key=room_sort_key) -> ["M-1", "M-2", "M-10"]
        sorted(["201", "101A", "101"], key=room_sort_key) -> ["101", "101A", "201"]
    """
    key = []
    for chunk in _CHUNK_RE.split(label.strip()):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk), ""))
        else:
            key.append((1, 0, chunk.lower()))
    return tuple(key)


def format_room_label(prefix: str, counter: int) -> str:
    return f"{prefix}-{counter}"


def next_room_label(prefix: str, counter: int, taken: Collection[str]) -> tuple[str, int]:
    """Return the first free label at or after counter, and the counter it used.

    Args:
        prefix: Partition prefix (e.g. "M")
        counter: First counter value to try
        taken: Labels already in use (preserved prior rooms)

    Returns:
        (label, counter) where label == format_room_label(prefix, counter)
    """
    label = format_room_label(prefix, counter)
    while label in taken:
        counter += 1
        label = format_room_label(prefix, counter)
    return label, counter
