"""Name normalization and matching policies for roommate requests."""

from __future__ import annotations

from collections.abc import Callable

NameMatchPolicy = Callable[[str, str], bool]


def normalize_name(name: str) -> str:
    """Normalize name for matching.

    1. Strip leading/trailing whitespace
    2. Convert to lowercase
    3. Remove all internal whitespace ("王 小明" and "王小明" are the same person)

    Args:
        name: The name to normalize

    Returns:
        Normalized name string
    """
    return "".join(name.lower().split())


def loose_name_match(requested: str, candidate: str) -> bool:
    """Substring containment in either direction after normalization.

    Tolerates nicknames and typos ("Ann" matches "Anna Lee") at the cost of
    false positives on short or common names.

    Examples:
        ("Ann", "Anna Lee") -> True
        ("anna lee", "Anna") -> True
        ("Bob", "Robert") -> False
        ("", "Anna") -> False
    """
    a = normalize_name(requested)
    b = normalize_name(candidate)
    if not a or not b:
        return False
    return a in b or b in a


def exact_name_match(requested: str, candidate: str) -> bool:
    """Exact equality after normalization."""
    a = normalize_name(requested)
    return bool(a) and a == normalize_name(candidate)


MATCH_POLICIES: dict[str, NameMatchPolicy] = {
    "loose": loose_name_match,
    "exact": exact_name_match,
}


def get_match_policy(name: str) -> NameMatchPolicy:
    """Look up a matching policy by its config name ("loose" or "exact")."""
    try:
        return MATCH_POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown name matching policy: '{name}'") from None
