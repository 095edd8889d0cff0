"""
Preference Graph - directed roommate-request relations derived from profiles.

An edge A -> B means A named B as a desired roommate. The edge set is derived
per invocation from the flat profile list and keyed by profile id; profiles
never hold references to each other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import networkx as nx

from rooming.graph.name_matching import NameMatchPolicy, get_match_policy, loose_name_match
from rooming.models import Profile

if TYPE_CHECKING:
    from rooming.config import ConfigLoader

logger = logging.getLogger(__name__)


def has_preference(a: Profile, b: Profile, policy: NameMatchPolicy = loose_name_match) -> bool:
    """True iff a names b among its preferences (sentinels never match)."""
    if a.id == b.id:
        return False
    return any(policy(name, b.name) for name in a.named_preferences)


def is_mutual(a: Profile, b: Profile, policy: NameMatchPolicy = loose_name_match) -> bool:
    return has_preference(a, b, policy) and has_preference(b, a, policy)


def dangling_targets(
    a: Profile, population: Iterable[Profile], policy: NameMatchPolicy = loose_name_match
) -> list[str]:
    """Named preferences of a that match nobody in the population ("ghost" references)."""
    names = [p.name for p in population if p.id != a.id]
    return [target for target in a.named_preferences if not any(policy(target, name) for name in names)]


class PreferenceGraph:
    """Directed request graph over one population snapshot.

    Nodes are profile ids; an edge carries the raw requested string that
    produced it.
    """

    def __init__(self, population: Iterable[Profile], policy: NameMatchPolicy | None = None) -> None:
        self.policy: NameMatchPolicy = policy or loose_name_match
        self.profiles: dict[str, Profile] = {}
        self.graph = nx.DiGraph()

        for profile in population:
            self.profiles[profile.id] = profile
            self.graph.add_node(profile.id, name=profile.name)

        for a in self.profiles.values():
            for requested in a.named_preferences:
                for b in self.profiles.values():
                    if b.id != a.id and self.policy(requested, b.name):
                        self.graph.add_edge(a.id, b.id, requested=requested)

        logger.debug(
            f"Preference graph built with {self.graph.number_of_nodes()} profiles "
            f"and {self.graph.number_of_edges()} requests"
        )

    @classmethod
    def from_config(cls, population: Iterable[Profile], config: ConfigLoader) -> PreferenceGraph:
        policy = get_match_policy(config.get_str("preferences.name_matching", default="loose"))
        return cls(population, policy)

    def __contains__(self, profile: object) -> bool:
        return isinstance(profile, Profile) and profile.id in self.profiles

    @property
    def population(self) -> list[Profile]:
        return list(self.profiles.values())

    def has_preference(self, a: Profile, b: Profile) -> bool:
        if a.id in self.profiles and b.id in self.profiles:
            return bool(self.graph.has_edge(a.id, b.id))
        return has_preference(a, b, self.policy)

    def is_mutual(self, a: Profile, b: Profile) -> bool:
        return self.has_preference(a, b) and self.has_preference(b, a)

    def is_linked(self, a: Profile, b: Profile) -> bool:
        """True when either profile named the other."""
        return self.has_preference(a, b) or self.has_preference(b, a)

    def targets_of(self, profile: Profile) -> list[Profile]:
        """Profiles that this profile's requests resolve to."""
        if profile.id not in self.profiles:
            return [p for p in self.profiles.values() if has_preference(profile, p, self.policy)]
        return [self.profiles[pid] for pid in self.graph.successors(profile.id)]

    def requesters_of(self, profile: Profile) -> list[Profile]:
        if profile.id not in self.profiles:
            return []
        return [self.profiles[pid] for pid in self.graph.predecessors(profile.id)]

    def dangling_targets(self, profile: Profile, population: Iterable[Profile] | None = None) -> list[str]:
        return dangling_targets(profile, self.profiles.values() if population is None else population, self.policy)

    def mutual_pairs(self) -> list[tuple[Profile, Profile]]:
        """Every mutual pair once, ordered by profile id."""
        pairs = []
        for a_id, b_id in self.graph.edges:
            if a_id < b_id and self.graph.has_edge(b_id, a_id):
                pairs.append((self.profiles[a_id], self.profiles[b_id]))
        return sorted(pairs, key=lambda pair: (pair[0].id, pair[1].id))

    def friend_groups(self) -> list[list[Profile]]:
        """Connected components of the mutual-request subgraph (size >= 2)."""
        mutual = nx.Graph()
        mutual.add_edges_from((a.id, b.id) for a, b in self.mutual_pairs())
        groups = [
            sorted((self.profiles[pid] for pid in component), key=lambda p: p.id)
            for component in nx.connected_components(mutual)
        ]
        return sorted(groups, key=lambda members: members[0].id)

    def ghost_references(self) -> dict[str, list[str]]:
        """Map of profile id to the requests that match nobody in the population."""
        ghosts = {}
        for profile in self.profiles.values():
            dangling = self.dangling_targets(profile)
            if dangling:
                ghosts[profile.id] = dangling
        return ghosts
