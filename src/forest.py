"""Partitioning of the graph into independently laid out family trees."""

import logging
from collections import deque

from graph import RelationshipGraph
from ordering import ChildOrdering


logger = logging.getLogger(__name__)


def is_canonical_root(graph: RelationshipGraph, generations: dict[int, int], person_id: int) -> bool:
    """True for a generation 0 person whose id is the smallest within its union."""
    if generations.get(person_id) != 0:
        return False
    return person_id == min((person_id, *graph.spouses_of(person_id)))


def canonical_roots(graph: RelationshipGraph, generations: dict[int, int]) -> list[int]:
    """Canonical roots in graph order."""
    return [p.id for p in graph if is_canonical_root(graph, generations, p.id)]


def assign_ownership(
    graph: RelationshipGraph, generations: dict[int, int], ordering: ChildOrdering
) -> dict[int, int]:
    """
    Label every reachable person with the canonical root that claims it first.

    Each unclaimed canonical root runs a breadth-first traversal over parent-of edges
    and spouse edges between people of the same generation. A visited person is never
    revisited, so the result is a partition; people unreachable from any root stay
    unowned.

    Returns:
        A mapping of person id -> owning root id.
    """
    owners: dict[int, int] = {}
    visited: set[int] = set()

    for root_id in canonical_roots(graph, generations):
        if root_id in visited:
            continue

        visited.add(root_id)
        owners[root_id] = root_id
        queue = deque([root_id])

        while queue:
            current = queue.popleft()
            if current not in graph:
                continue
            # Spouses on another tier are left for the tree that places their own generation
            spouses = [
                sid for sid in graph.spouses_of(current) if generations.get(sid) == generations[current]
            ]
            for other in (*spouses, *ordering.children_of(current)):
                if other in visited:
                    continue
                visited.add(other)
                owners[other] = root_id
                queue.append(other)

    claimed = sum(1 for pid in owners if pid in graph)
    if claimed < len(graph):
        logger.debug("%d people unreachable from any root", len(graph) - claimed)
    return owners


def members_by_owner(owners: dict[int, int]) -> dict[int, list[int]]:
    """Group owned ids by their root."""
    members: dict[int, list[int]] = {}
    for pid, root_id in owners.items():
        members.setdefault(root_id, []).append(pid)
    return members
