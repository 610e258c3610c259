"""Subtree sizing, coordinate placement and the per-tree placement loop."""

import logging

from forest import assign_ownership, is_canonical_root, members_by_owner
from generations import resolve_generations
from graph import RelationshipGraph
from models import UNKNOWN, Layout, LayoutConfig, Position, SubtreeSize
from ordering import ChildOrdering


logger = logging.getLogger(__name__)

EMPTY = SubtreeSize(0, 0)


class SubtreeSizer:
    """Bottom-up horizontal footprint of each person's spouse and descendant cluster."""

    def __init__(
        self,
        graph: RelationshipGraph,
        ordering: ChildOrdering,
        owners: dict[int, int],
        config: LayoutConfig,
    ):
        self.graph = graph
        self.ordering = ordering
        self.owners = owners
        self.config = config
        self._sizes: dict[int, SubtreeSize] = {}
        self._in_progress: set[int] = set()

    def owned_elsewhere(self, person_id: int, root_id: int) -> bool:
        owner = self.owners.get(person_id)
        return owner is not None and owner != root_id

    def parents_width(self, person_id: int) -> int:
        """Width of the main person plus all spouses side by side."""
        n = len(self.graph.spouses_of(person_id))
        if n == 0:
            return self.config.box_width
        return (n + 1) * self.config.box_width + n * self.config.spouse_gap

    def children_width(self, kids: tuple[int, ...], root_id: int) -> int:
        if not kids:
            return 0
        total = sum(self.size(kid, root_id).width for kid in kids)
        return total + (len(kids) - 1) * self.config.sibling_gap

    def size(self, person_id: int, root_id: int) -> SubtreeSize:
        """
        Footprint of `person_id` within the tree owned by `root_id`.

        People owned by another root take no space here. Sizes are memoized per
        person; a person reached again while its own size is being computed (cyclic
        parent data) counts as empty.
        """
        if self.owned_elsewhere(person_id, root_id):
            return EMPTY
        if person_id in self._sizes:
            return self._sizes[person_id]
        if person_id in self._in_progress:
            return EMPTY

        self._in_progress.add(person_id)
        try:
            parents_w = self.parents_width(person_id)
            kids_w = self.children_width(self.ordering.children_of(person_id), root_id)
        finally:
            self._in_progress.discard(person_id)

        width = max(parents_w, kids_w)
        self._sizes[person_id] = SubtreeSize(width, width // 2)
        return self._sizes[person_id]


class Placer:
    """Top-down assignment of absolute coordinates, one pass per layout."""

    def __init__(
        self,
        graph: RelationshipGraph,
        ordering: ChildOrdering,
        sizer: SubtreeSizer,
        generations: dict[int, int],
    ):
        self.graph = graph
        self.ordering = ordering
        self.generations = generations
        self.sizer = sizer
        self.config = sizer.config
        self.positions: dict[int, Position] = {}

    def _fills_slot(self, member: int, person_id: int, root_id: int) -> bool:
        if member not in self.graph or member in self.positions:
            return False
        if member == person_id:
            return True
        return (
            not self.sizer.owned_elsewhere(member, root_id)
            and self.generations.get(member) == self.generations.get(person_id)
        )

    def place(self, person_id: int, x_left: int, y_top: int, root_id: int):
        """
        Position `person_id`, its spouses and, recursively, its children.

        The parents cluster and the children cluster are both centered on
        `x_left + center_offset`. Anyone already placed in this pass is left alone, and
        spouses owned by another tree or belonging to another generation leave their
        slot empty.
        """
        if self.sizer.owned_elsewhere(person_id, root_id):
            return
        if person_id in self.positions:
            return

        cfg = self.config
        center = x_left + self.sizer.size(person_id, root_id).center_offset

        # 1. Parents cluster: [left spouses] [main person] [right spouses]
        spouses = self.graph.spouses_of(person_id)
        num_left = len(spouses) // 2
        slots = (*spouses[:num_left], person_id, *spouses[num_left:])

        cursor = center - self.sizer.parents_width(person_id) // 2
        for member in slots:
            # Skipped spouses (dangling, other tree, other tier) keep their slot
            if self._fills_slot(member, person_id, root_id):
                self.positions[member] = Position(cursor, y_top)
            cursor += cfg.box_width + cfg.spouse_gap

        # 2. Children cluster
        kids = self.ordering.children_of(person_id)
        if not kids:
            return

        child_x = center - self.sizer.children_width(kids, root_id) // 2
        for kid in kids:
            self.place(kid, child_x, y_top + cfg.generation_gap, root_id)
            child_x += self.sizer.size(kid, root_id).width + cfg.sibling_gap


def component_neighbors(
    graph: RelationshipGraph, ordering: ChildOrdering, owners: dict[int, int]
) -> dict[int, set[int]]:
    """For each root, the parents, spouses and children of all of its members."""
    neighbors: dict[int, set[int]] = {}
    for root_id, members in members_by_owner(owners).items():
        adjacent: set[int] = set()
        for pid in members:
            person = graph.get(pid)
            if person is None:
                continue
            adjacent.update((person.father_id, person.mother_id))
            adjacent.update(graph.spouses_of(pid))
            adjacent.update(ordering.children_of(pid))
        adjacent.discard(UNKNOWN)
        neighbors[root_id] = adjacent
    return neighbors


def bounding_box(positions: dict[int, Position], config: LayoutConfig) -> tuple[int, int]:
    """Extent of all placed boxes, padded by the configured margin."""
    max_x = max((pos.x + config.box_width for pos in positions.values()), default=0)
    max_y = max((pos.y + config.box_height for pos in positions.values()), default=0)
    return max_x + config.margin, max_y + config.margin


def compute_layout(graph: RelationshipGraph, config: LayoutConfig | None = None) -> Layout:
    """
    Run a full layout pass over the relationship graph.

    Generations are resolved, the graph is partitioned into trees owned by canonical
    roots, and each tree is sized and placed left to right. A tree related to one
    already placed is separated by the sibling gap, an unrelated one by the tree gap.
    The graph is not modified and no reference to it is kept.

    Args:
        graph: The relationship graph to lay out
        config: Box size and spacing; defaults to LayoutConfig()

    Returns:
        A Layout with generations, owners, positions of placed people and the
        bounding box.
    """
    config = config or LayoutConfig()

    generations = resolve_generations(graph)
    ordering = ChildOrdering(graph)
    owners = assign_ownership(graph, generations, ordering)
    sizer = SubtreeSizer(graph, ordering, owners, config)
    placer = Placer(graph, ordering, sizer, generations)
    neighbors = component_neighbors(graph, ordering, owners)

    cursor_x = config.origin_x
    for person in graph:
        root_id = person.id
        if root_id in placer.positions:
            continue
        if not is_canonical_root(graph, generations, root_id) or owners.get(root_id) != root_id:
            continue

        gap = 0
        if placer.positions:
            connected = not neighbors.get(root_id, set()).isdisjoint(placer.positions)
            gap = config.sibling_gap if connected else config.tree_gap
            logger.debug("Root %s connected to placed trees: %s", root_id, connected)
        cursor_x += gap

        size = sizer.size(root_id, root_id)
        placer.place(root_id, cursor_x, config.origin_y, root_id)
        logger.debug("Placed tree %s at x=%d, width %d", root_id, cursor_x, size.width)
        cursor_x += size.width

    width, height = bounding_box(placer.positions, config)
    return Layout(
        generations=generations,
        owners={pid: root for pid, root in owners.items() if pid in graph},
        positions=dict(placer.positions),
        width=width,
        height=height,
    )
