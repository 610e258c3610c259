"""Left-to-right ordering of a person's children, grouped by union."""

from graph import RelationshipGraph
from models import UNKNOWN


class ChildOrdering:
    """
    Ranks the children of a person so each union's children sit together.

    Children whose other parent is one of the first half of the person's spouses go
    left (keyed by spouse index), children of an unknown or unlisted other parent take
    the center slot, and children of the second half go right (keyed by index + 1).
    Ties break by ascending id. Results are cached for the lifetime of the instance,
    which is one layout pass.
    """

    def __init__(self, graph: RelationshipGraph):
        self.graph = graph
        self._cache: dict[int, tuple[int, ...]] = {}

    def children_of(self, person_id: int) -> tuple[int, ...]:
        if person_id not in self._cache:
            self._cache[person_id] = self._rank_children(person_id)
        return self._cache[person_id]

    def _rank_children(self, person_id: int) -> tuple[int, ...]:
        if person_id not in self.graph:
            return ()

        spouses = self.graph.spouses_of(person_id)

        # Collect children from every union this person is part of
        kids: set[int] = set(self.graph.children_of_parent(person_id))
        for sid in spouses:
            kids.update(self.graph.children_of_parent(sid))

        num_left = len(spouses) // 2
        spouse_index = {sid: i for i, sid in enumerate(spouses)}

        def rank(kid_id: int) -> tuple[int, int]:
            kid = self.graph.get(kid_id)
            other_id = kid.mother_id if kid.father_id == person_id else kid.father_id
            if other_id == UNKNOWN or other_id not in spouse_index:
                return (num_left, kid_id)
            i = spouse_index[other_id]
            return (i if i < num_left else i + 1, kid_id)

        return tuple(sorted(kids, key=rank))
