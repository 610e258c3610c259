"""Generation (depth) assignment for every person in the graph."""

import logging

from graph import RelationshipGraph
from models import UNKNOWN


logger = logging.getLogger(__name__)

# Upper bound on resolution passes; guards against cyclic or non-converging data
MAX_PASSES = 20


def resolve_generations(graph: RelationshipGraph) -> dict[int, int]:
    """
    Assign each person an integer generation consistent with parent and spouse edges.

    Each pass visits unresolved people in graph order and tries, in turn:
    - one more than the deepest resolved parent,
    - the generation of any resolved spouse (spouses are peers),
    - generation 0 for a root (no father, no mother, no recorded spouses).

    Assignments are visible to later people within the same pass. Resolution stops
    after MAX_PASSES or once a pass makes no progress; anything still unresolved is
    forced to generation 0.

    Returns:
        A mapping of person id -> generation covering every person in the graph.
    """
    generations: dict[int, int] = {}

    passes = 0
    changed = True
    while changed and passes < MAX_PASSES:
        passes += 1
        changed = False

        for person in graph:
            if person.id in generations:
                continue

            parent_gens = [
                generations[pid]
                for pid in (person.father_id, person.mother_id)
                if pid in graph and pid in generations
            ]
            if parent_gens:
                generations[person.id] = max(parent_gens) + 1
                changed = True
                continue

            spouse_gen = next(
                (generations[sid] for sid in graph.spouses_of(person.id) if sid in generations),
                None,
            )
            if spouse_gen is not None:
                generations[person.id] = spouse_gen
                changed = True
                continue

            if (
                person.father_id == UNKNOWN
                and person.mother_id == UNKNOWN
                and not person.spouses
            ):
                generations[person.id] = 0
                changed = True

    unresolved = [person.id for person in graph if person.id not in generations]
    if unresolved:
        logger.debug("Forcing %d unresolved people to generation 0: %s", len(unresolved), unresolved)
    for pid in unresolved:
        generations[pid] = 0

    logger.debug("Generations resolved in %d passes", passes)
    return generations
