import os

# Render charts off-screen during tests
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest  # noqa: E402

from graph import RelationshipGraph  # noqa: E402
from models import Person  # noqa: E402


@pytest.fixture
def couple_with_child() -> RelationshipGraph:
    """Spouse recorded on one side only (2 lists 1), child 3 of the union."""
    return RelationshipGraph(
        [
            Person(1, name="Adam"),
            Person(2, name="Eve", gender="Female", spouses=(1,)),
            Person(3, name="Seth", father_id=1, mother_id=2),
        ]
    )


@pytest.fixture
def linked_trees() -> RelationshipGraph:
    """
    Two families joined by marriage (3 x 4) plus an unrelated multi-spouse family.

    30 has spouses 31 (ex) and 32; children 33 (with 31), 34 (with 32), 35 (unknown mother).
    """
    return RelationshipGraph(
        [
            Person(1),
            Person(2, spouses=(1,)),
            Person(3, father_id=1, mother_id=2, spouses=(4,)),
            Person(5),
            Person(6, spouses=(5,)),
            Person(4, father_id=5, mother_id=6),
            Person(30, spouses=(31, 32), ex_spouses=frozenset({31})),
            Person(31, gender="Female"),
            Person(32, gender="Female"),
            Person(33, father_id=30, mother_id=31),
            Person(34, father_id=30, mother_id=32),
            Person(35, father_id=30),
        ]
    )
