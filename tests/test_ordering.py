from graph import RelationshipGraph
from models import Person
from ordering import ChildOrdering


def multi_spouse_family() -> RelationshipGraph:
    return RelationshipGraph(
        [
            Person(1, spouses=(2, 3, 4)),
            Person(2),
            Person(3),
            Person(4),
            Person(15, father_id=4, mother_id=1),
            Person(14, father_id=1, mother_id=99),
            Person(13, father_id=1),
            Person(12, father_id=1, mother_id=4),
            Person(11, father_id=1, mother_id=3),
            Person(10, father_id=1, mother_id=2),
        ]
    )


def test_children_grouped_by_union_around_center():
    ordering = ChildOrdering(multi_spouse_family())
    # Left union (2), center (unknown or unlisted other parent), then unions 3 and 4
    assert ordering.children_of(1) == (10, 13, 14, 11, 12, 15)


def test_children_of_a_spouse_with_another_partner_are_centered():
    graph = RelationshipGraph(
        [
            Person(1, spouses=(2, 3)),
            Person(2),
            Person(3),
            Person(7, father_id=1, mother_id=2),
            Person(8, father_id=50, mother_id=3),
            Person(9, father_id=1, mother_id=3),
        ]
    )
    assert ChildOrdering(graph).children_of(1) == (7, 8, 9)


def test_reverse_spouse_record_places_union_to_the_right(couple_with_child):
    ordering = ChildOrdering(couple_with_child)
    assert ordering.children_of(1) == (3,)
    assert ordering.children_of(2) == (3,)


def test_ordering_is_stable_and_idempotent():
    graph = multi_spouse_family()
    first = ChildOrdering(graph).children_of(1)
    ordering = ChildOrdering(graph)
    assert ordering.children_of(1) == first
    assert ordering.children_of(1) == first


def test_ties_break_by_ascending_id():
    graph = RelationshipGraph(
        [Person(1), Person(9, father_id=1), Person(4, father_id=1), Person(6, mother_id=1)]
    )
    assert ChildOrdering(graph).children_of(1) == (4, 6, 9)


def test_unknown_person_has_no_children():
    assert ChildOrdering(RelationshipGraph([Person(1)])).children_of(42) == ()
