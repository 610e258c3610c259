from graph import RelationshipGraph
from models import Person


def test_get_returns_none_for_dangling_ids():
    graph = RelationshipGraph([Person(1, father_id=99)])
    assert graph.get(99) is None
    assert 99 not in graph


def test_person_normalizes_ex_spouses_and_unknown_ids():
    person = Person(1, spouses=(0, 2, 3), ex_spouses=frozenset({3, 4}))
    assert person.spouses == (2, 3)
    assert person.ex_spouses == frozenset({3})


def test_spouses_of_derives_one_sided_records():
    graph = RelationshipGraph(
        [Person(1, spouses=(3,)), Person(2, spouses=(1,)), Person(3, spouses=(1,)), Person(4, spouses=(1,))]
    )
    # Own record first, then one-sided reverse records in graph order
    assert graph.spouses_of(1) == (3, 2, 4)
    assert graph.recorded_spouses(1) == (3,)
    assert graph.spouses_of(2) == (1,)


def test_is_ex_spouse_reads_either_side():
    graph = RelationshipGraph([Person(1), Person(2, spouses=(1,), ex_spouses=frozenset({1}))])
    assert graph.is_ex_spouse(1, 2)
    assert graph.is_ex_spouse(2, 1)


def test_duplicate_ids_keep_last_record(caplog):
    graph = RelationshipGraph([Person(1, name="old"), Person(2), Person(1, name="new")])
    assert graph.ids == [1, 2]
    assert graph.get(1).name == "new"
    assert "Duplicate person id 1" in caplog.text


def test_to_networkx_edges(couple_with_child):
    G = couple_with_child.to_networkx()

    assert G.nodes[2]["person_name"] == "Eve"
    assert G.edges[1, 3]["relationship_type"] == "PARENT_OF"
    assert G.edges[2, 3]["relationship_type"] == "PARENT_OF"
    assert G.edges[2, 1]["relationship_type"] == "SPOUSE_OF"
    assert not G.has_edge(1, 2)
