"""Relationship graph snapshot and NetworkX export."""

import logging
from collections.abc import Iterable, Iterator

import networkx as nx

from models import UNKNOWN, Person


logger = logging.getLogger(__name__)


class RelationshipGraph:
    """
    Immutable mapping of person id -> Person, in insertion order.

    Spouse relations are directed edges recorded on one side only. The graph never
    assumes the reverse entry exists; `spouses_of` derives it instead.
    """

    def __init__(self, people: Iterable[Person] = ()):
        self._people: dict[int, Person] = {}
        for person in people:
            if person.id in self._people:
                logger.warning("Duplicate person id %s: later record replaces earlier one", person.id)
            self._people[person.id] = person

        # parent id -> child ids, in graph order
        self._children_by_parent: dict[int, list[int]] = {}
        for person in self._people.values():
            for parent_id in (person.father_id, person.mother_id):
                if parent_id == UNKNOWN:
                    continue
                kids = self._children_by_parent.setdefault(parent_id, [])
                if person.id not in kids:
                    kids.append(person.id)

        # person id -> people recording them as spouse without being recorded back
        self._reverse_spouses: dict[int, list[int]] = {}
        for person in self._people.values():
            for sid in person.spouses:
                spouse = self._people.get(sid)
                if spouse is not None and person.id in spouse.spouses:
                    continue
                reverse = self._reverse_spouses.setdefault(sid, [])
                if person.id not in reverse and person.id != sid:
                    reverse.append(person.id)

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._people.values())

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    @property
    def ids(self) -> list[int]:
        return list(self._people)

    def get(self, person_id: int) -> Person | None:
        """Return the person, or None for unknown and dangling ids."""
        return self._people.get(person_id)

    def recorded_spouses(self, person_id: int) -> tuple[int, ...]:
        person = self._people.get(person_id)
        return person.spouses if person else ()

    def spouses_of(self, person_id: int) -> tuple[int, ...]:
        """Recorded spouses in order, followed by one-sided reverse spouse records."""
        own = self.recorded_spouses(person_id)
        extra = [sid for sid in self._reverse_spouses.get(person_id, []) if sid not in own]
        return own + tuple(extra)

    def is_ex_spouse(self, a: int, b: int) -> bool:
        pa = self._people.get(a)
        pb = self._people.get(b)
        return bool((pa and b in pa.ex_spouses) or (pb and a in pb.ex_spouses))

    def children_of_parent(self, parent_id: int) -> list[int]:
        """Ids of everyone listing `parent_id` as father or mother (unordered by rank)."""
        return list(self._children_by_parent.get(parent_id, []))

    def to_networkx(self) -> nx.DiGraph:
        """
        Build a NetworkX directed graph of the relationships.

        Person nodes carry `person_name`, `role` and `gender`. Edges carry a
        `relationship_type` of PARENT_OF (parent -> child) or SPOUSE_OF (recorded
        side -> spouse) plus an `ex` flag. Dangling ids become bare nodes.
        """
        G = nx.DiGraph()

        # Note: use 'person_name' instead of 'name' to stay clear of graph attribute names
        for p in self._people.values():
            G.add_node(p.id, person_name=p.name, role=p.role, gender=p.gender)

        for p in self._people.values():
            for parent_id in (p.father_id, p.mother_id):
                if parent_id != UNKNOWN:
                    G.add_edge(parent_id, p.id, relationship_type="PARENT_OF")
            for sid in p.spouses:
                G.add_edge(p.id, sid, relationship_type="SPOUSE_OF", ex=sid in p.ex_spouses)

        return G
