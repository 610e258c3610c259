"""Data classes for family layout entities."""

from dataclasses import dataclass, field
from typing import NamedTuple


# Sentinel for a parent or relation that is not known
UNKNOWN = 0


@dataclass(frozen=True)
class Person:
    id: int
    name: str = ""
    role: str = ""
    gender: str = ""
    father_id: int = UNKNOWN
    mother_id: int = UNKNOWN
    spouses: tuple[int, ...] = ()
    ex_spouses: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self):
        # Normalize so that ex_spouses is always a subset of spouses
        spouses = tuple(s for s in self.spouses if s != UNKNOWN)
        object.__setattr__(self, "spouses", spouses)
        object.__setattr__(self, "ex_spouses", frozenset(self.ex_spouses) & frozenset(spouses))

    @property
    def is_female(self) -> bool:
        return self.gender.strip().lower() == "female"


@dataclass(frozen=True)
class LayoutConfig:
    """Box size and spacing (pixels) used by every layout component."""

    box_width: int = 200
    box_height: int = 75
    generation_gap: int = 150  # vertical distance between generations
    sibling_gap: int = 50  # horizontal gap between siblings
    spouse_gap: int = 25  # gap between spouses
    tree_gap: int = 0  # gap between unrelated family trees
    origin_x: int = 50
    origin_y: int = 50
    margin: int = 100  # padding added to the bounding box


class Position(NamedTuple):
    x: int
    y: int


class SubtreeSize(NamedTuple):
    width: int
    center_offset: int


@dataclass(frozen=True)
class Layout:
    """
    Result of one layout pass. Every pass builds fresh dicts, so a Layout never
    shares state with the graph or with another pass.
    """

    generations: dict[int, int]
    owners: dict[int, int]
    positions: dict[int, Position]
    width: int
    height: int

    def position(self, person_id: int) -> Position | None:
        """Return the placed position, or None if the person is unplaced."""
        return self.positions.get(person_id)

    def is_placed(self, person_id: int) -> bool:
        return person_id in self.positions

    def to_dict(self) -> dict:
        """Plain dict suitable for JSON export."""
        return {
            "width": self.width,
            "height": self.height,
            "people": [
                {
                    "id": pid,
                    "generation": self.generations.get(pid),
                    "owner": self.owners.get(pid),
                    "x": pos.x if pos else None,
                    "y": pos.y if pos else None,
                }
                for pid, pos in ((pid, self.positions.get(pid)) for pid in self.generations)
            ],
        }
