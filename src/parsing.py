"""CSV and GEDCOM loading into a relationship graph."""

import csv
import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from ged4py import GedcomReader

from graph import RelationshipGraph
from models import UNKNOWN, Person


logger = logging.getLogger(__name__)

CSV_COLUMNS = ("id", "name", "role", "gender", "father_id", "mother_id", "spouses")

# Spouse token like "12", "12x" or "12X" (trailing x marks an ex-spouse)
SPOUSE_TOKEN = re.compile(r"^\s*(\d+)\s*([xX]?)\s*$")


def extract_numeric_id(xref_id: str) -> int:
    """Extract numeric part from GEDCOM xref_id like '@I_347421849@' or 'I674624289'."""
    # Remove @ symbols and extract all digits
    digits = re.sub(r"[^0-9]", "", xref_id)
    if not digits:
        raise ValueError(f"No numeric ID found in: {xref_id}")
    return int(digits)


def parse_optional_id(value: str | None) -> int:
    """Parse a parent id column; blank means UNKNOWN, garbage raises ValueError."""
    if value is None or not value.strip():
        return UNKNOWN
    return int(value.strip())


def parse_spouses(value: str | None) -> tuple[tuple[int, ...], frozenset[int]]:
    """
    Parse a spouse column like "5x|6" into ordered spouse ids and the ex-spouse set.

    Unparsable tokens and zero ids are ignored.
    """
    spouses: list[int] = []
    ex_spouses: set[int] = set()
    for token in (value or "").split("|"):
        match = SPOUSE_TOKEN.match(token)
        if not match:
            if token.strip():
                logger.debug("Ignoring spouse token %r", token)
            continue
        sid = int(match.group(1))
        if sid == UNKNOWN:
            continue
        spouses.append(sid)
        if match.group(2):
            ex_spouses.add(sid)
    return tuple(spouses), frozenset(ex_spouses)


def parse_csv_rows(rows: Iterable[Sequence[str]]) -> RelationshipGraph:
    """
    Build a graph from CSV rows (header already removed).

    Rows with fewer than 7 columns or a non-numeric id, father or mother are skipped.
    """
    people: list[Person] = []

    for line_no, row in enumerate(rows, start=2):
        if not row or not any(cell.strip() for cell in row):
            continue
        if len(row) < len(CSV_COLUMNS):
            logger.warning("Line %d: expected %d columns, got %d; skipped", line_no, len(CSV_COLUMNS), len(row))
            continue

        try:
            person_id = int(row[0].strip())
            father_id = parse_optional_id(row[4])
            mother_id = parse_optional_id(row[5])
        except ValueError:
            logger.warning("Line %d: malformed id in %r; skipped", line_no, row[:6])
            continue

        spouses, ex_spouses = parse_spouses(row[6])
        people.append(
            Person(
                id=person_id,
                name=row[1].strip(),
                role=row[2].strip(),
                gender=row[3].strip(),
                father_id=father_id,
                mother_id=mother_id,
                spouses=spouses,
                ex_spouses=ex_spouses,
            )
        )

    return RelationshipGraph(people)


def load_csv(path: Path) -> RelationshipGraph:
    """Load a family CSV file (header row, optional UTF-8 BOM)."""
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        next(reader, None)  # Skip header
        return parse_csv_rows(reader)


def extract_name(indi) -> str:
    """Extract a display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        parts = [p for p in name_rec.value if p]
        return " ".join(parts) if parts else "Unknown"

    # Fallback: string format "Given /Surname/"
    return str(name_rec.value).replace("/", "").strip() or "Unknown"


def extract_gender(indi) -> str:
    """Map the SEX tag to the display labels used by the CSV format."""
    sex_rec = indi.sub_tag("SEX")
    sex = sex_rec.value if sex_rec else None
    return {"M": "Male", "F": "Female"}.get(sex, "")


def gedcom_id(rec) -> int:
    """Numeric id of a record, or UNKNOWN (with a warning) when its xref has no digits."""
    if rec is None or not rec.xref_id:
        return UNKNOWN
    try:
        return extract_numeric_id(rec.xref_id)
    except ValueError:
        logger.warning("Record %s has no numeric id; skipped", rec.xref_id)
        return UNKNOWN


def normalize_gedcom(reader: GedcomReader) -> RelationshipGraph:
    """
    Extract people and their relationships from parsed GEDCOM data.

    Each FAM record adds the spouse pair to both partners' spouse lists (as an
    ex-spouse when the family has a DIV event) and sets the children's parents.
    """
    records: dict[int, dict] = {}

    for rec in reader.records0("INDI"):
        indi_id = gedcom_id(rec)
        if indi_id == UNKNOWN:
            continue
        records[indi_id] = {
            "name": extract_name(rec),
            "gender": extract_gender(rec),
            "father_id": UNKNOWN,
            "mother_id": UNKNOWN,
            "spouses": [],
            "ex_spouses": set(),
        }

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        husb_id = gedcom_id(rec.sub_tag("HUSB"))
        wife_id = gedcom_id(rec.sub_tag("WIFE"))
        divorced = rec.sub_tag("DIV") is not None

        if husb_id != UNKNOWN and wife_id != UNKNOWN:
            for a, b in ((husb_id, wife_id), (wife_id, husb_id)):
                entry = records.get(a)
                if entry is None or b in entry["spouses"]:
                    continue
                entry["spouses"].append(b)
                if divorced:
                    entry["ex_spouses"].add(b)

        for child in rec.sub_tags("CHIL"):
            entry = records.get(gedcom_id(child))
            if entry is None:
                continue
            if husb_id != UNKNOWN:
                entry["father_id"] = husb_id
            if wife_id != UNKNOWN:
                entry["mother_id"] = wife_id

    return RelationshipGraph(
        Person(
            id=indi_id,
            name=data["name"],
            gender=data["gender"],
            father_id=data["father_id"],
            mother_id=data["mother_id"],
            spouses=tuple(data["spouses"]),
            ex_spouses=frozenset(data["ex_spouses"]),
        )
        for indi_id, data in records.items()
    )


def load_gedcom(path: Path) -> RelationshipGraph:
    """Parse a GEDCOM file into a relationship graph."""
    with GedcomReader(str(path)) as reader:
        return normalize_gedcom(reader)


def load_graph(path: Path) -> RelationshipGraph:
    """Load a graph, choosing the reader from the file extension."""
    if path.suffix.lower() in (".ged", ".gedcom"):
        return load_gedcom(path)
    return load_csv(path)
