from pathlib import Path

import pytest

from layout import compute_layout
from models import UNKNOWN
from parsing import extract_numeric_id, load_csv, load_gedcom, load_graph, parse_spouses


FAMILY_CSV = (
    "\ufeffid,name,role,gender,father_id,mother_id,spouses\r\n"
    "1,Ann,Grandmother,Female,0,0,\r\n"
    "2,Bob,Grandfather,Male,0,0,1\r\n"
    "3,Cy,Father,Male,1,2,5x|6\r\n"
    "4,too few columns\r\n"
    "x,Bad Id,,,0,0,\r\n"
    "5,Di,,Female,,,\r\n"
    "6,Eve,,Female,0,0,abc|0|7X\r\n"
)

FAMILY_GED = """0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 FAMS @F1@
0 @I2@ INDI
1 NAME Jane /Doe/
1 SEX F
1 FAMS @F1@
0 @I3@ INDI
1 NAME Jim /Smith/
1 SEX M
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
1 DIV Y
0 TRLR
"""


@pytest.fixture
def family_csv(tmp_path) -> Path:
    path = tmp_path / "family.csv"
    path.write_bytes(FAMILY_CSV.encode("utf-8"))
    return path


def test_parse_spouses_marks_ex_spouses():
    assert parse_spouses("5x|6") == ((5, 6), frozenset({5}))
    assert parse_spouses("2X") == ((2,), frozenset({2}))
    assert parse_spouses("") == ((), frozenset())
    assert parse_spouses("abc|0| 8 ") == ((8,), frozenset())


def test_extract_numeric_id():
    assert extract_numeric_id("@I_347421849@") == 347421849
    with pytest.raises(ValueError):
        extract_numeric_id("@F@")


def test_load_csv_skips_malformed_rows(family_csv):
    graph = load_csv(family_csv)

    assert graph.ids == [1, 2, 3, 5, 6]
    ann = graph.get(1)
    assert (ann.name, ann.role, ann.is_female) == ("Ann", "Grandmother", True)
    assert graph.get(2).spouses == (1,)


def test_load_csv_relationship_fields(family_csv):
    graph = load_csv(family_csv)

    cy = graph.get(3)
    assert (cy.father_id, cy.mother_id) == (1, 2)
    assert cy.spouses == (5, 6)
    assert cy.ex_spouses == frozenset({5})

    assert (graph.get(5).father_id, graph.get(5).mother_id) == (UNKNOWN, UNKNOWN)
    assert graph.get(6).spouses == (7,)
    assert graph.get(6).ex_spouses == frozenset({7})


def test_loaded_csv_lays_out(family_csv):
    layout = compute_layout(load_graph(family_csv))
    assert layout.generations[3] == 1
    assert all(layout.is_placed(pid) for pid in (1, 2, 3, 5, 6))


def test_missing_csv_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv(tmp_path / "missing.csv")


def test_load_gedcom(tmp_path):
    path = tmp_path / "family.ged"
    path.write_text(FAMILY_GED, encoding="utf-8")

    graph = load_gedcom(path)

    assert sorted(graph.ids) == [1, 2, 3]
    john = graph.get(1)
    assert "John" in john.name and john.gender == "Male"
    assert graph.get(2).is_female
    assert john.spouses == (2,)
    assert graph.get(2).spouses == (1,)
    assert graph.is_ex_spouse(1, 2)
    assert (graph.get(3).father_id, graph.get(3).mother_id) == (1, 2)
    assert load_graph(path).ids == graph.ids


def test_gedcom_record_without_numeric_id_is_skipped(tmp_path, caplog):
    text = FAMILY_GED.replace("0 @I3@ INDI", "0 @ISMITH@ INDI").replace("1 CHIL @I3@", "1 CHIL @ISMITH@")
    path = tmp_path / "family.ged"
    path.write_text(text, encoding="utf-8")

    graph = load_gedcom(path)

    assert sorted(graph.ids) == [1, 2]
    assert graph.get(1).spouses == (2,)
    assert "@ISMITH@" in caplog.text
