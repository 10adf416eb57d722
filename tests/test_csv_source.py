"""Tests for reading the recipe CSV feed."""

import pytest

from src.services.csv_source import decode_csv_payload, iter_csv_rows, read_csv_rows
from src.services.import_errors import CsvStructureError


def test_rows_keep_file_order(csv_feed):
    """Test rows come back in file order with named columns."""
    text = csv_feed(
        "Italy,Risotto,,rice,stir,,,",
        "Mexico,Tacos,,salt,cook,,,",
    )

    rows = read_csv_rows(text)

    assert [row.title for row in rows] == ["Risotto", "Tacos"]
    assert rows[1].get("Country") == "Mexico"
    assert rows[0].line_number == 2
    assert rows[1].line_number == 3


def test_multiline_quoted_cells(csv_feed):
    """Test quoted cells keep their embedded newlines."""
    text = csv_feed(
        'Italy,Carbonara,Roman classic,"spaghetti\neggs\nguanciale","boil\nmix",,,',
        "France,Crepes,,flour,whisk,,,",
    )

    rows = read_csv_rows(text)

    assert rows[0].get("Ingredients") == "spaghetti\neggs\nguanciale"
    assert rows[0].line_number == 2
    assert rows[1].line_number == 6


def test_short_rows_read_missing_cells_as_empty(csv_feed):
    """Test rows with fewer cells than the header are not structural errors."""
    rows = read_csv_rows(csv_feed("Mexico,Tacos,,salt"))

    assert rows[0].get("Method") == ""
    assert rows[0].get("Keywords") == ""


def test_blank_lines_skipped(csv_feed):
    """Test completely blank lines are not rows."""
    rows = read_csv_rows(csv_feed("Italy,Risotto,,rice,stir,,,", "", ",,,,,,,"))
    assert len(rows) == 1


def test_header_whitespace_and_bom_ignored():
    """Test header names are trimmed and a BOM is dropped."""
    raw = "\ufeffRecipe Title , Ingredients,Method\nSoup,water,boil\n".encode()

    rows = read_csv_rows(decode_csv_payload(raw))

    assert rows[0].title == "Soup"
    assert rows[0].get("Ingredients") == "water"


def test_iter_is_lazy(csv_feed):
    """Test rows are produced one at a time."""
    rows = iter_csv_rows(csv_feed("Italy,Risotto,,rice,stir,,,"))
    assert next(rows).title == "Risotto"
    with pytest.raises(StopIteration):
        next(rows)


def test_empty_or_header_only_payload_has_no_rows(csv_feed):
    """Test empty and header-only feeds simply have no rows."""
    assert read_csv_rows("") == []
    assert read_csv_rows("   \n") == []
    assert read_csv_rows(csv_feed()) == []


def test_missing_recipe_columns_still_readable():
    """Test a header without the recipe columns is not a framing error."""
    rows = read_csv_rows("Country,Recipe Title,Ingredients\nMexico,Tacos,salt\n")

    assert len(rows) == 1
    assert rows[0].title == "Tacos"
    assert rows[0].get("Method") == ""


def test_unterminated_quote_is_structural(csv_feed):
    """Test broken quoting fails before any row is returned."""
    text = csv_feed("Italy,Risotto,,rice,stir,,,", 'Mexico,"Tacos,,salt,cook,,,')

    with pytest.raises(CsvStructureError, match="Malformed CSV"):
        read_csv_rows(text)


def test_decode_latin1_fallback():
    """Test non-UTF-8 uploads are decoded as Latin-1."""
    raw = "Recipe Title,Ingredients,Method\nCrème brûlée,cream,bake\n".encode("latin-1")
    assert read_csv_rows(decode_csv_payload(raw))[0].title == "Crème brûlée"
