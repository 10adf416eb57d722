"""Tests for row validation and normalization."""

import pytest

from src.services.csv_source import RawRow
from src.services.import_errors import RowValidationError
from src.services.row_validation import parse_keywords, validate_row


def make_row(**values) -> RawRow:
    columns = {
        "country": "Country",
        "title": "Recipe Title",
        "intro": "Intro",
        "ingredients": "Ingredients",
        "method": "Method",
        "notes": "Helpful Notes",
        "image": "Image url",
        "keywords": "Keywords",
    }
    return RawRow(line_number=2, values={columns[k]: v for k, v in values.items()})


def test_valid_row_normalized():
    """Test a complete row becomes a trimmed draft."""
    draft = validate_row(
        make_row(
            country=" Italy ",
            title="  Risotto ",
            intro=" Creamy rice ",
            ingredients="rice\r\n\r\n  stock \nparmesan",
            method="toast rice\nadd stock\n",
            notes=" stir often ",
            image=" https://example.com/r.jpg ",
            keywords="vegetarian, Rice; rice,,comfort",
        )
    )

    assert draft.title == "Risotto"
    assert draft.description == "Creamy rice"
    assert draft.ingredients == ["rice", "stock", "parmesan"]
    assert draft.instructions == ["toast rice", "add stock"]
    assert draft.helpful_notes == "stir often"
    assert draft.country == "Italy"
    assert draft.image_url == "https://example.com/r.jpg"
    assert draft.tags == ["vegetarian", "Rice", "comfort"]
    assert draft.line_number == 2


def test_optional_fields_default_empty():
    """Test only title, ingredients and method are required."""
    draft = validate_row(make_row(title="Tacos", ingredients="salt", method="cook"))

    assert draft.country == ""
    assert draft.image_url == ""
    assert draft.tags == []


@pytest.mark.parametrize(
    "values",
    [
        {"title": "Tacos", "ingredients": "salt"},
        {"title": "Tacos", "ingredients": "salt", "method": "   "},
        {"title": "Tacos", "ingredients": "\n\n", "method": "cook"},
    ],
)
def test_missing_fields_named_by_title(values):
    """Test a row with a title but missing content names the recipe."""
    with pytest.raises(RowValidationError) as exc_info:
        validate_row(make_row(**values))

    assert str(exc_info.value) == 'Skipping recipe "Tacos": Missing required fields'
    assert exc_info.value.title == "Tacos"


def test_missing_title_uses_placeholder():
    """Test a row without a title is reported as Unknown."""
    with pytest.raises(RowValidationError) as exc_info:
        validate_row(make_row(title="  ", ingredients="salt", method="cook"))

    assert str(exc_info.value) == 'Skipping recipe "Unknown": Missing required fields'
    assert exc_info.value.title is None


def test_parse_keywords_empty():
    """Test an empty keywords cell gives no tags."""
    assert parse_keywords("") == []
    assert parse_keywords(" , ; ") == []
