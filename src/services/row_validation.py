"""Validation and normalization of raw CSV rows into recipe drafts."""

import re
from dataclasses import dataclass, field

from src.services.csv_source import (
    COUNTRY,
    HELPFUL_NOTES,
    IMAGE_URL,
    INGREDIENTS,
    INTRO,
    KEYWORDS,
    METHOD,
    RECIPE_TITLE,
    RawRow,
)
from src.services.import_errors import RowValidationError

UNKNOWN_TITLE = "Unknown"

_KEYWORD_SEPARATORS = re.compile(r"[,;]")


@dataclass(frozen=True)
class RecipeDraft:
    """A validated row, ready for cuisine and image resolution."""

    title: str
    ingredients: list[str]
    instructions: list[str]
    description: str = ""
    helpful_notes: str = ""
    country: str = ""
    image_url: str = ""
    tags: list[str] = field(default_factory=list)
    line_number: int | None = None


def split_lines(value: str) -> list[str]:
    """Split multi-line cell text into trimmed, non-empty lines."""
    return [line.strip() for line in value.splitlines() if line.strip()]


def parse_keywords(value: str) -> list[str]:
    """Split a keywords cell into tags, dropping blanks and case-insensitive repeats."""
    tags: list[str] = []
    seen: set[str] = set()
    for keyword in _KEYWORD_SEPARATORS.split(value):
        keyword = keyword.strip()
        if keyword and keyword.lower() not in seen:
            seen.add(keyword.lower())
            tags.append(keyword)
    return tags


def missing_fields_message(title: str | None) -> str:
    return f'Skipping recipe "{title or UNKNOWN_TITLE}": Missing required fields'


def validate_row(row: RawRow) -> RecipeDraft:
    """Check required fields and normalize the row.

    Raises:
        RowValidationError: if the title, ingredients or method is blank.
    """
    title = row.get(RECIPE_TITLE).strip()
    ingredients = split_lines(row.get(INGREDIENTS))
    instructions = split_lines(row.get(METHOD))

    if not title or not ingredients or not instructions:
        raise RowValidationError(missing_fields_message(title), title=title or None)

    return RecipeDraft(
        title=title,
        ingredients=ingredients,
        instructions=instructions,
        description=row.get(INTRO).strip(),
        helpful_notes=row.get(HELPFUL_NOTES).strip(),
        country=row.get(COUNTRY).strip(),
        image_url=row.get(IMAGE_URL).strip(),
        tags=parse_keywords(row.get(KEYWORDS)),
        line_number=row.line_number,
    )
