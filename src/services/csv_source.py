"""Reading the recipe CSV feed into row records."""

import csv
import io
from collections.abc import Iterator
from dataclasses import dataclass, field

from src.services.import_errors import CsvStructureError

COUNTRY = "Country"
RECIPE_TITLE = "Recipe Title"
INTRO = "Intro"
INGREDIENTS = "Ingredients"
METHOD = "Method"
HELPFUL_NOTES = "Helpful Notes"
IMAGE_URL = "Image url"
KEYWORDS = "Keywords"


@dataclass(frozen=True)
class RawRow:
    """One data line of the feed, keyed by column name."""

    line_number: int
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str) -> str:
        """Return the cell for a column, or an empty string if absent."""
        return self.values.get(column) or ""

    @property
    def title(self) -> str:
        return self.get(RECIPE_TITLE).strip()


def decode_csv_payload(raw: bytes) -> str:
    """Decode uploaded bytes, accepting UTF-8 (with or without BOM) or Latin-1."""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def _normalize_header(name: str | None) -> str:
    return (name or "").lstrip("\ufeff").strip()


def iter_csv_rows(text: str) -> Iterator[RawRow]:
    """Yield rows in file order.

    An empty or header-only payload yields nothing. Missing columns are not
    checked here; rows without the recipe fields fail validation one by one.

    Raises CsvStructureError as soon as the framing is found to be broken, so
    callers that must not act on a partially readable feed should use
    read_csv_rows instead.
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        header = next(reader, None)
        while header is not None and not any(cell.strip() for cell in header):
            header = next(reader, None)
        if header is None:
            return

        columns = [_normalize_header(name) for name in header]

        while True:
            start_line = reader.line_num + 1
            cells = next(reader, None)
            if cells is None:
                break
            if not any(cell.strip() for cell in cells):
                continue
            values = {}
            for index, column in enumerate(columns):
                if column and index < len(cells):
                    values[column] = cells[index]
            yield RawRow(line_number=start_line, values=values)
    except csv.Error as e:
        raise CsvStructureError(f"Malformed CSV near line {reader.line_num}: {e}") from e


def read_csv_rows(text: str) -> list[RawRow]:
    """Read every row up front so structural errors surface before any work."""
    return list(iter_csv_rows(text))
