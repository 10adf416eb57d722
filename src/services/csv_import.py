"""Bulk recipe import from the CSV content feed.

Rows are processed strictly one at a time: a cuisine created by one row must
be visible to the rows after it, and the image host and S3 should only ever
see one request at a time from a job. Every row ends up either counted as a
success or described in the error list; only an unreadable feed aborts the
job.
"""

import logging
from dataclasses import dataclass, field, replace

from sqlalchemy.orm import Session

from src.services.csv_source import RawRow, decode_csv_payload, read_csv_rows
from src.services.cuisine_resolver import CuisineResolver
from src.services.image_service import ImageService
from src.services.import_errors import RowImportError, RowValidationError
from src.services.recipe_service import RecipeService
from src.services.row_validation import UNKNOWN_TITLE, validate_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one import job."""

    success_count: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def processed_count(self) -> int:
        return self.success_count + len(self.errors)

    def record_success(self) -> "ImportResult":
        return replace(self, success_count=self.success_count + 1)

    def record_error(self, message: str) -> "ImportResult":
        return replace(self, errors=(*self.errors, message))

    def to_dict(self) -> dict:
        return {"success_count": self.success_count, "errors": list(self.errors)}


def row_error_message(title: str | None, reason: str) -> str:
    return f'Error creating recipe "{title or UNKNOWN_TITLE}": {reason}'


class CsvImportService:
    """Drives each feed row through validation, cuisine, image and persistence."""

    def __init__(self, db: Session, image_service: ImageService | None = None):
        self.db = db
        self.image_service = image_service or ImageService()
        self.cuisine_resolver = CuisineResolver(db)
        self.recipe_service = RecipeService(db)

    def import_csv_bytes(self, raw: bytes, author_id: int) -> ImportResult:
        """Decode an uploaded file and import it."""
        return self.import_csv(decode_csv_payload(raw), author_id)

    def import_csv(self, csv_text: str, author_id: int) -> ImportResult:
        """Import every row of a CSV feed, attributing recipes to author_id.

        Raises:
            CsvStructureError: if the feed cannot be parsed; no row is
                processed in that case.
        """
        rows = read_csv_rows(csv_text)
        logger.info(f"Processing {len(rows)} recipes from CSV for user {author_id}")

        result = ImportResult()
        for row in rows:
            result = self._process_row(row, author_id, result)

        logger.info(
            f"CSV import finished: {result.success_count} imported, {len(result.errors)} failed"
        )
        return result

    def _process_row(self, row: RawRow, author_id: int, result: ImportResult) -> ImportResult:
        """Run one row to a terminal state and fold its outcome into result."""
        title = row.title or None
        try:
            draft = validate_row(row)
            cuisine_id = self.cuisine_resolver.resolve(draft.country)
            featured_image = self.image_service.resolve_image(draft.image_url, draft.title)
            self.recipe_service.create_imported_recipe(
                draft, cuisine_id, featured_image, author_id
            )
        except RowValidationError as e:
            logger.warning(f"Line {row.line_number}: {e}")
            return result.record_error(str(e))
        except RowImportError as e:
            message = row_error_message(e.title or title, str(e))
            logger.warning(f"Line {row.line_number}: {message}")
            return result.record_error(message)
        except Exception as e:
            self.db.rollback()
            message = row_error_message(title, str(e) or e.__class__.__name__)
            logger.error(f"Line {row.line_number}: {message}", exc_info=True)
            return result.record_error(message)

        return result.record_success()
