"""Exceptions raised by the CSV recipe import pipeline."""


class CsvImportError(Exception):
    """Base class for CSV import errors."""


class CsvStructureError(CsvImportError):
    """The payload cannot be read as a recipe CSV feed at all.

    Raised before any row is processed; aborts the whole job.
    """


class RowImportError(CsvImportError):
    """A single row failed; recorded against the job and skipped."""

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.title = title


class RowValidationError(RowImportError):
    """Required fields are missing or blank."""


class CuisineResolutionError(RowImportError):
    """The row's country could not be mapped to a cuisine."""


class RecipePersistenceError(RowImportError):
    """The recipe could not be written to the database."""
