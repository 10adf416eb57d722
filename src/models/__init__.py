"""SQLAlchemy models."""

from src.models.csv_import_job import CsvImportJob
from src.models.cuisine import Cuisine
from src.models.recipe import Recipe
from src.models.user import User

__all__ = [
    "User",
    "Cuisine",
    "Recipe",
    "CsvImportJob",
]
