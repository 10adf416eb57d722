"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.csv_import import CsvImportJobResponse, ImportResultResponse
from src.schemas.cuisine import CuisineResponse
from src.schemas.recipe import PendingRecipeResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "CuisineResponse",
    "PendingRecipeResponse",
    "ImportResultResponse",
    "CsvImportJobResponse",
]
