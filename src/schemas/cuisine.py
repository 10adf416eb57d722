"""Cuisine schemas."""

from pydantic import BaseModel, ConfigDict


class CuisineResponse(BaseModel):
    """Cuisine response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_active: bool
