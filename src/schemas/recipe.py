"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PendingRecipeResponse(BaseModel):
    """Recipe waiting in the moderation queue."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    author_id: int
    cuisine_id: int | None
    ingredients: list[str] = Field(validation_alias="ingredient_lines")
    instructions: list[str] = Field(validation_alias="instruction_steps")
    helpful_notes: str | None
    tags: list[str]
    featured_image: str | None
    is_approved: bool
    created_at: datetime
