"""Recipe model."""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe model for community-shared recipes."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    cuisine_id = Column(Integer, ForeignKey("cuisines.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    ingredients = Column(Text, nullable=False)  # One ingredient per line
    instructions = Column(Text, nullable=False)  # One step per line
    helpful_notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    featured_image = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)

    # New recipes wait in the moderation queue until approved
    is_approved = Column(Boolean, nullable=False, default=False, index=True)

    # Relationships
    author = relationship("User", backref="recipes")
    cuisine = relationship("Cuisine", back_populates="recipes")

    @property
    def ingredient_lines(self) -> list[str]:
        """Ingredients split into individual lines."""
        return [line for line in (self.ingredients or "").split("\n") if line]

    @property
    def instruction_steps(self) -> list[str]:
        """Instructions split into individual steps."""
        return [line for line in (self.instructions or "").split("\n") if line]
