"""Cuisine model."""

from sqlalchemy import Boolean, Column, Index, Integer, String, func
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Cuisine(Base, TimestampMixin):
    """Canonical cuisine label shared by imported and authored recipes."""

    __tablename__ = "cuisines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    recipes = relationship("Recipe", back_populates="cuisine")


# At most one cuisine per case-insensitive name
Index("uq_cuisines_name_lower", func.lower(Cuisine.name), unique=True)
