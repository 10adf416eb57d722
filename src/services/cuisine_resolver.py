"""Cuisine resolution for imported recipes.

The feed carries a free-text "Country" column. It is mapped onto a canonical
cuisine name through a fixed lookup table, then matched case-insensitively
against existing cuisines; unknown cuisines are created on demand and stay
available to later rows and later imports.
"""

import logging
import re

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.cuisine import Cuisine
from src.services.import_errors import CuisineResolutionError

logger = logging.getLogger(__name__)

# Country (lowercase) -> canonical cuisine name
COUNTRY_TO_CUISINE: dict[str, str] = {
    "italy": "Italian",
    "france": "French",
    "spain": "Spanish",
    "portugal": "Portuguese",
    "greece": "Greek",
    "germany": "German",
    "austria": "Austrian",
    "switzerland": "Swiss",
    "poland": "Polish",
    "hungary": "Hungarian",
    "russia": "Russian",
    "ireland": "Irish",
    "united kingdom": "British",
    "uk": "British",
    "great britain": "British",
    "england": "British",
    "scotland": "Scottish",
    "sweden": "Swedish",
    "norway": "Norwegian",
    "denmark": "Danish",
    "united states": "American",
    "united states of america": "American",
    "usa": "American",
    "us": "American",
    "america": "American",
    "canada": "Canadian",
    "mexico": "Mexican",
    "brazil": "Brazilian",
    "peru": "Peruvian",
    "argentina": "Argentinian",
    "jamaica": "Jamaican",
    "cuba": "Cuban",
    "china": "Chinese",
    "japan": "Japanese",
    "korea": "Korean",
    "south korea": "Korean",
    "thailand": "Thai",
    "vietnam": "Vietnamese",
    "malaysia": "Malaysian",
    "indonesia": "Indonesian",
    "singapore": "Singaporean",
    "philippines": "Filipino",
    "india": "Indian",
    "pakistan": "Pakistani",
    "sri lanka": "Sri Lankan",
    "lebanon": "Lebanese",
    "turkey": "Turkish",
    "iran": "Persian",
    "israel": "Israeli",
    "morocco": "Moroccan",
    "egypt": "Egyptian",
    "ethiopia": "Ethiopian",
    "nigeria": "Nigerian",
    "south africa": "South African",
    "australia": "Australian",
    "new zealand": "New Zealand",
}

_WHITESPACE = re.compile(r"\s+")


def canonical_cuisine_name(country: str) -> str:
    """Map a country label to its cuisine name, or return the label itself."""
    cleaned = _WHITESPACE.sub(" ", country.strip())
    return COUNTRY_TO_CUISINE.get(cleaned.lower(), cleaned)


class CuisineResolver:
    """Resolves free-text country labels to cuisine ids."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_name(self, name: str) -> Cuisine | None:
        """Case-insensitive exact lookup, preferring an active cuisine."""
        return (
            self.db.query(Cuisine)
            .filter(func.lower(Cuisine.name) == name.lower())
            .order_by(Cuisine.is_active.desc(), Cuisine.id)
            .first()
        )

    def resolve(self, country: str) -> int:
        """Return the id of the cuisine for a country, creating it if needed.

        Raises:
            CuisineResolutionError: if the country is blank or the database
                lookup/create fails.
        """
        if not country or not country.strip():
            raise CuisineResolutionError("Cannot resolve cuisine from empty country")

        name = canonical_cuisine_name(country)
        try:
            existing = self.find_by_name(name)
            if existing:
                return existing.id

            cuisine = Cuisine(name=name, is_active=True)
            self.db.add(cuisine)
            self.db.commit()
            self.db.refresh(cuisine)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise CuisineResolutionError(f"Cannot resolve cuisine '{name}': {e}") from e

        logger.info(f"Created cuisine '{cuisine.name}' (id={cuisine.id}) from country '{country}'")
        return cuisine.id
