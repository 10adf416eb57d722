"""Recipe service for imported recipes and the moderation queue."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.recipe import Recipe
from src.services.import_errors import RecipePersistenceError
from src.services.row_validation import RecipeDraft

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_imported_recipe(
        self,
        draft: RecipeDraft,
        cuisine_id: int,
        featured_image: str,
        author_id: int,
    ) -> Recipe:
        """Create a moderation-pending recipe from a validated import row.

        Raises:
            RecipePersistenceError: if the database rejects the write.
        """
        recipe = Recipe(
            author_id=author_id,
            cuisine_id=cuisine_id,
            title=draft.title,
            description=draft.description,
            ingredients="\n".join(draft.ingredients),
            instructions="\n".join(draft.instructions),
            helpful_notes=draft.helpful_notes or None,
            tags=list(draft.tags),
            featured_image=featured_image or None,
            images=[],
            is_approved=False,
        )

        try:
            self.db.add(recipe)
            self.db.commit()
            self.db.refresh(recipe)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecipePersistenceError(str(e), title=draft.title) from e

        logger.info(f"Created recipe: {recipe.title} (id={recipe.id})")
        return recipe

    def list_pending(self, limit: int = 50) -> list[Recipe]:
        """Recipes waiting for approval, oldest first."""
        return (
            self.db.query(Recipe)
            .filter(Recipe.is_approved.is_(False))
            .order_by(Recipe.created_at, Recipe.id)
            .limit(limit)
            .all()
        )
