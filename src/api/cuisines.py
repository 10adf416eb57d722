"""Cuisine API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.cuisine import Cuisine
from src.schemas.cuisine import CuisineResponse

router = APIRouter(prefix="/api/v1/cuisines", tags=["cuisines"])


@router.get("", response_model=list[CuisineResponse])
def list_cuisines(db: Annotated[Session, Depends(get_db)]):
    """List active cuisines by name."""
    return db.query(Cuisine).filter(Cuisine.is_active.is_(True)).order_by(Cuisine.name).all()
