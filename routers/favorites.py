"""Session-scoped favorites."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

import schemas
from database import get_db
from services import favorite_service
from services.exceptions import PropertyNotFoundError

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.post("/", response_model=schemas.FavoriteResponse)
def add_favorite(
    favorite_data: schemas.FavoriteCreate,
    db: Session = Depends(get_db)
):
    """Bookmarks a property for a session. Repeating the call returns the same favorite."""
    try:
        return favorite_service.add_favorite(db, favorite_data.session_id, favorite_data.property_id)
    except PropertyNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")


@router.delete("/", response_model=schemas.OperationResult)
def remove_favorite(
    session_id: str = Query(..., min_length=1, max_length=255),
    property_id: int = Query(...),
    db: Session = Depends(get_db)
):
    """Removes a bookmark.

    A pair that was never bookmarked answers 404 "Favorite not found"; that is the
    HTTP form of the service returning False, matching the other delete routes.
    """
    if not favorite_service.remove_favorite(db, session_id, property_id):
        raise HTTPException(status_code=404, detail="Favorite not found")

    return {"success": True}


@router.get("/", response_model=List[schemas.PropertyResponse])
def get_favorites(
    session_id: str = Query(..., min_length=1, max_length=255),
    db: Session = Depends(get_db)
):
    """Retrieves the properties bookmarked by a session."""
    return favorite_service.list_favorites(db, session_id)
