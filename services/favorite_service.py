"""
Favorites ledger - properties bookmarked by an anonymous browsing session.

The session id is an opaque client-generated string; it is never checked
against anything. Each (session_id, property_id) pair is stored once.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import models
from services.exceptions import PropertyNotFoundError
from services.property_service import get_property, newest_first

logger = logging.getLogger(__name__)


def find_favorite(db: Session, session_id: str, property_id: int) -> Optional[models.Favorite]:
    return db.query(models.Favorite).filter(
        models.Favorite.session_id == session_id,
        models.Favorite.property_id == property_id
    ).first()


def add_favorite(db: Session, session_id: str, property_id: int) -> models.Favorite:
    """Bookmarks a property for a session.

    Adding a pair that already exists returns the stored row untouched (same
    id and created_at). Raises PropertyNotFoundError when the property does
    not exist.
    """
    if get_property(db, property_id) is None:
        raise PropertyNotFoundError(property_id)

    existing = find_favorite(db, session_id, property_id)
    if existing:
        return existing

    favorite = models.Favorite(session_id=session_id, property_id=property_id)
    try:
        db.add(favorite)
        db.commit()
    except IntegrityError:
        # Another request stored the same pair between our lookup and insert
        db.rollback()
        existing = find_favorite(db, session_id, property_id)
        if existing is None:
            logger.exception("Add favorite failed for property %s", property_id)
            raise
        return existing
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Add favorite failed for property %s", property_id)
        raise

    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, session_id: str, property_id: int) -> bool:
    """Returns whether a stored pair was removed."""
    try:
        deleted = db.query(models.Favorite).filter(
            models.Favorite.session_id == session_id,
            models.Favorite.property_id == property_id
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Remove favorite failed for property %s", property_id)
        raise

    return deleted > 0


def list_favorites(db: Session, session_id: str) -> List[models.Property]:
    """Full property records bookmarked by the session, newest property first."""
    query = db.query(models.Property).join(
        models.Favorite, models.Favorite.property_id == models.Property.id
    ).filter(models.Favorite.session_id == session_id)
    return newest_first(query).all()


def favorite_property_ids(db: Session, session_id: str) -> set:
    """Ids of the properties bookmarked by the session."""
    rows = db.query(models.Favorite.property_id).filter(
        models.Favorite.session_id == session_id
    ).all()
    return {row[0] for row in rows}
