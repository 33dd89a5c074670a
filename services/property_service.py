"""
Property service - listing, detail and create/update/delete operations.

Every function takes the request's database session as its first argument;
nothing here holds a session of its own.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
from services.property_filters import build_property_filters, combine_filters

logger = logging.getLogger(__name__)


def newest_first(query):
    """Order a property query by creation time, newest first, ties by id."""
    return query.order_by(models.Property.created_at.desc(), models.Property.id.desc())


def list_properties(db: Session, filters: Optional[schemas.PropertyFilters] = None) -> List[models.Property]:
    """Return the properties matching every field set in `filters`, newest first."""
    conditions = build_property_filters(filters)
    query = db.query(models.Property).filter(combine_filters(conditions))
    return newest_first(query).all()


def list_featured_properties(db: Session) -> List[models.Property]:
    return list_properties(db, schemas.PropertyFilters(is_featured=True))


def get_property(db: Session, property_id: int) -> Optional[models.Property]:
    return db.query(models.Property).filter(models.Property.id == property_id).first()


def shape_property_detail(rows) -> Optional[schemas.PropertyWithImages]:
    """Group (property, image) join rows under their property.

    Rows arrive already ordered; a property without images comes back as a
    single row whose image is None.
    """
    if not rows:
        return None

    db_property = rows[0][0]
    images = [
        schemas.ImageResponse.model_validate(image)
        for _, image in rows
        if image is not None
    ]
    detail = schemas.PropertyResponse.model_validate(db_property).model_dump()
    return schemas.PropertyWithImages(**detail, images=images)


def get_property_detail(db: Session, property_id: int) -> Optional[schemas.PropertyWithImages]:
    """Fetch a property joined with its images, ordered by sort_order."""
    rows = (
        db.query(models.Property, models.PropertyImage)
        .outerjoin(models.PropertyImage, models.PropertyImage.property_id == models.Property.id)
        .filter(models.Property.id == property_id)
        .order_by(models.PropertyImage.sort_order.asc(), models.PropertyImage.id.asc())
        .all()
    )
    return shape_property_detail(rows)


def create_property(db: Session, property_data: schemas.PropertyCreate) -> models.Property:
    """Creates a new property listing; created_at and updated_at start out equal."""
    now = models.utcnow()
    new_prop = models.Property(**property_data.model_dump(), created_at=now, updated_at=now)

    try:
        db.add(new_prop)
        db.commit()
        db.refresh(new_prop)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property creation failed")
        raise

    logger.info("Created property %s (%s)", new_prop.id, new_prop.title)
    return new_prop


def update_property(
    db: Session,
    property_id: int,
    property_data: schemas.PropertyUpdate
) -> Optional[models.Property]:
    """Applies the fields sent by the client and refreshes updated_at.

    Returns None when the property does not exist.
    """
    db_property = get_property(db, property_id)
    if db_property is None:
        return None

    changes = property_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(db_property, field, value)
    db_property.updated_at = models.utcnow()

    try:
        db.commit()
        db.refresh(db_property)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property update failed for id %s", property_id)
        raise

    logger.info("Updated property %s: %s", property_id, sorted(changes))
    return db_property


def delete_property(db: Session, property_id: int) -> bool:
    """Deletes a property; its images and favorites go with it via ON DELETE CASCADE."""
    try:
        deleted = (
            db.query(models.Property)
            .filter(models.Property.id == property_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property deletion failed for id %s", property_id)
        raise

    if deleted:
        logger.info("Deleted property %s", property_id)
    return deleted > 0
