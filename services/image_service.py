"""
Image service - property images and the single-primary-image rule.

At most one image per property may be primary. Whenever an image is written
with is_primary set, its siblings are demoted first, and both statements
commit together. The parent property row is locked for the duration so two
concurrent primary assignments cannot interleave (databases without row
locks, such as SQLite, serialize writers anyway).
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
from services.exceptions import PropertyNotFoundError

logger = logging.getLogger(__name__)


def _lock_property(db: Session, property_id: int) -> Optional[models.Property]:
    return (
        db.query(models.Property)
        .filter(models.Property.id == property_id)
        .with_for_update()
        .first()
    )


def _demote_siblings(db: Session, property_id: int, keep_image_id: Optional[int] = None) -> int:
    """Clear is_primary on every image of the property except `keep_image_id`."""
    query = db.query(models.PropertyImage).filter(
        models.PropertyImage.property_id == property_id,
        models.PropertyImage.is_primary.is_(True)
    )
    if keep_image_id is not None:
        query = query.filter(models.PropertyImage.id != keep_image_id)
    return query.update({models.PropertyImage.is_primary: False}, synchronize_session="fetch")


def add_image(db: Session, image_data: schemas.ImageCreate) -> models.PropertyImage:
    """Attaches an image URL to an existing property.

    Raises PropertyNotFoundError, without writing anything, when the property
    does not exist.
    """
    if _lock_property(db, image_data.property_id) is None:
        db.rollback()
        raise PropertyNotFoundError(image_data.property_id)

    new_image = models.PropertyImage(
        property_id=image_data.property_id,
        image_url=str(image_data.image_url),
        alt_text=image_data.alt_text,
        is_primary=image_data.is_primary,
        sort_order=image_data.sort_order
    )

    try:
        if image_data.is_primary:
            demoted = _demote_siblings(db, image_data.property_id)
            if demoted:
                logger.info("Demoted %s primary image(s) of property %s", demoted, image_data.property_id)
        db.add(new_image)
        db.commit()
        db.refresh(new_image)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property image creation failed for property %s", image_data.property_id)
        raise

    return new_image


def update_image(
    db: Session,
    image_id: int,
    image_data: schemas.ImageUpdate
) -> Optional[models.PropertyImage]:
    """Changes alt text, sort order or the primary flag of an image.

    Returns None when the image does not exist.
    """
    db_image = db.query(models.PropertyImage).filter(models.PropertyImage.id == image_id).first()
    if db_image is None:
        return None

    changes = image_data.model_dump(exclude_unset=True, exclude_none=True)

    try:
        if changes.get("is_primary"):
            _lock_property(db, db_image.property_id)
            _demote_siblings(db, db_image.property_id, keep_image_id=db_image.id)
        for field, value in changes.items():
            setattr(db_image, field, value)
        db.commit()
        db.refresh(db_image)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property image update failed for id %s", image_id)
        raise

    return db_image


def delete_image(db: Session, image_id: int) -> bool:
    try:
        deleted = (
            db.query(models.PropertyImage)
            .filter(models.PropertyImage.id == image_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Property image deletion failed for id %s", image_id)
        raise

    return deleted > 0
