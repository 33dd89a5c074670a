"""Image records attached to property listings."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

import schemas
from database import get_db
from services import image_service
from services.exceptions import PropertyNotFoundError

router = APIRouter(prefix="/images", tags=["Property Images"])


@router.post("/", response_model=schemas.ImageResponse, status_code=status.HTTP_201_CREATED)
def create_property_image(
    image_data: schemas.ImageCreate,
    db: Session = Depends(get_db)
):
    """Adds an image URL to a property. A new primary image demotes the previous one."""
    try:
        return image_service.add_image(db, image_data)
    except PropertyNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")


@router.patch("/{image_id}", response_model=schemas.ImageResponse)
def update_property_image(
    image_id: int,
    image_data: schemas.ImageUpdate,
    db: Session = Depends(get_db)
):
    """Changes alt text, sort order or primary flag of an image."""
    db_image = image_service.update_image(db, image_id, image_data)
    if db_image is None:
        raise HTTPException(status_code=404, detail="Image not found")

    return db_image


@router.delete("/{image_id}", response_model=schemas.OperationResult)
def delete_property_image(image_id: int, db: Session = Depends(get_db)):
    """Deletes a single image record."""
    if not image_service.delete_image(db, image_id):
        raise HTTPException(status_code=404, detail="Image not found")

    return {"success": True}
