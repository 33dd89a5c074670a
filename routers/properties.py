"""Search, detail view, and administration of property listings."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

import schemas
from database import get_db
from models import City, PropertyType
from services import property_service

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("/", response_model=List[schemas.PropertyResponse])
def get_properties(
        city: Optional[City] = None,
        min_price: Optional[float] = Query(None, ge=0, le=schemas.MAX_PRICE),
        max_price: Optional[float] = Query(None, ge=0, le=schemas.MAX_PRICE),
        bedrooms: Optional[int] = Query(None, ge=0),
        property_type: Optional[PropertyType] = None,
        is_featured: Optional[bool] = None,
        db: Session = Depends(get_db)
):
    """Retrieves properties, newest first. Every filter given must match."""
    filters = schemas.PropertyFilters(
        city=city,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        property_type=property_type,
        is_featured=is_featured
    )
    return property_service.list_properties(db, filters)


@router.get("/featured", response_model=List[schemas.PropertyResponse])
def get_featured_properties(db: Session = Depends(get_db)):
    """Featured listings, newest first."""
    return property_service.list_featured_properties(db)


@router.post("/", response_model=schemas.PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
        property_data: schemas.PropertyCreate,
        db: Session = Depends(get_db)
):
    """Creates a new property listing."""
    return property_service.create_property(db, property_data)


@router.get("/{property_id}", response_model=schemas.PropertyWithImages)
def get_property_details(
        property_id: int,
        db: Session = Depends(get_db)):
    """Detailed view for a specific property, images ordered by sort_order."""
    detail = property_service.get_property_detail(db, property_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Property not found")

    return detail


@router.patch("/{property_id}", response_model=schemas.PropertyResponse)
def update_property(
        property_id: int,
        property_data: schemas.PropertyUpdate,
        db: Session = Depends(get_db)
):
    """Updates only the fields present in the request body."""
    db_property = property_service.update_property(db, property_id, property_data)
    if db_property is None:
        raise HTTPException(status_code=404, detail="Property not found")

    return db_property


@router.delete("/{property_id}", response_model=schemas.OperationResult)
def delete_property(
        property_id: int,
        db: Session = Depends(get_db)
):
    """Deletes a property listing together with its images and favorites."""
    if not property_service.delete_property(db, property_id):
        raise HTTPException(status_code=404, detail="Property not found")

    return {"success": True}
