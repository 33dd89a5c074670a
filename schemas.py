"""Pydantic schemas for data validation and serialization."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, HttpUrl, ConfigDict

from models import City, PropertyType

# Largest values of the decimal(12, 2) and decimal(8, 2) columns; anything
# at or below them still fits after rounding to cents
MAX_PRICE = 9999999999.99
MAX_AREA_SQM = 999999.99
# Smallest positive amount that does not round down to zero
MIN_AMOUNT = 0.01


class PropertyCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=MIN_AMOUNT, le=MAX_PRICE)
    city: City
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    area_sqm: float = Field(..., ge=MIN_AMOUNT, le=MAX_AREA_SQM)
    property_type: PropertyType
    is_featured: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Renovated flat in Alfama",
                "description": "Two bedroom flat with river views",
                "price": 450000.00,
                "city": "lisbon",
                "address": "Rua de São Miguel 12, Lisboa",
                "latitude": 38.7118,
                "longitude": -9.1289,
                "bedrooms": 2,
                "bathrooms": 1,
                "area_sqm": 85.5,
                "property_type": "apartment",
                "is_featured": False
            }
        }
    )


class PropertyUpdate(BaseModel):
    """Partial update; only the fields sent by the client are applied."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=MIN_AMOUNT, le=MAX_PRICE)
    city: Optional[City] = None
    address: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area_sqm: Optional[float] = Field(None, ge=MIN_AMOUNT, le=MAX_AREA_SQM)
    property_type: Optional[PropertyType] = None
    is_featured: Optional[bool] = None


class PropertyFilters(BaseModel):
    city: Optional[City] = None
    min_price: Optional[float] = Field(None, ge=0, le=MAX_PRICE)
    max_price: Optional[float] = Field(None, ge=0, le=MAX_PRICE)
    bedrooms: Optional[int] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None
    is_featured: Optional[bool] = None


class PropertyResponse(BaseModel):
    id: int
    title: str
    description: str
    price: float
    city: City
    address: str
    latitude: float
    longitude: float
    bedrooms: int
    bathrooms: int
    area_sqm: float
    property_type: PropertyType
    is_featured: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ImageCreate(BaseModel):
    property_id: int
    image_url: HttpUrl
    alt_text: str = ""
    is_primary: bool = False
    sort_order: int = 0


class ImageUpdate(BaseModel):
    alt_text: Optional[str] = None
    is_primary: Optional[bool] = None
    sort_order: Optional[int] = None


class ImageResponse(BaseModel):
    id: int
    property_id: int
    image_url: str
    alt_text: str
    is_primary: bool
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyWithImages(PropertyResponse):
    images: List[ImageResponse] = []


class FavoriteCreate(BaseModel):
    session_id: str = Field(..., min_length=1, max_length=255)
    property_id: int


class FavoriteResponse(FavoriteCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OperationResult(BaseModel):
    success: bool
