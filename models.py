"""SQLAlchemy database models for properties, their images, and session favorites."""
import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, Enum,
    Boolean, ForeignKey, DateTime, UniqueConstraint
)
from sqlalchemy.orm import relationship

from coercion import ExactDecimal
from database import Base


def utcnow():
    return datetime.now(timezone.utc)


class City(str, enum.Enum):
    LISBON = "lisbon"
    PORTO = "porto"
    ALGARVE = "algarve"
    BRAGA = "braga"
    COIMBRA = "coimbra"
    AVEIRO = "aveiro"
    FUNCHAL = "funchal"
    FARO = "faro"


class PropertyType(str, enum.Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(ExactDecimal(12, 2), nullable=False)
    city = Column(
        Enum(City, name="city", values_callable=_enum_values),
        nullable=False,
        index=True
    )
    address = Column(Text, nullable=False)
    latitude = Column(ExactDecimal(10, 8), nullable=False)
    longitude = Column(ExactDecimal(11, 8), nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    area_sqm = Column(ExactDecimal(8, 2), nullable=False)
    property_type = Column(
        Enum(PropertyType, name="property_type", values_callable=_enum_values),
        nullable=False
    )
    is_featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Rows are removed by ON DELETE CASCADE in the database, not by the ORM
    images = relationship(
        "PropertyImage", back_populates="property",
        cascade="all, delete-orphan", passive_deletes=True
    )
    favorites = relationship(
        "Favorite", back_populates="property",
        cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<Property(id={self.id}, title='{self.title}', city='{self.city}')>"


class PropertyImage(Base):
    __tablename__ = "property_images"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    image_url = Column(Text, nullable=False)
    alt_text = Column(Text, nullable=False, default="")
    is_primary = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    property = relationship("Property", back_populates="images")


class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(255), nullable=False, index=True)
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    property = relationship("Property", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint('session_id', 'property_id', name='_session_property_favorite_uc'),
    )
