import os

# Keep the application's module-level engine off the developer database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models
import schemas
from database import Base, enable_sqlite_foreign_keys
from services import property_service


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def property_payload(**overrides):
    payload = {
        "title": "Sunny flat in Baixa",
        "description": "Bright two bedroom flat close to the river",
        "price": 350000.00,
        "city": "lisbon",
        "address": "Rua Augusta 100, Lisboa",
        "latitude": 38.7101,
        "longitude": -9.1366,
        "bedrooms": 2,
        "bathrooms": 1,
        "area_sqm": 80.0,
        "property_type": "apartment",
        "is_featured": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_property(db_session):
    """Creates a property through the service; `created_at` pins its timestamps."""
    def _make(created_at: datetime = None, **overrides):
        prop = property_service.create_property(
            db_session, schemas.PropertyCreate(**property_payload(**overrides))
        )
        if created_at is not None:
            prop.created_at = created_at
            prop.updated_at = created_at
            db_session.commit()
            db_session.refresh(prop)
        return prop

    return _make


@pytest.fixture
def make_image(db_session):
    def _make(property_id: int, **overrides):
        image = models.PropertyImage(
            property_id=property_id,
            image_url=overrides.pop("image_url", "https://example.com/photo.jpg"),
            alt_text=overrides.pop("alt_text", "Photo"),
            **overrides
        )
        db_session.add(image)
        db_session.commit()
        db_session.refresh(image)
        return image

    return _make
