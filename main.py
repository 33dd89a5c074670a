"""Main application entry point and route definitions for Casa Listings."""
import logging
import os
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

import config
import models
import schemas
from database import engine, get_db
from models import City, PropertyType
from routers import favorites, images, properties
from services import favorite_service, property_service

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

models.Base.metadata.create_all(bind=engine)
logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

app = FastAPI(title="Casa Listings API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

app.include_router(properties.router)
app.include_router(images.router)
app.include_router(favorites.router)


@app.get("/healthcheck")
def healthcheck():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def _favorite_ids(request: Request, db: Session) -> set:
    session_id = request.cookies.get("session_id")
    if not session_id:
        return set()
    return favorite_service.favorite_property_ids(db, session_id)


@app.get("/")
def catalog_page(
        request: Request,
        city: Optional[City] = None,
        min_price: Optional[float] = Query(None, ge=0, le=schemas.MAX_PRICE),
        max_price: Optional[float] = Query(None, ge=0, le=schemas.MAX_PRICE),
        bedrooms: Optional[int] = Query(None, ge=0),
        property_type: Optional[PropertyType] = None,
        db: Session = Depends(get_db)
):
    """Catalog page with the featured strip and dynamic filtering of properties."""
    filters = schemas.PropertyFilters(
        city=city,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        property_type=property_type
    )

    return templates.TemplateResponse(request, "catalog.html", {
        "properties": property_service.list_properties(db, filters),
        "featured": property_service.list_featured_properties(db),
        "favorite_ids": _favorite_ids(request, db),
        "filters": filters,
        "cities": list(City),
        "property_types": list(PropertyType)
    })


@app.get("/catalog/{property_id}")
def property_page(property_id: int, request: Request, db: Session = Depends(get_db)):
    """Detail page for one listing and its image gallery."""
    detail = property_service.get_property_detail(db, property_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Property not found")

    return templates.TemplateResponse(request, "property_detail.html", {
        "property": detail,
        "is_favorite": property_id in _favorite_ids(request, db)
    })
