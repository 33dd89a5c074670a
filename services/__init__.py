# services/__init__.py
from . import favorite_service, image_service, property_service
from .exceptions import PropertyNotFoundError
from .property_filters import build_property_filters

__all__ = [
    "favorite_service",
    "image_service",
    "property_service",
    "PropertyNotFoundError",
    "build_property_filters",
]
