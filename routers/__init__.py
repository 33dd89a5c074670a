# routers/__init__.py
from . import favorites, images, properties

__all__ = ["favorites", "images", "properties"]
