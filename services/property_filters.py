"""
Reusable property search filters.

Each builder turns one optional search field into a SQLAlchemy clause (or
None when the field is unset); `build_property_filters` collects the clauses
that apply so the caller can AND them together.
"""
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR
from typing import List, Optional

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from coercion import to_storage
from models import Property
from schemas import PropertyFilters


def build_city_filter(city) -> Optional[ColumnElement]:
    """Exact match against the city enumeration"""
    if city is None:
        return None
    return Property.city == city


def build_price_filters(min_price: Optional[float], max_price: Optional[float]) -> List[ColumnElement]:
    """Inclusive price bounds; either side may be missing.

    Bounds are rounded inward to the stored scale (min up, max down) so a bound
    between two cents never admits a price outside it. Contradictory bounds
    (min above max) are not rejected, they simply match nothing.
    """
    scale = Property.price.type.scale
    conditions = []
    if min_price is not None:
        lower = Decimal(to_storage(min_price, scale, rounding=ROUND_CEILING))
        conditions.append(Property.price >= lower)
    if max_price is not None:
        upper = Decimal(to_storage(max_price, scale, rounding=ROUND_FLOOR))
        conditions.append(Property.price <= upper)
    return conditions


def build_bedrooms_filter(bedrooms: Optional[int]) -> Optional[ColumnElement]:
    """Exact bedroom count, not a minimum"""
    if bedrooms is None:
        return None
    return Property.bedrooms == bedrooms


def build_property_type_filter(property_type) -> Optional[ColumnElement]:
    if property_type is None:
        return None
    return Property.property_type == property_type


def build_featured_filter(is_featured: Optional[bool]) -> Optional[ColumnElement]:
    # False is a real filter value, only None means "any"
    if is_featured is None:
        return None
    return Property.is_featured == is_featured


def build_property_filters(filters: Optional[PropertyFilters]) -> List[ColumnElement]:
    """Fold the fields present in `filters` into a list of predicate clauses."""
    if filters is None:
        return []

    conditions = [
        build_city_filter(filters.city),
        *build_price_filters(filters.min_price, filters.max_price),
        build_bedrooms_filter(filters.bedrooms),
        build_property_type_filter(filters.property_type),
        build_featured_filter(filters.is_featured),
    ]
    return [condition for condition in conditions if condition is not None]


def combine_filters(conditions: List[ColumnElement]) -> ColumnElement:
    """AND the clauses together; an empty list matches every row."""
    if not conditions:
        return true()
    return and_(*conditions)
