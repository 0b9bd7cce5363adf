import logging
from typing import Optional

from sqlalchemy import asc, desc

from inventory_api.models.product import Product

logger = logging.getLogger(__name__)

ASCENDING = "asc"
DESCENDING = "desc"

DEFAULT_SORT_RULES = (("createdAt", DESCENDING),)

# API field names mapped to product columns; column names are accepted as-is.
SORTABLE_FIELDS = {
    "name": "name",
    "sku": "sku",
    "category": "category",
    "price": "price",
    "cost": "cost",
    "stock": "stock",
    "minStock": "min_stock",
    "unit": "unit",
    "isActive": "is_active",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def compose_sort(sort: Optional[str]) -> list[tuple[str, str]]:
    """Turn ``"-stock,name"`` into ``[("stock", "desc"), ("name", "asc")]``.

    The first rule is the primary key, later ones break ties. Field names are
    not checked here.
    """
    if sort is None or not str(sort).strip():
        return list(DEFAULT_SORT_RULES)

    rules = []
    for raw_field in str(sort).split(","):
        field = raw_field.strip()
        if field.startswith("-"):
            name, direction = field[1:].strip(), DESCENDING
        else:
            name, direction = field.lstrip("+").strip(), ASCENDING
        if name:
            rules.append((name, direction))
    return rules or list(DEFAULT_SORT_RULES)


def _resolve_column(field: str):
    column_name = SORTABLE_FIELDS.get(field)
    if column_name is None and field in SORTABLE_FIELDS.values():
        column_name = field
    if column_name is None:
        return None
    return getattr(Product, column_name)


def order_by_clauses(rules: list[tuple[str, str]]) -> list:
    clauses = []
    for field, direction in rules:
        column = _resolve_column(field)
        if column is None:
            logger.debug("Ignoring unknown sort field %r", field)
            continue
        clauses.append(desc(column) if direction == DESCENDING else asc(column))
    return clauses


__all__ = [
    "ASCENDING",
    "DEFAULT_SORT_RULES",
    "DESCENDING",
    "SORTABLE_FIELDS",
    "compose_sort",
    "order_by_clauses",
]
