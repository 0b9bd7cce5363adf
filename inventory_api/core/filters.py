"""Predicate construction for product listings.

Every filter arrives as optional text. Each constraint rule below looks at
the filters and either contributes one SQL clause or nothing; the builder
ANDs together whatever was contributed. Malformed values are treated as if
they were never supplied, so building a predicate cannot fail.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from inventory_api.core.constants import TRUTHY_VALUES
from inventory_api.models.product import Product

LIKE_ESCAPE_CHAR = "\\"


@dataclass(frozen=True)
class ProductFilters:
    category: Optional[str] = None
    min_price: Any = None
    max_price: Any = None
    min_stock: Any = None
    max_stock: Any = None
    is_active: Any = None
    search: Optional[str] = None


def parse_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_flag(value) -> Optional[bool]:
    """Tri-state flag: ``None`` means unset, anything else is true or false."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY_VALUES


def escape_like(text: str) -> str:
    return (
        text.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def _category_constraint(filters: ProductFilters):
    if not filters.category:
        return None
    return Product.category == filters.category


def _range_constraint(column, lower, upper):
    low = parse_number(lower)
    high = parse_number(upper)
    clauses = []
    if low is not None:
        clauses.append(column >= low)
    if high is not None:
        clauses.append(column <= high)
    if not clauses:
        return None
    return and_(*clauses)


def _price_constraint(filters: ProductFilters):
    return _range_constraint(Product.price, filters.min_price, filters.max_price)


def _stock_constraint(filters: ProductFilters):
    return _range_constraint(Product.stock, filters.min_stock, filters.max_stock)


def _active_constraint(filters: ProductFilters):
    flag = parse_flag(filters.is_active)
    if flag is None:
        return None
    return Product.is_active.is_(flag)


def _search_constraint(filters: ProductFilters):
    if filters.search is None:
        return None
    text = str(filters.search).strip()
    if not text:
        return None
    pattern = f"%{escape_like(text)}%"
    return or_(
        Product.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        Product.sku.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        Product.description.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
    )


ConstraintRule = Callable[[ProductFilters], Optional[ColumnElement]]

CONSTRAINT_RULES: tuple[ConstraintRule, ...] = (
    _category_constraint,
    _price_constraint,
    _stock_constraint,
    _active_constraint,
    _search_constraint,
)


def collect_constraints(filters: ProductFilters, rules=CONSTRAINT_RULES) -> list[ColumnElement]:
    constraints = []
    for rule in rules:
        clause = rule(filters)
        if clause is not None:
            constraints.append(clause)
    return constraints


def build_product_predicate(filters: ProductFilters, rules=CONSTRAINT_RULES) -> ColumnElement:
    constraints = collect_constraints(filters, rules)
    if not constraints:
        return true()
    return and_(*constraints)


def active_predicate() -> ColumnElement:
    return Product.is_active.is_(True)


def low_stock_predicate() -> ColumnElement:
    return and_(active_predicate(), Product.is_low_stock)


__all__ = [
    "CONSTRAINT_RULES",
    "ProductFilters",
    "active_predicate",
    "build_product_predicate",
    "collect_constraints",
    "escape_like",
    "low_stock_predicate",
    "parse_flag",
    "parse_number",
]
