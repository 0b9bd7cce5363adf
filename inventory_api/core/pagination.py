import math
from dataclasses import dataclass
from typing import Optional

from inventory_api.core.constants import MAX_STORE_INTEGER

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def stats(self, total_items: int) -> "PageStats":
        return PageStats(
            total_items=total_items,
            total_pages=math.ceil(total_items / self.limit) if total_items else 0,
            current_page=self.page,
            items_per_page=self.limit,
        )


@dataclass(frozen=True)
class PageStats:
    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int


def _parse_int(value, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def build_window(
    page=None,
    limit=None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = MAX_LIMIT,
) -> PageWindow:
    """Parse page/limit text into a window; never raises.

    Non-numeric input falls back to the defaults, page is at least 1 and
    limit stays within ``1..max_limit``. Both are capped so the offset fits
    a store integer.
    """
    page_size = max(_parse_int(limit, default_limit), 1)
    if max_limit is not None:
        page_size = min(page_size, max_limit)
    page_size = min(page_size, MAX_STORE_INTEGER)
    page_number = max(_parse_int(page, DEFAULT_PAGE), 1)
    page_number = min(page_number, MAX_STORE_INTEGER // page_size + 1)
    return PageWindow(page=page_number, limit=page_size)


__all__ = ["DEFAULT_LIMIT", "DEFAULT_PAGE", "MAX_LIMIT", "PageStats", "PageWindow", "build_window"]
