# apps/core/pagination.py
import math
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10


def page_window(page, page_size):
    """
    Slice bounds for a 1-based page.
    Returns None when the page or page size cannot produce any rows.
    """
    if page < 1 or page_size < 1:
        return None
    start = (page - 1) * page_size
    return start, start + page_size


def parse_page_number(value, default=1):
    """Page number from a query parameter; anything non-numeric means the default"""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageMeta:
    """Where the current page sits among all pages of a result"""
    page_number: int
    total_pages: int

    @classmethod
    def from_count(cls, count, page_number, page_size=DEFAULT_PAGE_SIZE):
        total_pages = math.ceil(count / page_size) if page_size > 0 else 0
        return cls(page_number=page_number, total_pages=total_pages)

    @property
    def has_previous(self):
        return self.page_number > 1

    @property
    def has_next(self):
        return self.page_number < self.total_pages

    @property
    def previous_page_number(self):
        return self.page_number - 1

    @property
    def next_page_number(self):
        return self.page_number + 1
