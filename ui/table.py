# ui/table.py
import math
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")


def display_name(record) -> str:
    middle = f"{record.middleName} " if record.middleName else ""
    return f"{record.firstName} {middle}{record.lastName}"


def sort_rows(rows: Sequence[T], key: Callable[[T], object], descending: bool = False) -> List[T]:
    return sorted(rows, key=key, reverse=descending)


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(rows: Sequence[T], page: int, page_size: int) -> List[T]:
    """Client-side slice; pages are 1-based and clamped to the valid range."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    page = min(max(page, 1), page_count(len(rows), page_size))
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])
