"""
Paging support for pagegrid.

This module holds the page state owned by a DataProvider, the result of a
single page fetch, and the pure functions that derive the total page count
and the window of page buttons shown to the user.
"""

import math
from dataclasses import dataclass, field

from .columns import Record


@dataclass
class PageState:
    """
    Current page index and page size.

    Attributes:
        index: 1-based page index. Stored as given; out-of-range values are
            only clamped when the page window is computed.
        size: Records per page, or None when paging is disabled.
    """

    index: int = 1
    size: int | None = None

    @property
    def offset(self) -> int:
        """Index of the first record of the current page."""
        if self.size is None:
            return 0
        return (self.index - 1) * self.size


@dataclass
class PageResult:
    """
    Represents a single page of records.

    Attributes:
        records: Records of the current page, in display order
        total_count: Size of the whole filtered result set, across all pages
    """

    records: list[Record] = field(default_factory=list)
    total_count: int = 0

    @property
    def count(self) -> int:
        """Number of records on this page."""
        return len(self.records)


def compute_total_pages(total_count: int, page_size: int | None) -> int:
    """
    Returns the number of pages needed for total_count records.

    Always at least 1, so an empty grid still has a first page.
    A page size of None (paging disabled) collapses everything into one page.
    """
    if page_size is None:
        return 1
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    return max(1, math.ceil(total_count / page_size))


def compute_window(current_page: int, total_pages: int, window_size: int) -> list[int]:
    """
    Builds the list of page numbers shown as page buttons.

    The window is centred on current_page (the extra slot of an even window
    goes to the left) and shifted so it never leaves [1, total_pages].

    Usage:
        compute_window(5, 10, 5)  # [3, 4, 5, 6, 7]
        compute_window(1, 10, 5)  # [1, 2, 3, 4, 5]
        compute_window(2, 3, 5)   # [1, 2, 3]
    """
    size = min(window_size, total_pages)
    if size < 1:
        return []

    offset_left = size // 2
    offset_right = math.ceil(size / 2) - 1
    start = current_page - offset_left
    end = current_page + offset_right

    if start < 1:
        start = 1
        end = size
    elif end > total_pages:
        end = total_pages
        start = end - size + 1

    return list(range(start, end + 1))
