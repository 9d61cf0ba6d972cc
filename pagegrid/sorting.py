"""
Sort state and the heading-click toggle rule.
"""

from dataclasses import dataclass
from enum import Enum


class SortType(str, Enum):
    """Sort direction. Values match the strings accepted in grid options."""

    ASC = "asc"
    DESC = "desc"

    def opposite(self) -> "SortType":
        return SortType.DESC if self is SortType.ASC else SortType.ASC


@dataclass
class SortState:
    """
    Current sort column and direction.

    A column of None means natural (unsorted) order. The direction is kept
    even while unsorted so the next sort reuses it.
    """

    column: str | None = None
    type: SortType = SortType.ASC

    @property
    def is_sorted(self) -> bool:
        return self.column is not None


def next_sort_type(
    current_column: str | None, candidate_column: str, current_type: SortType
) -> SortType:
    """
    Determines the sort type after a click on a column heading.

    Switching to a different column preserves the current direction instead
    of resetting to ascending. Clicking the current sort column again flips
    the direction.
    """
    if candidate_column != current_column:
        return current_type
    return current_type.opposite()
