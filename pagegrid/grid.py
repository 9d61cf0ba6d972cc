"""
Grid controller: the narrow interface the presentation layer talks to.

The presentation layer (templates, DOM events, a UI framework's lifecycle)
translates user input into the intents below, calls :meth:`GridController.render`
and reads the results back. Nothing here knows how the grid is drawn.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ._logging import logger
from .columns import ColumnSpec, Record, build_columns, infer_columns
from .config import GridOptions
from .events import RENDER_COMPLETE, RENDER_ERROR, SORT_REJECTED, EventChannel
from .exceptions import PageGridError
from .pagination import compute_total_pages, compute_window
from .provider import DataProvider
from .sorting import SortType, next_sort_type

if TYPE_CHECKING:
    from .transport import Transport


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable view of everything the presentation layer renders."""

    records: tuple[Record, ...]
    columns: tuple[ColumnSpec, ...]
    page_index: int
    page_size: int | None
    total_pages: int
    total_count: int
    pages: tuple[int, ...]
    sort_column: str | None
    sort_type: SortType
    filters: Mapping[str, str]


class GridController:
    """
    Orchestrates a DataProvider and the paginator for one grid.

    Usage:
        grid = GridController({"data": rows, "defaultPageSize": 10})
        await grid.render()
        grid.get_data()      # first 10 rows
        grid.get_pages()     # [1, 2, 3] for 25 rows

        grid.set_filter("status", "active")
        grid.sort_by("name")
        await grid.render()
    """

    def __init__(
        self,
        options: GridOptions | Mapping[str, Any] | None = None,
        transport: "Transport | None" = None,
        events: EventChannel | None = None,
    ) -> None:
        # Fails fast on missing or conflicting options
        self.options = GridOptions.parse(options)
        self.events = events if events is not None else EventChannel()

        self._columns: list[ColumnSpec] = build_columns(self.options.columns)
        self._pages: list[int] = []
        self.provider = DataProvider.from_options(
            self.options, transport=transport, events=self.events
        )

    # --- INTENTS ---

    def set_page_index(self, page_index: int) -> None:
        self.provider.set_page_index(page_index)

    def set_page_size(self, page_size: int | None) -> None:
        """
        Changes the page size and goes back to the first page.
        None turns paging off; a size turns it back on.
        """
        self.provider.set_page_size(page_size)
        self.provider.set_page_index(1)

    def set_filter(self, column: str, keyword: str) -> None:
        """Sets a column filter and goes back to the first page."""
        self.provider.set_filter(column, keyword)
        self.provider.set_page_index(1)

    def clear_filter(self, column: str) -> None:
        self.provider.clear_filter(column)
        self.provider.set_page_index(1)

    def set_sort(self, column: str, sort_type: SortType | str | None = None) -> None:
        """
        Sorts by the column. Without an explicit sort type, sorting by a new
        column keeps the current direction and sorting by the current sort
        column again flips it.
        """
        if sort_type is None:
            sort_type = next_sort_type(
                self.provider.get_sort_column(), column, self.provider.get_sort_type()
            )
        self.provider.set_sort(column, sort_type)

    def sort_by(self, column: str) -> bool:
        """
        Handles a click on a column heading.

        Applies set_sort() when sorting by the column is allowed. Returns
        False (and emits a ``sort:rejected`` event) otherwise.
        """
        if not self.is_sorting_allowed(column):
            logger.warning(
                "Sorting not allowed", extra={"sort_column": column, "operation": "sort"}
            )
            self.events.emit(SORT_REJECTED, column=column)
            return False

        self.set_sort(column)
        return True

    def set_columns(self, columns: Iterable[ColumnSpec | Mapping[str, Any]]) -> None:
        """Replaces the column set. Columns are otherwise fixed once inferred."""
        self._columns = build_columns(columns)

    async def render(self) -> None:
        """
        Fetches the current page and refreshes columns and page buttons.

        Every error is emitted as ``render:error`` and re-raised. A failed
        fetch leaves the previously rendered data in place.
        """
        try:
            await self.provider.fetch()
            self._refresh()
        except Exception as e:
            message = e.message if isinstance(e, PageGridError) else str(e)
            logger.error(
                "Render failed",
                extra={"operation": "render", "error": message},
            )
            self.events.emit(RENDER_ERROR, error=e)
            raise

        self.events.emit(RENDER_COMPLETE, snapshot=self.snapshot())

    def _refresh(self) -> None:
        data = self.provider.get_data()
        if data and not self._columns:
            self._columns = infer_columns(data[0])
            logger.debug(
                "Columns inferred from data",
                extra={"columns": [column.name for column in self._columns]},
            )
        if self.is_paging_enabled():
            self._pages = compute_window(
                self.provider.page_index, self.get_total_pages(), self.options.page_button_count
            )
        else:
            self._pages = []

    # --- READS ---

    def get_data(self) -> list[Record]:
        return self.provider.get_data()

    def get_columns(self) -> list[ColumnSpec]:
        return list(self._columns)

    def get_page_index(self) -> int:
        return self.provider.page_index

    def get_page_size(self) -> int | None:
        return self.provider.page_size

    def get_total_pages(self) -> int:
        return compute_total_pages(self.provider.get_total_count(), self.provider.page_size)

    def get_pages(self) -> list[int]:
        """Page numbers of the page-button window as of the last render."""
        return list(self._pages)

    def get_sort_column(self) -> str | None:
        return self.provider.get_sort_column()

    def get_sort_type(self) -> SortType:
        return self.provider.get_sort_type()

    def is_sorted_by(self, column: str, sort_type: SortType | str | None = None) -> bool:
        """
        Checks if data is sorted by the column, and optionally in which direction.
        """
        is_sorted_by_column = column == self.provider.get_sort_column()
        if sort_type is None:
            return is_sorted_by_column
        return is_sorted_by_column and self.provider.get_sort_type() is SortType(sort_type)

    def is_sorting_allowed(self, column: str) -> bool:
        if not self.options.sorting:
            return False
        spec = next((c for c in self._columns if c.name == column), None)
        # Columns that are not declared yet (inference pending) are sortable
        return spec.sortable if spec is not None else not self._columns

    def is_paging_enabled(self) -> bool:
        return self.provider.page_size is not None

    def is_page_size_options_enabled(self) -> bool:
        options = self.options.page_size_options
        return self.is_paging_enabled() and options is not False and options != []

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            records=tuple(self.provider.get_data()),
            columns=tuple(self._columns),
            page_index=self.provider.page_index,
            page_size=self.provider.page_size,
            total_pages=self.get_total_pages(),
            total_count=self.provider.get_total_count(),
            pages=tuple(self._pages),
            sort_column=self.provider.get_sort_column(),
            sort_type=self.provider.get_sort_type(),
            filters=MappingProxyType(self.provider.get_filters()),
        )
