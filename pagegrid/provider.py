"""
Data provider: the state machine behind a grid.

The provider owns the filter set, the sort state and the page state, and
knows how to turn them into one page of records, either by filtering,
sorting and slicing an in-memory collection or by asking a remote endpoint.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ._logging import logger, redact_filters
from .columns import Record, resolve_scalar
from .config import GridOptions, LocalSource, RemoteSource
from .exceptions import MalformedRecordError, handle_transport_errors
from .pagination import PageResult, PageState
from .sorting import SortState, SortType

if TYPE_CHECKING:
    from .events import EventChannel
    from .transport import Transport


class DataProvider:
    """
    Holds the grid's data source and its page/sort/filter state.

    Setters mutate state synchronously and never fetch; the caller decides
    when to call :meth:`fetch`. Setters return self so calls can be chained:

        await provider.set_filter("status", "active").set_sort("name").fetch()

    Only one fetch is expected to be in flight at a time. If fetches do
    overlap, every fetch is tagged with a generation number and a response
    that completes after a newer fetch was started is discarded.
    """

    def __init__(
        self,
        source: LocalSource | RemoteSource,
        transport: "Transport | None" = None,
        page_size: int | None = None,
        events: "EventChannel | None" = None,
    ) -> None:
        self.source = source
        self.events = events
        self._transport = transport

        # Internal state of the provider
        self._filters: dict[str, str] = {}
        self._sort = SortState()
        self._page = PageState(index=1)
        self._result = PageResult()
        self._generation = 0

        self.set_page_size(page_size)

    @classmethod
    def from_options(
        cls,
        options: GridOptions,
        transport: "Transport | None" = None,
        events: "EventChannel | None" = None,
    ) -> "DataProvider":
        """Builds a provider (source, page size, default sort) from grid options."""
        if transport is None and options.is_remote:
            from .transport import HttpTransport

            transport = HttpTransport(
                records_key=options.records_key,
                total_count_key=options.total_count_key,
                total_count_header=options.total_count_header,
            )

        provider = cls(
            options.build_source(),
            transport=transport,
            page_size=options.initial_page_size,
            events=events,
        )
        if options.default_sort_column is not None:
            provider.set_sort(options.default_sort_column, options.default_sort_type)
        return provider

    @property
    def is_remote(self) -> bool:
        return isinstance(self.source, RemoteSource)

    def _get_transport(self) -> "Transport":
        """Returns the injected transport, creating a default HTTP one on first use."""
        if self._transport is None:
            from .transport import HttpTransport

            self._transport = HttpTransport()
        return self._transport

    # --- FILTERS ---

    def set_filter(self, column: str, keyword: str) -> "DataProvider":
        """
        Stores (or overwrites) the filter keyword for a column.
        An empty keyword removes the column's filter, same as clear_filter().
        """
        if keyword == "":
            return self.clear_filter(column)
        self._filters[column] = keyword
        logger.debug(
            "Filter set",
            extra={"column": column, "filters": redact_filters(self._filters)},
        )
        return self

    def clear_filter(self, column: str) -> "DataProvider":
        """Removes the filter of a column. No-op if the column is not filtered."""
        self._filters.pop(column, None)
        return self

    def clear_filters(self) -> "DataProvider":
        self._filters.clear()
        return self

    def get_filters(self) -> dict[str, str]:
        """Returns a copy of the active filters (column name -> keyword)."""
        return dict(self._filters)

    # --- SORTING ---

    def set_sort(self, column: str, sort_type: SortType | str | None = None) -> "DataProvider":
        """
        Sorts by the given column.

        Args:
            column: Name of the column to sort by
            sort_type: "asc" or "desc". When omitted the previous direction
                is kept (ascending on first use).
        """
        self._sort.column = column
        if sort_type is not None:
            self._sort.type = SortType(sort_type)
        logger.debug(
            "Sort set", extra={"sort_column": column, "sort_type": self._sort.type.value}
        )
        return self

    def clear_sort(self) -> "DataProvider":
        """Returns to natural order. The direction is kept for the next sort."""
        self._sort.column = None
        return self

    def get_sort_column(self) -> str | None:
        return self._sort.column

    def get_sort_type(self) -> SortType:
        return self._sort.type

    # --- PAGING ---

    @property
    def page_index(self) -> int:
        return self._page.index

    @property
    def page_size(self) -> int | None:
        """Records per page, None when paging is disabled."""
        return self._page.size

    def set_page_index(self, index: int) -> "DataProvider":
        """Sets the 1-based page index. The value is stored as given."""
        self._page.index = index
        return self

    def set_page_size(self, size: int | None) -> "DataProvider":
        """Sets the page size. None disables paging."""
        if size is not None and size <= 0:
            raise ValueError(f"Page size must be positive, got {size}")
        self._page.size = size
        return self

    # --- RESULTS ---

    def get_data(self) -> list[Record]:
        """Returns the records of the last fetched page."""
        return list(self._result.records)

    def get_total_count(self) -> int:
        """Returns the total count of the last fetch (0 before the first fetch)."""
        return self._result.total_count

    @property
    def result(self) -> PageResult:
        return self._result

    # --- EXECUTION ---

    async def fetch(self) -> PageResult:
        """
        Produces the current page and stores it as the provider's data.

        Remote sources issue exactly one request through the transport and do
        not retry. On any error the previously fetched data is left untouched
        and the error propagates to the caller.

        A fetch that completes after a newer fetch was started is stale: its
        result is returned but not stored. This holds even when the newer
        fetch fails, because the stale result belongs to a page, sort or
        filter state that is no longer current. The provider then keeps the
        data of the last fetch that was still current when it completed.

        Raises:
            TransportError: If the remote request fails.
            MalformedRecordError: If a remote record is not a mapping, or a
                local record cannot be filtered or sorted by the requested
                column.
        """
        self._generation += 1
        generation = self._generation

        logger.info(
            "Fetching page",
            extra={
                "source": "remote" if self.is_remote else "local",
                "operation": "fetch",
                "page": self._page.index,
                "page_size": self._page.size,
                "sort_column": self._sort.column,
                "sort_type": self._sort.type.value,
                "filters": redact_filters(self._filters),
                "generation": generation,
            },
        )

        if isinstance(self.source, RemoteSource):
            result = await self._fetch_remote(self.source)
        else:
            result = self._fetch_local(self.source)

        if generation != self._generation:
            logger.warning(
                "Discarding stale page response",
                extra={"generation": generation, "current_generation": self._generation},
            )
            if self.events is not None:
                from .events import FETCH_STALE

                self.events.emit(
                    FETCH_STALE, generation=generation, current_generation=self._generation
                )
            return result

        self._result = result
        logger.info(
            "Page fetched",
            extra={
                "operation": "fetch",
                "count": result.count,
                "total_count": result.total_count,
                "generation": generation,
            },
        )
        return result

    def build_request_params(self) -> dict[str, Any]:
        """
        Builds the query parameters of a remote page request.

        Contains page and page size (omitted when paging is disabled), the
        sort parameter, one parameter per filtered column and the additional
        static parameters from the configuration.
        """
        if not isinstance(self.source, RemoteSource):
            raise TypeError("Request parameters only exist for remote sources")

        source = self.source
        params: dict[str, Any] = {}
        if self._page.size is not None:
            params[source.page_param] = self._page.index
            params[source.page_size_param] = self._page.size
        if self._sort.is_sorted:
            params[source.sort_param] = source.format_sort(self._sort.column, self._sort.type)
        for column, keyword in self._filters.items():
            if keyword:
                params[column] = keyword
        params.update(source.additional_request_params)
        return params

    async def _fetch_remote(self, source: RemoteSource) -> PageResult:
        params = self.build_request_params()
        with handle_transport_errors(url=source.url):
            result = await self._get_transport().get(source.url, params)

        for position, record in enumerate(result.records):
            if not isinstance(record, Mapping):
                raise MalformedRecordError(
                    f"records[{position}]",
                    f"expected a mapping but found {type(record).__name__}",
                )
        return result

    def _fetch_local(self, source: LocalSource) -> PageResult:
        records = source.records

        if self._filters:
            records = [record for record in records if self._matches_filters(record)]

        if self._sort.is_sorted:
            records = self._sort_records(records, self._sort.column, self._sort.type)

        total_count = len(records)

        size = self._page.size
        if size is not None:
            start = self._page.offset
            # Negative offsets (index < 1) would wrap around in Python slicing
            records = records[start : start + size] if start >= 0 else []

        return PageResult(records=list(records), total_count=total_count)

    def _matches_filters(self, record: Record) -> bool:
        """Case-insensitive substring match, AND across all filtered columns."""
        for column, keyword in self._filters.items():
            value = resolve_scalar(record, column)
            text = "" if value is None else str(value)
            if keyword.casefold() not in text.casefold():
                return False
        return True

    @staticmethod
    def _sort_records(records: list[Record], column: str, sort_type: SortType) -> list[Record]:
        """
        Stable sort by the resolved column value.
        Records whose value is None go last in either direction.
        """
        keyed = [(resolve_scalar(record, column), record) for record in records]
        present = [pair for pair in keyed if pair[0] is not None]
        blank = [record for value, record in keyed if value is None]

        try:
            present.sort(key=lambda pair: pair[0], reverse=sort_type is SortType.DESC)
        except TypeError as e:
            raise MalformedRecordError(
                column, "values of this column cannot be compared with each other", original_error=e
            ) from e

        return [record for _, record in present] + blank
