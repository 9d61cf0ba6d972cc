from .columns import ColumnSpec, build_columns, infer_columns, resolve_path, resolve_scalar
from .config import GridOptions, LocalSource, RemoteSource
from .events import EventChannel, GridEvent
from .exceptions import (
    ConfigurationError,
    MalformedRecordError,
    PageGridError,
    TransportError,
)
from .grid import GridController, GridSnapshot
from .pagination import PageResult, PageState, compute_total_pages, compute_window
from .provider import DataProvider
from .sorting import SortState, SortType, next_sort_type
from .transport import HttpTransport, Transport

__all__ = [
    "GridController",
    "GridSnapshot",
    "GridOptions",
    "DataProvider",
    # Sources
    "LocalSource",
    "RemoteSource",
    "HttpTransport",
    "Transport",
    # Columns
    "ColumnSpec",
    "build_columns",
    "infer_columns",
    "resolve_path",  # Dotted-path lookup
    "resolve_scalar",
    # Paging & sorting
    "PageResult",
    "PageState",
    "compute_total_pages",
    "compute_window",
    "SortState",
    "SortType",
    "next_sort_type",
    # Events
    "EventChannel",
    "GridEvent",
    # Exceptions
    "PageGridError",
    "TransportError",
    "MalformedRecordError",
    "ConfigurationError",
]
