from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .columns import ColumnSpec, Record
from .exceptions import ConfigurationError
from .sorting import SortType

DEFAULT_TOTAL_COUNT_HEADER = "X-Pagination-Total-Count"


@dataclass
class LocalSource:
    """
    Source descriptor for a static, in-memory collection of records.
    The provider filters, sorts and slices the collection itself.
    """

    records: list[Record] = field(default_factory=list)


@dataclass
class RemoteSource:
    """
    Source descriptor for a remote endpoint.

    Contains the url plus the names of the request parameters the endpoint
    understands. Filtering, sorting and paging are done server-side.
    """

    url: str
    page_param: str = "page"
    page_size_param: str = "per-page"
    sort_param: str = "sort"
    # Placeholders: {column}, {type} ("asc"/"desc") and {sign} ("" or "-")
    sort_format: str = "{sign}{column}"
    additional_request_params: dict[str, Any] = field(default_factory=dict)

    def format_sort(self, column: str, sort_type: SortType) -> str:
        """
        Renders the sort request parameter value.
        E.g.: ("name", DESC) -> "-name" with the default format.
        """
        sign = "-" if sort_type is SortType.DESC else ""
        return self.sort_format.format(column=column, type=sort_type.value, sign=sign)


class GridOptions(BaseModel):
    """
    Configuration surface of a grid.

    Field names are snake_case; the camelCase spelling of every option is
    accepted too, so option dicts such as ``{"defaultPageSize": 50}`` work.

    Exactly one of ``data`` (static collection) or ``url`` (remote endpoint)
    must be given. Use :meth:`parse` to turn any validation failure into a
    ConfigurationError.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # Source
    data: list[dict[str, Any]] | None = None
    url: str | None = None

    # Columns (inferred from the first record when empty)
    columns: list[ColumnSpec] = Field(default_factory=list)

    # Paging
    paging: bool = True
    default_page_size: int = Field(default=20, gt=0)
    page_button_count: int = Field(default=5, ge=1)
    page_size_options: list[int] | bool = Field(default_factory=lambda: [20, 50, 100])

    # Sorting
    sorting: bool = True
    default_sort_column: str | None = None
    default_sort_type: SortType = SortType.ASC

    # Remote request parameters
    page_param: str = "page"
    page_size_param: str = "per-page"
    sort_param: str = "sort"
    sort_format: str = "{sign}{column}"
    additional_request_params: dict[str, Any] = Field(default_factory=dict)

    # Remote response shape
    records_key: str | None = None
    total_count_key: str = "total_count"
    total_count_header: str | None = DEFAULT_TOTAL_COUNT_HEADER

    @model_validator(mode="after")
    def _check_source(self) -> "GridOptions":
        # ConfigurationError is not a ValueError, so pydantic lets it propagate as-is
        if self.data is None and self.url is None:
            raise ConfigurationError("Either 'data' or 'url' must be given", option="data")
        if self.data is not None and self.url is not None:
            raise ConfigurationError(
                "Options 'data' and 'url' are mutually exclusive", option="url"
            )
        if "{column}" not in self.sort_format:
            raise ConfigurationError(
                f"Sort format '{self.sort_format}' has no {{column}} placeholder",
                option="sort_format",
            )
        names = [column.name for column in self.columns]
        if len(names) != len(set(names)):
            raise ConfigurationError("Column names must be unique", option="columns")
        return self

    @classmethod
    def parse(cls, options: "GridOptions | Mapping[str, Any] | None") -> "GridOptions":
        """
        Builds validated options from a mapping (or passes GridOptions through).

        Raises:
            ConfigurationError: For missing, conflicting or invalid options.
        """
        if isinstance(options, GridOptions):
            return options
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            first = e.errors()[0]
            option = ".".join(str(loc) for loc in first["loc"]) or None
            raise ConfigurationError(
                f"Invalid grid options: {first['msg']}", option=option, original_error=e
            ) from e

    @property
    def is_remote(self) -> bool:
        return self.url is not None

    @property
    def initial_page_size(self) -> int | None:
        """Page size the provider starts with; None when paging is off."""
        return self.default_page_size if self.paging else None

    def build_source(self) -> LocalSource | RemoteSource:
        """Returns the source descriptor these options describe."""
        if self.url is not None:
            return RemoteSource(
                url=self.url,
                page_param=self.page_param,
                page_size_param=self.page_size_param,
                sort_param=self.sort_param,
                sort_format=self.sort_format,
                additional_request_params=dict(self.additional_request_params),
            )
        return LocalSource(records=list(self.data or []))
