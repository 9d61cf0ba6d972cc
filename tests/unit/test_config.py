"""
Unit tests for GridOptions and the source descriptors.
"""

import pytest

from pagegrid.columns import ColumnSpec
from pagegrid.config import GridOptions, LocalSource, RemoteSource
from pagegrid.exceptions import ConfigurationError
from pagegrid.sorting import SortType


@pytest.mark.unit
class TestGridOptions:
    """Test GridOptions validation and defaults."""

    def test_defaults(self) -> None:
        options = GridOptions(data=[])

        assert options.paging is True
        assert options.sorting is True
        assert options.default_page_size == 20
        assert options.page_button_count == 5
        assert options.page_size_options == [20, 50, 100]
        assert options.default_sort_column is None
        assert options.default_sort_type is SortType.ASC
        assert options.page_param == "page"
        assert options.page_size_param == "per-page"
        assert options.sort_param == "sort"
        assert options.additional_request_params == {}

    def test_camel_case_options(self) -> None:
        """Option dicts written with camelCase keys are accepted."""
        options = GridOptions.parse(
            {
                "url": "https://api.example.com/users",
                "defaultPageSize": 50,
                "defaultSortColumn": "name",
                "defaultSortType": "desc",
                "pageButtonCount": 7,
                "additionalRequestParams": {"expand": "profile"},
            }
        )

        assert options.default_page_size == 50
        assert options.default_sort_column == "name"
        assert options.default_sort_type is SortType.DESC
        assert options.page_button_count == 7
        assert options.additional_request_params == {"expand": "profile"}

    def test_missing_source_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Either 'data' or 'url'"):
            GridOptions.parse({})

    def test_none_options_raise(self) -> None:
        with pytest.raises(ConfigurationError):
            GridOptions.parse(None)

    def test_data_and_url_are_exclusive(self) -> None:
        with pytest.raises(ConfigurationError, match="mutually exclusive") as exc_info:
            GridOptions.parse({"data": [], "url": "https://api.example.com/users"})
        assert exc_info.value.option == "url"

    def test_invalid_value_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid grid options") as exc_info:
            GridOptions.parse({"data": [], "defaultPageSize": 0})
        assert exc_info.value.original_error is not None

    def test_unknown_option_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            GridOptions.parse({"data": [], "pageSizez": 10})

    def test_sort_format_requires_column_placeholder(self) -> None:
        with pytest.raises(ConfigurationError, match="placeholder"):
            GridOptions.parse({"url": "https://api.example.com", "sortFormat": "{sign}"})

    def test_duplicate_columns_raise(self) -> None:
        with pytest.raises(ConfigurationError, match="unique"):
            GridOptions.parse({"data": [], "columns": [{"name": "id"}, {"name": "id"}]})

    def test_columns_are_parsed(self) -> None:
        options = GridOptions.parse(
            {"data": [], "columns": [{"name": "id", "heading": "#", "sorting": False}]}
        )
        assert options.columns == [ColumnSpec(name="id", heading="#", sortable=False)]

    def test_parse_passes_options_through(self) -> None:
        options = GridOptions(data=[])
        assert GridOptions.parse(options) is options

    def test_initial_page_size(self) -> None:
        assert GridOptions(data=[], default_page_size=15).initial_page_size == 15
        assert GridOptions(data=[], paging=False).initial_page_size is None


@pytest.mark.unit
class TestSourceDescriptors:
    def test_local_source(self) -> None:
        source = GridOptions(data=[{"id": 1}]).build_source()

        assert isinstance(source, LocalSource)
        assert source.records == [{"id": 1}]

    def test_remote_source(self) -> None:
        options = GridOptions.parse(
            {
                "url": "https://api.example.com/users",
                "pageParam": "p",
                "pageSizeParam": "limit",
                "sortParam": "order",
                "additionalRequestParams": {"token": "abc"},
            }
        )
        source = options.build_source()

        assert isinstance(source, RemoteSource)
        assert source.url == "https://api.example.com/users"
        assert source.page_param == "p"
        assert source.page_size_param == "limit"
        assert source.sort_param == "order"
        assert source.additional_request_params == {"token": "abc"}

    def test_default_sort_format(self) -> None:
        source = RemoteSource(url="https://api.example.com")

        assert source.format_sort("name", SortType.ASC) == "name"
        assert source.format_sort("name", SortType.DESC) == "-name"

    def test_custom_sort_format(self) -> None:
        source = RemoteSource(url="https://api.example.com", sort_format="{column}:{type}")

        assert source.format_sort("created_at", SortType.DESC) == "created_at:desc"
