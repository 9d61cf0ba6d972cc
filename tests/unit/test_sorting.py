import pytest

from pagegrid.sorting import SortState, SortType, next_sort_type


@pytest.mark.unit
class TestSortType:
    def test_values_match_option_strings(self):
        assert SortType("asc") is SortType.ASC
        assert SortType("desc") is SortType.DESC

    def test_opposite(self):
        assert SortType.ASC.opposite() is SortType.DESC
        assert SortType.DESC.opposite() is SortType.ASC

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            SortType("sideways")


class TestSortState:
    def test_defaults_to_natural_order(self):
        state = SortState()
        assert state.column is None
        assert state.type is SortType.ASC
        assert state.is_sorted is False

    def test_is_sorted_with_column(self):
        assert SortState(column="name").is_sorted is True


@pytest.mark.unit
class TestNextSortType:
    def test_same_column_toggles_asc_to_desc(self):
        assert next_sort_type("name", "name", SortType.ASC) is SortType.DESC

    def test_same_column_toggles_desc_to_asc(self):
        assert next_sort_type("name", "name", SortType.DESC) is SortType.ASC

    @pytest.mark.parametrize("current_type", [SortType.ASC, SortType.DESC])
    def test_other_column_preserves_direction(self, current_type):
        """Switching columns keeps the previous direction instead of resetting to ASC."""
        assert next_sort_type("name", "age", current_type) is current_type

    def test_unsorted_grid_preserves_direction(self):
        assert next_sort_type(None, "age", SortType.DESC) is SortType.DESC
