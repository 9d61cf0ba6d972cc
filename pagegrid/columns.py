"""
Column definitions and nested key resolution.

Records have no fixed schema: a record is any mapping from string keys to
values, and values may themselves be nested mappings. Columns address
nested fields with dotted paths (``"country.name"``).
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import ConfigurationError, MalformedRecordError

Record = Mapping[str, Any]


class ColumnSpec(BaseModel):
    """
    Describes one displayable field of the grid.

    Attributes:
        name: Dotted path of the field inside a record. Unique within a grid.
        heading: Text shown in the column header. Defaults to the name.
        sortable: Whether the user may sort by this column.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    heading: str = ""
    sortable: bool = Field(default=True, alias="sorting")

    @model_validator(mode="before")
    @classmethod
    def _default_heading(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("heading"):
            data = {**data, "heading": data.get("name", "")}
        return data


def resolve_path(record: Record, path: str) -> Any:
    """
    Resolves a dotted path by descending into nested mappings.

    A literal key equal to the whole path takes precedence, so records that
    really contain dotted keys still resolve.

    Raises:
        MalformedRecordError: If the record or an intermediate value is not
            a mapping, or a key is missing.
    """
    if not isinstance(record, Mapping):
        raise MalformedRecordError(path, f"record is a {type(record).__name__}, not a mapping")
    if path in record:
        return record[path]

    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            raise MalformedRecordError(path, f"'{part}' is looked up on a non-mapping value")
        if part not in current:
            raise MalformedRecordError(path, f"key '{part}' does not exist")
        current = current[part]
    return current


def resolve_scalar(record: Record, path: str) -> Any:
    """
    Resolves a dotted path that must end at a scalar value.
    A nested mapping is reported, never coerced to a string.
    """
    value = resolve_path(record, path)
    if isinstance(value, Mapping):
        raise MalformedRecordError(path, "expected a scalar but found a mapping")
    return value


def _first_key_path(value: Mapping[str, Any]) -> list[str]:
    # Follows only the first key at each level; siblings are not enumerated.
    if not value:
        return []
    first_key = next(iter(value))
    first_value = value[first_key]
    if isinstance(first_value, Mapping):
        return [first_key, *_first_key_path(first_value)]
    return [first_key]


def infer_columns(first_record: Record) -> list[ColumnSpec]:
    """
    Builds column specs from the keys of a single record.

    Every top-level key produces exactly one column, in declaration order.
    When the value is a nested mapping the column name descends through the
    first key of each level until a scalar is found, e.g.
    ``{"country": {"name": {"official": "..."}, "id": 6}}`` gives a column
    named ``country.name.official`` with the heading ``country``.
    """
    if not isinstance(first_record, Mapping):
        raise MalformedRecordError(
            "<record>", f"expected a mapping but found {type(first_record).__name__}"
        )
    columns = []
    for key, value in first_record.items():
        name = key
        if isinstance(value, Mapping):
            name = ".".join([key, *_first_key_path(value)])
        columns.append(ColumnSpec(name=name, heading=key))
    return columns


def build_columns(definitions: Iterable[ColumnSpec | Mapping[str, Any]]) -> list[ColumnSpec]:
    """
    Converts explicit column definitions into ColumnSpecs.

    Raises:
        ConfigurationError: If a definition is invalid or two definitions
            share the same name.
    """
    columns: list[ColumnSpec] = []
    seen: set[str] = set()
    for definition in definitions:
        if isinstance(definition, ColumnSpec):
            column = definition
        else:
            try:
                column = ColumnSpec.model_validate(definition)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid column definition {definition!r}", option="columns", original_error=e
                ) from e
        if column.name in seen:
            raise ConfigurationError(f"Duplicate column name '{column.name}'", option="columns")
        seen.add(column.name)
        columns.append(column)
    return columns
