"""Decoding of positional Cypher rows into named record types.

A Cypher result arrives as a column-name list plus positional rows. Records
are matched to columns by name:

1. An explicit ``column_map`` (field name -> column name) given at decode time
2. The column declared on the record type itself
   - pydantic models: ``Field(alias="n.name")``
   - dataclasses: ``field(metadata={"column": "n.name"})`` or ``column("n.name")``
3. The field name

Each row is turned directly into field values and validated with pydantic,
so type mismatches (e.g. a string in an ``int`` field) fail loudly.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import AliasChoices, BaseModel, TypeAdapter, ValidationError

from .errors import ErrorKind, Neo4jRestError

logger = logging.getLogger(__name__)

COLUMN_METADATA_KEY = "column"


def column(name: str, **kwargs: Any) -> Any:
    """Declare the Cypher column a dataclass field is read from.

    Example:
        @dataclass
        class Person:
            name: str = column("n.name")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[COLUMN_METADATA_KEY] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def _model_field_key(record_type: type, name: str, info: Any) -> str:
    """Input key pydantic validates ``name`` from."""
    alias = info.validation_alias
    if isinstance(alias, str):
        return alias
    if isinstance(alias, AliasChoices):
        for choice in alias.choices:
            if isinstance(choice, str):
                return choice
    if alias is not None:
        message = (
            f"{record_type.__name__}.{name}: validation alias {alias!r} has no "
            "plain column name to read from"
        )
        logger.error(message)
        raise TypeError(message)
    return info.alias or name


def field_bindings(
    record_type: type, column_map: Optional[Mapping[str, str]] = None
) -> List[Tuple[str, str]]:
    """Return (input key, column name) pairs for every field of ``record_type``.

    Raises:
        TypeError: the record type cannot be decoded from named columns.
        ValueError: ``column_map`` names a field the record type lacks.
    """
    column_map = dict(column_map or {})
    bindings: List[Tuple[str, str]] = []

    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        for name, info in record_type.model_fields.items():
            key = _model_field_key(record_type, name, info)
            bindings.append((key, column_map.pop(name, key)))
    elif dataclasses.is_dataclass(record_type):
        for f in dataclasses.fields(record_type):
            if not f.init:
                continue
            declared = f.metadata.get(COLUMN_METADATA_KEY, f.name)
            bindings.append((f.name, column_map.pop(f.name, declared)))
    else:
        message = f"record type must be a pydantic model or a dataclass, got {record_type!r}"
        logger.error(message)
        raise TypeError(message)

    if column_map:
        message = f"column_map names fields not on {record_type.__name__}: {sorted(column_map)}"
        logger.error(message)
        raise ValueError(message)
    return bindings


def _check_row_widths(columns: Sequence[str], data: Sequence[Sequence[Any]]) -> None:
    for row_num, row in enumerate(data):
        if len(row) != len(columns):
            logger.error(
                "Row %d has %d values for %d columns %s", row_num, len(row), len(columns), list(columns)
            )
            raise Neo4jRestError(
                ErrorKind.DECODE,
                f"row {row_num} has {len(row)} values for {len(columns)} columns",
            )


def rows_as_dicts(
    columns: Sequence[str], data: Sequence[Sequence[Any]]
) -> List[Dict[str, Any]]:
    """Key every row by column name, keeping row order."""
    _check_row_widths(columns, data)
    return [dict(zip(columns, row)) for row in data]


def decode_rows(
    columns: Sequence[str],
    data: Sequence[Sequence[Any]],
    record_type: Optional[type] = None,
    column_map: Optional[Mapping[str, str]] = None,
) -> List[Any]:
    """Decode positional rows into records, in row order.

    With no ``record_type`` the rows are returned as dicts, keyed by column
    name or, when ``column_map`` is given, by the mapped field names.

    Raises:
        Neo4jRestError: kind ``DECODE`` when a row is ragged or a value does
            not fit its field.
        TypeError, ValueError: see ``field_bindings``.
    """
    if record_type is None:
        rows = rows_as_dicts(columns, data)
        if column_map is None:
            return rows
        return [
            {name: row[col] for name, col in column_map.items() if col in row}
            for row in rows
        ]

    _check_row_widths(columns, data)
    bindings = field_bindings(record_type, column_map)
    positions = {name: i for i, name in enumerate(columns)}

    payloads: List[Dict[str, Any]] = []
    for row in data:
        payloads.append(
            {key: row[positions[col]] for key, col in bindings if col in positions}
        )

    try:
        return TypeAdapter(List[record_type]).validate_python(payloads)  # type: ignore[valid-type]
    except ValidationError as e:
        logger.error(
            "Cannot decode %d rows into %s", len(payloads), record_type.__name__, exc_info=True
        )
        raise Neo4jRestError(
            ErrorKind.DECODE,
            f"cannot decode rows into {record_type.__name__}: {e.error_count()} error(s)",
        ) from e
