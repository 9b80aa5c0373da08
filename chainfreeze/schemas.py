"""Parsing of schema-related options."""

from __future__ import annotations

import enum
from typing import (
    Callable,
    Collection,
    Dict,
    Hashable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
)

from .args import Args
from .file_output import FileFormat, parse_output_format
from .parse_utils import ParseError


class U256Type(enum.Enum):
    """Output representation of 256-bit integers."""

    BINARY = "binary"
    STRING = "string"
    F32 = "f32"
    F64 = "f64"
    U32 = "u32"
    U64 = "u64"
    DECIMAL128 = "decimal128"


class ColumnEncoding(enum.Enum):
    """Encoding of binary columns."""

    BINARY = "binary"
    HEX = "hex"


_U256_ALIASES = {
    "binary": U256Type.BINARY,
    "string": U256Type.STRING,
    "str": U256Type.STRING,
    "f32": U256Type.F32,
    "float32": U256Type.F32,
    "f64": U256Type.F64,
    "float64": U256Type.F64,
    "float": U256Type.F64,
    "u32": U256Type.U32,
    "uint32": U256Type.U32,
    "u64": U256Type.U64,
    "uint64": U256Type.U64,
    "decimal128": U256Type.DECIMAL128,
    "d128": U256Type.DECIMAL128,
}

_DEFAULT_U256_TYPES = frozenset({U256Type.BINARY, U256Type.STRING, U256Type.F64})


def parse_u256_types(args: Args) -> Set[U256Type]:
    """U256 output types from ``--u256-types``, or the defaults."""
    if args.u256_types is None:
        return set(_DEFAULT_U256_TYPES)
    result = set()
    for raw in args.u256_types:
        try:
            result.add(_U256_ALIASES[raw.lower()])
        except KeyError:
            raise ParseError("bad u256 type") from None
    return result


def binary_column_encoding(args: Args) -> ColumnEncoding:
    """Hex for ``--hex`` or any non-parquet output, binary otherwise."""
    if args.hex or parse_output_format(args) != FileFormat.PARQUET:
        return ColumnEncoding.HEX
    return ColumnEncoding.BINARY


def parse_sort_columns(
    raw_sort: Optional[Sequence[str]],
    datatypes: Sequence[Hashable],
    default_sort: Callable[[Hashable], List[str]],
) -> Dict[Hashable, Optional[List[str]]]:
    """Sort columns for each datatype; None means unordered."""
    if raw_sort is None:
        return {datatype: list(default_sort(datatype)) for datatype in datatypes}
    if len(raw_sort) == 1 and raw_sort[0] == "none":
        return {datatype: None for datatype in datatypes}
    if not raw_sort:
        raise ParseError("must specify columns to sort by, use `none` to disable sorting")
    if len(datatypes) > 1:
        raise ParseError("custom sort not supported for multiple datasets")
    if not datatypes:
        raise ParseError("schemas map is empty")
    return {datatypes[0]: list(raw_sort)}


def _format_columns(columns: Sequence[str]) -> str:
    return "[" + ", ".join(f'"{column}"' for column in columns) + "]"


def ensure_included_columns(
    include_columns: Sequence[str],
    schemas: Mapping[Hashable, Collection[str]],
) -> None:
    """Raise unless every included column is in some schema (``all`` is allowed)."""
    unknown = [
        column
        for column in include_columns
        if column != "all" and not any(column in schema for schema in schemas.values())
    ]
    if unknown:
        raise ParseError(f"datatypes do not support these columns: {_format_columns(unknown)}")


def ensure_excluded_columns(
    exclude_columns: Sequence[str],
    column_types: Mapping[Hashable, Collection[str]],
) -> None:
    """Raise unless every excluded column is a known column of some datatype."""
    unknown = [
        column
        for column in exclude_columns
        if not any(column in types for types in column_types.values())
    ]
    if unknown:
        raise ParseError(f"datatypes do not support these columns: {_format_columns(unknown)}")