"""Parsing of the non-block dimensions that partition a query."""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence, Tuple

from .parse_utils import (
    ParseError,
    ReadColumn,
    hex_string_to_binary,
    hex_strings_to_binary,
    parse_binary_arg,
)

ChunkLabels = List[Optional[str]]


class TimeDimension(enum.Enum):
    """Dimension along which a query advances through time."""

    BLOCKS = "blocks"
    TRANSACTIONS = "transactions"


def parse_time_dimension(transactions: Optional[Sequence[object]]) -> TimeDimension:
    """Transactions when transaction chunks are given, blocks otherwise."""
    if transactions is not None:
        return TimeDimension.TRANSACTIONS
    return TimeDimension.BLOCKS


def parse_call_datas(
    call_datas: Optional[Sequence[str]],
    function: Optional[Sequence[str]],
    inputs: Optional[Sequence[str]],
) -> Optional[List[List[bytes]]]:
    """Call data chunks from explicit call data, or functions combined with inputs.

    Returns None when nothing is given, otherwise a single chunk of values.
    """
    if call_datas is not None:
        if function is not None:
            raise ParseError("cannot specify both call_data and function")
        if inputs is not None:
            raise ParseError("cannot specify both call_data and inputs")
        return [hex_strings_to_binary(call_datas)]
    if function is None:
        if inputs is not None:
            raise ParseError("must specify function if specifying inputs")
        return None
    if inputs is None:
        return [hex_strings_to_binary(function)]
    values = [
        hex_string_to_binary(f) + hex_string_to_binary(i)
        for f in function
        for i in inputs
    ]
    return [values]


def parse_binary_chunks(
    inputs: Optional[Sequence[str]],
    default_column: str,
    read_column: ReadColumn,
) -> Tuple[Optional[ChunkLabels], Optional[List[List[bytes]]]]:
    """Labels and value chunks for a binary dimension such as addresses or topics.

    Each parquet column becomes its own chunk; explicit hex strings form one more.
    """
    if inputs is None:
        return None, None
    parsed = parse_binary_arg(inputs, default_column, read_column)
    labels = [key.to_label() for key in parsed]
    chunks = [list(values) for values in parsed.values()]
    return labels, chunks