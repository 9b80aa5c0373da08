"""Helpers for parsing hex strings and parquet column references."""

from __future__ import annotations

import binascii
import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, List, Optional, Sequence

ReadColumn = Callable[[str, str], Sequence[bytes]]


class ParseError(Exception):
    """Raised when user input cannot be parsed."""


def hex_string_to_binary(hex_string: str) -> bytes:
    """Decode a hex string, with or without a ``0x`` prefix."""
    digits = hex_string[2:] if hex_string.startswith("0x") else hex_string
    try:
        return binascii.unhexlify(digits)
    except (binascii.Error, ValueError):
        raise ParseError("could not parse data as hex") from None


def hex_strings_to_binary(hex_strings: Sequence[str]) -> List[bytes]:
    """Decode every hex string in a sequence."""
    return [hex_string_to_binary(item) for item in hex_strings]


@dataclass(frozen=True)
class BinaryInputList:
    """Origin of a list of binary values.

    With no path, the values were given explicitly on the command line;
    otherwise they come from a column of a parquet file.
    """

    path: Optional[str] = None
    column: Optional[str] = None

    def to_label(self) -> Optional[str]:
        """Label derived from the file stem, or None for explicit values."""
        if self.path is None:
            return None
        stem = PurePath(self.path).stem
        if not stem:
            return None
        return stem.split("__")[-1]


@dataclass(frozen=True)
class FileColumnReference:
    """A file path together with the column to read from it."""

    path: str
    column: str


def parse_file_column_reference(path: str, default_column: str) -> FileColumnReference:
    """Split ``path[:column]`` into its parts."""
    if ":" not in path:
        return FileColumnReference(path, default_column)
    pieces = path.split(":")
    if len(pieces) != 2:
        raise ParseError("could not parse path column")
    return FileColumnReference(pieces[0], pieces[1])


def parse_binary_arg(
    inputs: Sequence[str],
    default_column: str,
    read_column: ReadColumn,
) -> Dict[BinaryInputList, List[bytes]]:
    """Parse a list of hex strings and parquet column references.

    Every existing file is read into its own list with ``read_column``;
    the remaining inputs are decoded as hex into one explicit list.
    """
    files: List[str] = []
    hex_strings: List[str] = []
    for item in inputs:
        (files if os.path.exists(item) else hex_strings).append(item)

    parsed: Dict[BinaryInputList, List[bytes]] = {}
    for path in files:
        reference = parse_file_column_reference(path, default_column)
        try:
            values = list(read_column(reference.path, reference.column))
        except Exception:
            raise ParseError("could not read input") from None
        parsed[BinaryInputList(reference.path, reference.column)] = values

    if hex_strings:
        parsed[BinaryInputList()] = hex_strings_to_binary(hex_strings)

    return parsed