"""Parsing of output file options."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .args import Args
from .parse_utils import ParseError


class FileFormat(enum.Enum):
    """Format of output files."""

    PARQUET = "parquet"
    CSV = "csv"
    JSON = "json"


@dataclass(frozen=True)
class SubDir:
    """One level of output subdirectory.

    ``kind`` is ``"datatype"``, ``"network"`` or ``"custom"``; a custom
    subdirectory carries its literal name in ``name``.
    """

    kind: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Compression:
    """Parquet compression algorithm with an optional level."""

    algorithm: str
    level: Optional[int] = None


_NETWORK_NAMES = {
    1: "ethereum",
    5: "goerli",
    10: "optimism",
    56: "bnb",
    69: "optimism_kovan",
    100: "gnosis",
    137: "polygon",
    420: "optimism_goerli",
    1101: "polygon_zkevm",
    1442: "polygon_zkevm_testnet",
    8453: "base",
    10200: "gnosis_chidao",
    17000: "holesky",
    42161: "arbitrum",
    42170: "arbitrum_nova",
    43114: "avalanche",
    80001: "polygon_mumbai",
    84531: "base_goerli",
    7777777: "zora",
    11155111: "sepolia",
}

_SIMPLE_ALGORITHMS = {
    "uncompressed": "uncompressed",
    "snappy": "snappy",
    "lzo": "lzo",
    "lz4": "lz4_raw",
}

# inclusive level ranges of the leveled algorithms
_LEVELS = {
    "gzip": (0, 10),
    "brotli": (0, 11),
    "zstd": (1, 22),
}

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_subdirs(args: Args) -> List[SubDir]:
    """Subdirectories requested with ``--subdirs``."""
    result = []
    for arg in args.subdirs:
        if arg in ("datatype", "network"):
            result.append(SubDir(arg))
        else:
            result.append(SubDir("custom", arg))
    return result


def parse_network_name(args: Args, chain_id: int) -> str:
    """Network name given explicitly or derived from the chain id."""
    if args.network_name is not None:
        return args.network_name
    return _NETWORK_NAMES.get(chain_id, f"network_{chain_id}")


def parse_output_format(args: Args) -> FileFormat:
    """Output format chosen by ``--csv`` / ``--json``; parquet otherwise."""
    if args.csv and args.json:
        raise ParseError("choose one of parquet, csv, or json")
    if args.csv:
        return FileFormat.CSV
    if args.json:
        return FileFormat.JSON
    return FileFormat.PARQUET


def parse_compression(tokens: Sequence[str]) -> Compression:
    """Parse ``NAME [LEVEL]`` into a compression setting."""
    tokens = list(tokens)
    if len(tokens) == 1 and tokens[0] in _SIMPLE_ALGORITHMS:
        return Compression(_SIMPLE_ALGORITHMS[tokens[0]])
    if len(tokens) == 2 and tokens[0] in _LEVELS:
        algorithm, level_str = tokens
        if not _INTEGER.fullmatch(level_str):
            raise ParseError("Invalid compression level")
        level = int(level_str)
        low, high = _LEVELS[algorithm]
        if not low <= level <= high:
            raise ParseError("Invalid compression level")
        return Compression(algorithm, level)
    if len(tokens) == 1 and tokens[0] in _LEVELS:
        raise ParseError("Missing compression level")
    raise ParseError("Invalid compression algorithm")


def parse_row_group_size(
    row_group_size: Optional[int],
    n_row_groups: Optional[int],
    chunk_size: Optional[int],
) -> Optional[int]:
    """Explicit row group size, or chunk size split into ``n_row_groups``."""
    if row_group_size is not None:
        return row_group_size
    if n_row_groups is not None and chunk_size is not None:
        return -(-chunk_size // n_row_groups)
    return None