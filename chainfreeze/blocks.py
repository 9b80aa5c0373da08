"""Parsing of block specifications such as ``12M:13M`` or ``-1000:latest``."""

from __future__ import annotations

import enum
import re
from typing import List, Optional, Protocol, Tuple

from .block_chunks import (
    BlockChunk,
    BlockNumbers,
    block_range_to_block_chunk,
)
from .parse_utils import ParseError

_U64_MAX = (1 << 64) - 1
_U32_MAX = (1 << 32) - 1

_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)",
    re.IGNORECASE,
)
_UNSIGNED = re.compile(r"\+?\d+")

_SCALES = {
    "B": 1e9,
    "b": 1e9,
    "M": 1e6,
    "m": 1e6,
    "K": 1e3,
    "k": 1e3,
}


class BlockNumberSource(Protocol):
    """Anything that can report the latest block number."""

    def get_block_number(self) -> int:
        ...


class RangePosition(enum.Enum):
    """Where a block reference stands within a range."""

    FIRST = "first"
    LAST = "last"
    NONE = "none"


def _latest_block(fetcher: BlockNumberSource, message: str) -> int:
    try:
        return int(fetcher.get_block_number())
    except Exception:
        raise ParseError(message) from None


def _parse_float(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise ParseError("Error parsing block ref")
    return float(text)


def _saturate(value: float) -> int:
    """Convert a float to an unsigned 64-bit block number, clamping at the bounds."""
    if value != value or value <= 0:
        return 0
    if value >= _U64_MAX:
        return _U64_MAX
    return int(value)


def _parse_unsigned(text: str, limit: int, message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ParseError(message)
    value = int(text)
    if value > limit:
        raise ParseError(message)
    return value


def parse_block_number(
    block_ref: str,
    range_position: RangePosition,
    fetcher: BlockNumberSource,
) -> int:
    """Parse a single block reference such as ``5000``, ``15.5M`` or ``latest``.

    An empty reference means 0 at the start of a range and the latest block
    at its end.
    """
    if block_ref == "latest":
        return _latest_block(fetcher, "Error retrieving latest block number")
    if block_ref == "":
        if range_position is RangePosition.FIRST:
            return 0
        if range_position is RangePosition.LAST:
            return _latest_block(fetcher, "Error retrieving last block number")
        raise ParseError("invalid input")
    scale = _SCALES.get(block_ref[-1])
    if scale is not None:
        return _saturate(scale * _parse_float(block_ref[:-1]))
    return _saturate(_parse_float(block_ref))


def parse_block_range(
    first_ref: str,
    second_ref: str,
    fetcher: BlockNumberSource,
) -> Tuple[int, int]:
    """Resolve the two ends of a range into an inclusive ``(start, end)`` pair.

    ``-N:end`` means the N blocks up to and including ``end``; ``start:+N``
    means N blocks from ``start``; otherwise the end is exclusive unless it
    is ``latest`` or omitted.
    """
    if first_ref.startswith("-"):
        end_block = parse_block_number(second_ref, RangePosition.LAST, fetcher)
        offset = _parse_unsigned(first_ref[1:], _U64_MAX, "start_block parse error")
        start_block = end_block - offset
        if start_block < 0:
            raise ParseError("start_block underflow")
    elif second_ref.startswith("+"):
        start_block = parse_block_number(first_ref, RangePosition.FIRST, fetcher)
        offset = _parse_unsigned(second_ref[1:], _U64_MAX, "start_block parse error")
        end_block = start_block + offset
        if end_block > _U64_MAX:
            raise ParseError("end_block underflow")
    else:
        start_block = parse_block_number(first_ref, RangePosition.FIRST, fetcher)
        end_block = parse_block_number(second_ref, RangePosition.LAST, fetcher)

    if second_ref != "latest" and second_ref and not first_ref.startswith("-"):
        if end_block == 0:
            raise ParseError("end_block underflow")
        end_block -= 1

    if first_ref.startswith("-"):
        start_block += 1

    return start_block, end_block


def parse_block_token(token: str, as_range: bool, fetcher: BlockNumberSource) -> BlockChunk:
    """Parse one whitespace-free block token into a chunk.

    Forms: ``N``, ``A:B``, ``A:B/COUNT`` (COUNT evenly spaced blocks) and
    ``A:B:STEP`` (every STEP-th block).
    """
    text = token.replace("_", "")
    parts = text.split(":")

    if len(parts) == 1:
        block = parse_block_number(parts[0], RangePosition.NONE, fetcher)
        return BlockNumbers([block])

    if len(parts) == 2:
        first_ref, second_ref = parts
        n_keep: Optional[int] = None
        pieces = second_ref.split("/")
        if len(pieces) == 2:
            n_keep = _parse_unsigned(pieces[1], _U32_MAX, "cannot parse block interval size")
            second_ref = pieces[0]
        start_block, end_block = parse_block_range(first_ref, second_ref, fetcher)
        return block_range_to_block_chunk(start_block, end_block, as_range, None, n_keep)

    if len(parts) == 3:
        first_ref, second_ref, third_ref = parts
        start_block, end_block = parse_block_range(first_ref, second_ref, fetcher)
        step = _parse_unsigned(third_ref, _U32_MAX, "start_block parse error")
        return block_range_to_block_chunk(start_block, end_block, False, step, None)

    raise ParseError("blocks must be in format block_number or start_block:end_block")


def parse_block_inputs(inputs: str, fetcher: BlockNumberSource) -> List[BlockChunk]:
    """Parse a space-separated block specification.

    A lone range token stays a range; with several tokens every range is
    expanded into explicit block numbers.
    """
    parts = inputs.split(" ")
    if len(parts) == 1:
        return [parse_block_token(parts[0], True, fetcher)]
    return [parse_block_token(part, False, fetcher) for part in parts]