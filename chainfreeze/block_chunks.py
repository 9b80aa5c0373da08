"""Block chunks and the arithmetic on block ranges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar, Union

from .parse_utils import ParseError

T = TypeVar("T")


@dataclass(frozen=True)
class BlockNumbers:
    """An explicit list of block numbers."""

    numbers: List[int] = field(default_factory=list)

    def max_value(self) -> Optional[int]:
        """Largest block number, or None when the list is empty."""
        return max(self.numbers, default=None)


@dataclass(frozen=True)
class BlockRange:
    """An inclusive range of block numbers."""

    start: int
    end: int

    def max_value(self) -> Optional[int]:
        """Last block of the range."""
        return self.end


BlockChunk = Union[BlockNumbers, BlockRange]


def evenly_spaced_subset(items: Sequence[T], subset_length: int) -> List[T]:
    """Pick ``subset_length`` items spread evenly from first to last."""
    if subset_length == 0 or len(items) == 0:
        return []
    if subset_length >= len(items):
        return list(items)
    if subset_length == 1:
        return [items[0]]

    interval = (len(items) - 1) / (subset_length - 1)
    subset = []
    accumulator = 0.0
    for _ in range(subset_length):
        subset.append(items[int(accumulator)])
        accumulator += interval
    return subset


def block_range_to_block_chunk(
    start_block: int,
    end_block: int,
    as_range: bool,
    skip: Optional[int],
    n_blocks: Optional[int],
) -> BlockChunk:
    """Turn an inclusive block range into a chunk.

    ``n_blocks`` keeps that many evenly spaced blocks, ``as_range`` keeps the
    range as a range, and ``skip`` keeps every ``skip``-th block.
    """
    if end_block < start_block:
        raise ParseError("end_block should not be less than start_block")
    blocks = range(start_block, end_block + 1)
    if n_blocks is not None:
        return BlockNumbers(evenly_spaced_subset(blocks, n_blocks))
    if as_range:
        return BlockRange(start_block, end_block)
    if skip is not None:
        if skip <= 0:
            raise ParseError("block interval size must be positive")
        return BlockNumbers(list(blocks[::skip]))
    return BlockNumbers(list(blocks))


def apply_reorg_buffer(
    block_chunks: Sequence[BlockChunk],
    reorg_buffer: int,
    latest_block: int,
) -> List[BlockChunk]:
    """Drop chunks reaching within ``reorg_buffer`` blocks of ``latest_block``."""
    if reorg_buffer == 0:
        return list(block_chunks)
    max_allowed = latest_block - reorg_buffer
    if max_allowed < 0:
        raise ParseError("reorg buffer parse error")
    kept = []
    for chunk in block_chunks:
        max_block = chunk.max_value()
        if max_block is not None and max_block <= max_allowed:
            kept.append(chunk)
    return kept


def file_chunk_label(path: str) -> Optional[str]:
    """Label of a parquet input file: the part after the last ``__``."""
    last = path.split("__")[-1]
    suffix = ".parquet"
    if not last.endswith(suffix):
        return None
    return last[: -len(suffix)]