"""Swapping of address-like arguments to match what a datatype requires."""

from __future__ import annotations

import enum
from dataclasses import replace
from typing import Iterable, List, Mapping, Protocol, Sequence, Tuple

from .args import Args
from .parse_utils import ParseError


class Dim(enum.Enum):
    """A dimension along which a query can be partitioned."""

    BLOCK_NUMBER = "block_number"
    TRANSACTION_HASH = "transaction_hash"
    ADDRESS = "address"
    TO_ADDRESS = "to_address"
    CONTRACT = "contract"
    CALL_DATA = "call_data"
    SLOT = "slot"
    TOPIC0 = "topic0"
    TOPIC1 = "topic1"
    TOPIC2 = "topic2"
    TOPIC3 = "topic3"


_ARG_FIELDS = {
    Dim.BLOCK_NUMBER: "blocks",
    Dim.TRANSACTION_HASH: "txs",
    Dim.ADDRESS: "address",
    Dim.TO_ADDRESS: "to_address",
    Dim.CONTRACT: "contract",
    Dim.CALL_DATA: "call_data",
    Dim.SLOT: "slot",
    Dim.TOPIC0: "topic0",
    Dim.TOPIC1: "topic1",
    Dim.TOPIC2: "topic2",
    Dim.TOPIC3: "topic3",
}

_ALIASABLE = {Dim.ADDRESS, Dim.TO_ADDRESS, Dim.CONTRACT}


class DatatypeParameters(Protocol):
    """What a datatype declares about its parameters."""

    def arg_aliases(self) -> Mapping[Dim, Dim]:
        ...

    def required_parameters(self) -> Iterable[Dim]:
        ...


def dim_is_some(args: Args, dim: Dim) -> bool:
    """Whether the argument for ``dim`` was given."""
    return getattr(args, _ARG_FIELDS[dim]) is not None


def dim_is_none(args: Args, dim: Dim) -> bool:
    """Whether the argument for ``dim`` was left out."""
    return not dim_is_some(args, dim)


def find_arg_aliases(
    args: Args, datatypes: Iterable[DatatypeParameters]
) -> List[Tuple[Dim, Dim]]:
    """Pairs ``(given, required)`` where a given argument can stand in for a missing one.

    Only required parameters are considered.
    """
    swaps: List[Tuple[Dim, Dim]] = []
    for datatype in datatypes:
        aliases = dict(datatype.arg_aliases())
        if not aliases:
            continue
        for dim in datatype.required_parameters():
            if not dim_is_none(args, dim):
                continue
            for source, target in aliases.items():
                if target == dim and dim_is_some(args, source):
                    swaps.append((source, target))
    return swaps


def apply_arg_aliases(args: Args, arg_aliases: Sequence[Tuple[Dim, Dim]]) -> Args:
    """Return new args with each aliased value moved to the dimension it stands for."""
    result = args
    for source, target in arg_aliases:
        if source not in _ALIASABLE or target not in _ALIASABLE or source == target:
            raise ParseError("invalid arg alias pairing")
        source_field = _ARG_FIELDS[source]
        target_field = _ARG_FIELDS[target]
        value = getattr(result, source_field)
        result = replace(
            result,
            **{target_field: None if value is None else list(value), source_field: None},
        )
    return result