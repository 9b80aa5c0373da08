"""Parsing of data source options."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .args import Args

DEFAULT_MAX_CONCURRENT_REQUESTS = 100
DEFAULT_MAX_CONCURRENT_CHUNKS = 4


@dataclass(frozen=True)
class SourceLabels:
    """Source settings recorded alongside collected data."""

    max_concurrent_requests: Optional[int]
    max_requests_per_second: Optional[int]
    max_retries: Optional[int]
    initial_backoff: Optional[int]


def parse_rpc_url(args: Args, environ: Optional[Mapping[str, str]] = None) -> str:
    """RPC url from ``--rpc`` or ``ETH_RPC_URL``, with ``http://`` added if needed.

    Prints a message and exits with status 0 when neither is given.
    """
    env = os.environ if environ is None else environ
    url = args.rpc if args.rpc is not None else env.get("ETH_RPC_URL")
    if url is None:
        print("must provide --rpc or set ETH_RPC_URL")
        sys.exit(0)
    if not url.startswith("http"):
        url = "http://" + url
    return url


def parse_max_concurrent_requests(args: Args) -> int:
    """Global limit on concurrent requests."""
    if args.max_concurrent_requests is None:
        return DEFAULT_MAX_CONCURRENT_REQUESTS
    return args.max_concurrent_requests


def parse_max_concurrent_chunks(args: Args) -> Optional[int]:
    """Limit on concurrently processed chunks; None means unlimited."""
    if args.max_concurrent_chunks is None:
        return DEFAULT_MAX_CONCURRENT_CHUNKS
    if args.max_concurrent_chunks == 0:
        return None
    return args.max_concurrent_chunks


def parse_source_labels(args: Args) -> SourceLabels:
    """Labels describing how the source was configured."""
    return SourceLabels(
        max_concurrent_requests=args.requests_per_second,
        max_requests_per_second=args.requests_per_second,
        max_retries=args.max_retries,
        initial_backoff=args.initial_backoff,
    )