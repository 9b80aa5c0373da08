"""Parsing of execution options."""

from __future__ import annotations

from .args import Args
from .parse_utils import ParseError


def parse_verbosity(args: Args) -> int:
    """Verbosity level: 0 quiet, 1 normal, 2 verbose."""
    if args.no_verbose and args.verbose:
        raise ParseError("")
    if args.no_verbose:
        return 0
    if args.verbose:
        return 2
    return 1