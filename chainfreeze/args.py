"""Command line arguments and their parsing."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import MISSING, Field, asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .parse_utils import ParseError
from .version import get_version

ABOUT = "cryo extracts blockchain data to parquet, csv, or json"

AFTER_HELP = """Optional Subcommands:
      cryo help                      display help message
      cryo help syntax               display block + tx specification syntax
      cryo help datasets             display list of all datasets
      cryo help <DATASET(S)>         display info about a dataset"""

DATATYPE_HELP = "datatype(s) to collect, use cryo datasets to see all available"


@dataclass
class Args:
    """Options for a collection run."""

    datatype: List[str] = field(default_factory=list)
    blocks: Optional[List[str]] = None
    txs: Optional[List[str]] = None
    align: bool = False
    reorg_buffer: int = 0
    include_columns: Optional[List[str]] = None
    exclude_columns: Optional[List[str]] = None
    columns: Optional[List[str]] = None
    u256_types: Optional[List[str]] = None
    hex: bool = False
    sort: Optional[List[str]] = None
    exclude_failed: bool = False
    rpc: Optional[str] = None
    network_name: Optional[str] = None
    requests_per_second: Optional[int] = None
    max_retries: int = 5
    initial_backoff: int = 500
    max_concurrent_requests: Optional[int] = None
    max_concurrent_chunks: Optional[int] = None
    dry: bool = False
    remember: bool = False
    verbose: bool = False
    no_verbose: bool = False
    chunk_size: int = 1000
    n_chunks: Optional[int] = None
    partition_by: Optional[List[str]] = None
    output_dir: str = "."
    subdirs: List[str] = field(default_factory=list)
    file_suffix: Optional[str] = None
    overwrite: bool = False
    csv: bool = False
    json: bool = False
    row_group_size: Optional[int] = None
    n_row_groups: Optional[int] = None
    no_stats: bool = False
    compression: List[str] = field(default_factory=lambda: ["lz4"])
    report_dir: Optional[str] = None
    no_report: bool = False
    address: Optional[List[str]] = None
    to_address: Optional[List[str]] = None
    from_address: Optional[List[str]] = None
    call_data: Optional[List[str]] = None
    function: Optional[List[str]] = None
    inputs: Optional[List[str]] = None
    slot: Optional[List[str]] = None
    contract: Optional[List[str]] = None
    topic0: Optional[List[str]] = None
    topic1: Optional[List[str]] = None
    topic2: Optional[List[str]] = None
    topic3: Optional[List[str]] = None
    event_signature: Optional[str] = None
    inner_request_size: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping of every option, suitable for JSON."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Args":
        """Build from a mapping; optional fields may be missing, others may not."""
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name in data:
                value = data[f.name]
                values[f.name] = list(value) if isinstance(value, list) else value
            elif f.default is None:
                values[f.name] = None
            else:
                raise ParseError(f"missing field `{f.name}`")
        return cls(**values)

    def merge_with_precedence(self, other: "Args") -> "Args":
        """Overlay every value of ``other`` that differs from the empty value."""
        merged = self.to_dict()
        for name, value in other.to_dict().items():
            if _EMPTY_VALUES[name] != value:
                merged[name] = value
        return Args.from_dict(merged)


def _empty_value(f: Field) -> Any:
    if f.default_factory is not MISSING:
        return []
    default = f.default
    if default is None:
        return None
    if isinstance(default, bool):
        return False
    if isinstance(default, int):
        return 0
    return ""


_EMPTY_VALUES: Dict[str, Any] = {f.name: _empty_value(f) for f in fields(Args)}


def _unsigned(bits: int):
    limit = 1 << bits

    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid unsigned integer: {text!r}") from None
        if not 0 <= value < limit:
            raise argparse.ArgumentTypeError(f"value out of range: {text!r}")
        return value

    return convert


_u32 = _unsigned(32)
_u64 = _unsigned(64)


class _VersionAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS,
                 default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest,
                         default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.exit(message=f"{parser.prog} {get_version()}\n")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="cryo",
        description=ABOUT,
        epilog=AFTER_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Block specs such as -1000:7000 are values, not options.
    parser._negative_number_matcher = re.compile(r"^-\.?\d")

    parser.add_argument("datatype", nargs="*", default=[], help=DATATYPE_HELP)
    parser.add_argument("-V", "--version", action=_VersionAction, help="Print version")

    content = parser.add_argument_group("Content Options")
    content.add_argument("-b", "--blocks", nargs="+", help="Block numbers, see syntax below")
    content.add_argument("-t", "--txs", nargs="+", help="Transaction hashes, see syntax below")
    content.add_argument("-a", "--align", action="store_true",
                         help="Align chunk boundaries to regular intervals")
    content.add_argument("--reorg-buffer", type=_u64, default=0, metavar="N_BLOCKS",
                         help="Reorg buffer, save blocks only when this old")
    content.add_argument("-i", "--include-columns", nargs="*", metavar="COLS",
                         help="Columns to include alongside the defaults, `all` for all")
    content.add_argument("-e", "--exclude-columns", nargs="*", metavar="COLS",
                         help="Columns to exclude from the defaults")
    content.add_argument("--columns", nargs="*", metavar="COLS",
                         help="Columns to use instead of the defaults, `all` for all")
    content.add_argument("--u256-types", nargs="+",
                         help="Set output datatype(s) of U256 integers "
                              "[default: binary, string, f64]")
    content.add_argument("--hex", action="store_true",
                         help="Use hex string encoding for binary columns")
    content.add_argument("-s", "--sort", nargs="*",
                         help="Columns(s) to sort by, `none` for unordered")
    content.add_argument("--exclude-failed", action="store_true",
                         help="Exclude items from failed transactions")

    source = parser.add_argument_group("Source Options")
    source.add_argument("-r", "--rpc", help="RPC url [default: ETH_RPC_URL env var]")
    source.add_argument("--network-name",
                        help="Network name [default: name of eth_getChainId]")

    acquisition = parser.add_argument_group("Acquisition Options")
    acquisition.add_argument("-l", "--requests-per-second", type=_u32, metavar="limit",
                             help="Ratelimit on requests per second")
    acquisition.add_argument("--max-retries", type=_u32, default=5, metavar="R",
                             help="Max retries for provider errors")
    acquisition.add_argument("--initial-backoff", type=_u64, default=500, metavar="B",
                             help="Initial retry backoff time (ms)")
    acquisition.add_argument("--max-concurrent-requests", type=_u64, metavar="M",
                             help="Global number of concurrent requests")
    acquisition.add_argument("--max-concurrent-chunks", type=_u64, metavar="M",
                             help="Number of chunks processed concurrently")
    acquisition.add_argument("-d", "--dry", action="store_true",
                             help="Dry run, collect no data")

    parser.add_argument("--remember", action="store_true",
                        help="Remember current command for future use")
    parser.add_argument("-v", "--verbose", action="store_true", help="Extra verbosity")
    parser.add_argument("--no-verbose", action="store_true",
                        help="Run quietly without printing information to stdout")

    output = parser.add_argument_group("Output Options")
    output.add_argument("-c", "--chunk-size", type=_u64, default=1000,
                        help="Number of blocks per file")
    output.add_argument("--n-chunks", type=_u64,
                        help="Number of files (alternative to --chunk-size)")
    output.add_argument("--partition-by", action="append",
                        help="Dimensions to partition by")
    output.add_argument("-o", "--output-dir", default=".", help="Directory for output files")
    output.add_argument("--subdirs", nargs="+", default=[],
                        help="Subdirectories for output files: "
                             "`datatype`, `network`, or custom string")
    output.add_argument("--file-suffix", help=argparse.SUPPRESS)
    output.add_argument("--overwrite", action="store_true",
                        help="Overwrite existing files instead of skipping")
    output.add_argument("--csv", action="store_true", help="Save as csv instead of parquet")
    output.add_argument("--json", action="store_true", help="Save as json instead of parquet")
    output.add_argument("--row-group-size", type=_u64, metavar="GROUP_SIZE",
                        help="Number of rows per row group in parquet file")
    output.add_argument("--n-row-groups", type=_u64,
                        help="Number of rows groups in parquet file")
    output.add_argument("--no-stats", action="store_true",
                        help="Do not write statistics to parquet files")
    output.add_argument("--compression", nargs="+", default=["lz4"], metavar="NAME [#]",
                        help="Compression algorithm and level")
    output.add_argument("--report-dir",
                        help="Directory to save summary report "
                             "[default: {output_dir}/.cryo/reports]")
    output.add_argument("--no-report", action="store_true",
                        help="Avoid saving a summary report")

    dataset = parser.add_argument_group("Dataset-specific Options")
    dataset.add_argument("--address", nargs="+", help="Address(es)")
    dataset.add_argument("--to-address", nargs="+", metavar="address", help="To Address(es)")
    dataset.add_argument("--from-address", nargs="+", metavar="address",
                         help="From Address(es)")
    dataset.add_argument("--call-data", nargs="+", help="Call data(s) to use for eth_calls")
    dataset.add_argument("--function", nargs="+", help="Function(s) to use for eth_calls")
    dataset.add_argument("--inputs", nargs="+", help="Input(s) to use for eth_calls")
    dataset.add_argument("--slot", nargs="+", help="Slot(s)")
    dataset.add_argument("--contract", nargs="+", help="Contract address(es)")
    dataset.add_argument("--topic0", "--event", dest="topic0", nargs="+", help="Topic0(s)")
    dataset.add_argument("--topic1", nargs="+", help="Topic1(s)")
    dataset.add_argument("--topic2", nargs="+", help="Topic2(s)")
    dataset.add_argument("--topic3", nargs="+", help="Topic3(s)")
    dataset.add_argument("--event-signature", metavar="SIG",
                         help="Event signature for log decoding")
    dataset.add_argument("--inner-request-size", type=_u64, default=1, metavar="BLOCKS",
                         help="Blocks per request (eth_getLogs)")
    return parser


def parse_argv(argv: Optional[Sequence[str]] = None) -> Args:
    """Parse command line arguments, not including the program name.

    Exits with a usage message on invalid input, like any command line tool.
    """
    parser = build_parser()
    namespace = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
    if len(namespace.compression) > 2:
        parser.error("--compression takes at most 2 values: NAME [LEVEL]")
    return Args(**vars(namespace))


def parse_str(command: str) -> Args:
    """Parse a whole command string; its first word is the program name."""
    return parse_argv(command.split()[1:])