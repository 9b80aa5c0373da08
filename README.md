# chainfreeze

`chainfreeze` parses the options of a blockchain data extraction run and
turns them into concrete settings: which blocks are meant, how ranges are
split, which column encodings and U256 types to use, how output files are
named and compressed, and how the data source is configured.

It uses only the Python standard library and supports Python 3.10 and later.

## Modules

- `chainfreeze.args` — the `Args` dataclass holding every option, with
  `Args.to_dict`, `Args.from_dict` and `Args.merge_with_precedence` (values of
  the other `Args` that differ from the empty value win). `build_parser`
  returns the `argparse` parser for the `cryo` command line; `parse_argv`
  parses a list of arguments (exiting with a usage message on bad input) and
  `parse_str` parses a whole command string whose first word is the program
  name.
- `chainfreeze.version` — `get_version` returns the output of
  `git describe --tags --always` and falls back to a fixed version string
  when git is unavailable or fails; `get_git_description` raises `OSError`
  in that case.
- `chainfreeze.remember` — `save_remembered_command(cryo_dir, args, argv)`
  writes `remembered_command.json` into `cryo_dir` (dropping `--remember`
  from the stored words and setting `remember` to false);
  `load_remembered_command(cryo_dir)` reads it back as a `RememberedCommand`.
- `chainfreeze.blocks` — `parse_block_inputs`, `parse_block_token`,
  `parse_block_range` and `parse_block_number`, with `RangePosition`. They
  need a `fetcher` object whose `get_block_number()` returns the latest block
  number; it is only called for `latest` or an open range end.
- `chainfreeze.block_chunks` — `BlockNumbers` and `BlockRange` chunks,
  `block_range_to_block_chunk`, `evenly_spaced_subset`, `apply_reorg_buffer`
  (drops chunks whose last block is within the buffer of the latest block)
  and `file_chunk_label`.
- `chainfreeze.partitions` — `parse_call_datas` (explicit call data, or every
  function combined with every input), `parse_binary_chunks`, and
  `TimeDimension` with `parse_time_dimension`.
- `chainfreeze.parse_utils` — `ParseError`, hex decoding
  (`hex_string_to_binary`, `hex_strings_to_binary`), `path[:column]`
  references (`parse_file_column_reference`, `FileColumnReference`) and
  `parse_binary_arg`, which splits inputs into existing files and hex strings.
  File columns are read through a `read_column(path, column)` callable that
  you supply.
- `chainfreeze.query` — `Dim`, `dim_is_some`, `dim_is_none`,
  `find_arg_aliases` and `apply_arg_aliases`, which move `--address`,
  `--to-address` and `--contract` values to the dimension a datatype requires.
- `chainfreeze.file_output` — `FileFormat`, `SubDir`, `Compression`,
  `parse_output_format`, `parse_compression` (`uncompressed`, `snappy`,
  `lzo`, `lz4`, or `gzip`/`brotli`/`zstd` with a level), `parse_row_group_size`,
  `parse_subdirs` and `parse_network_name`.
- `chainfreeze.schemas` — `U256Type`, `ColumnEncoding`, `parse_u256_types`,
  `binary_column_encoding`, `parse_sort_columns`, `ensure_included_columns`
  and `ensure_excluded_columns`.
- `chainfreeze.source` — `parse_rpc_url` (from `--rpc` or `ETH_RPC_URL`,
  prefixing `http://` when needed), `parse_max_concurrent_requests`,
  `parse_max_concurrent_chunks` and `parse_source_labels` with `SourceLabels`.
- `chainfreeze.execution` — `parse_verbosity` (0 quiet, 1 normal, 2 verbose).

Invalid input raises `chainfreeze.parse_utils.ParseError`.

## Block specification syntax

| Input                  | Meaning                                   |
|------------------------|-------------------------------------------|
| `5000 6000 7000`       | individual blocks                         |
| `12M:13M`              | range, end excluded                       |
| `5_000`, `5K`, `15.5M` | `_` separators and K / M / B suffixes     |
| `15.5M:`               | open end means the latest block           |
| `:700`                 | open start means block 0                  |
| `-1000:7000`           | the 1000 blocks ending at 7000            |
| `15M:+1000`            | the 1000 blocks starting at 15M           |
| `2000:5000:1000`       | every 1000th block: 2000 3000 4000        |
| `100:200/5`            | 5 evenly spaced: 100 124 149 174 199      |

A single range token stays a `BlockRange`; when several tokens are given,
each range is expanded into `BlockNumbers`.

## Examples

```python
from chainfreeze.args import parse_str

args = parse_str("cryo blocks --blocks 1:2 --csv")
args.datatype   # ['blocks']
args.blocks     # ['1:2']
args.csv        # True
```

```python
from chainfreeze.blocks import parse_block_inputs

class Latest:
    def get_block_number(self):
        return 12

parse_block_inputs("1:latest", Latest())   # [BlockRange(start=1, end=12)]
parse_block_inputs("1 2", Latest())        # [BlockNumbers(numbers=[1]), BlockNumbers(numbers=[2])]
```

```python
from chainfreeze.args import Args
from chainfreeze.file_output import parse_network_name

parse_network_name(Args(), 1)       # 'ethereum'
parse_network_name(Args(), 12345)   # 'network_12345'
```

## What it does not do

`chainfreeze` only parses and resolves options. It does not connect to an
RPC node, does not collect or decode any blockchain data, does not read
parquet files itself (callers pass a `read_column` function), and does not
write output files or reports. It installs no command; `parse_argv` and
`parse_str` only produce an `Args` value, and there are no `help`
subcommands or dataset listings.

## Testing

The tests use pytest and live in `tests/`; install the `test` extra to get it.