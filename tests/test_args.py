import pytest

from chainfreeze.args import Args, build_parser, parse_argv, parse_str
from chainfreeze.parse_utils import ParseError


def test_no_arguments_gives_defaults():
    args = parse_argv([])
    assert args == Args()
    assert args.chunk_size == 1000
    assert args.max_retries == 5
    assert args.initial_backoff == 500
    assert args.compression == ["lz4"]
    assert args.output_dir == "."
    assert args.inner_request_size == 1
    assert args.blocks is None


def test_datatypes_and_blocks():
    args = parse_argv(["blocks", "transactions", "-b", "1:2", "3"])
    assert args.datatype == ["blocks", "transactions"]
    assert args.blocks == ["1:2", "3"]


def test_negative_block_range_is_a_value():
    args = parse_argv(["blocks", "--blocks", "-1000:7000", "-3:1b"])
    assert args.blocks == ["-1000:7000", "-3:1b"]


def test_short_options():
    args = parse_argv(["logs", "-l", "5", "-c", "200", "-o", "out", "-d", "-a", "-v"])
    assert args.requests_per_second == 5
    assert args.chunk_size == 200
    assert args.output_dir == "out"
    assert args.dry and args.align and args.verbose


def test_event_alias_sets_topic0():
    args = parse_argv(["logs", "--event", "0xabc"])
    assert args.topic0 == ["0xabc"]


def test_flag_columns_without_values_are_empty_lists():
    args = parse_argv(["blocks", "--include-columns", "--sort"])
    assert args.include_columns == []
    assert args.sort == []


def test_partition_by_appends():
    args = parse_argv(["logs", "--partition-by", "block_number", "--partition-by", "address"])
    assert args.partition_by == ["block_number", "address"]


def test_compression_with_level():
    assert parse_argv(["--compression", "gzip", "5"]).compression == ["gzip", "5"]


def test_compression_with_too_many_values_exits():
    with pytest.raises(SystemExit):
        parse_argv(["--compression", "zstd", "3", "4"])


@pytest.mark.parametrize("option", ["--chunk-size", "--max-retries", "-l"])
def test_negative_unsigned_value_exits(option):
    with pytest.raises(SystemExit):
        parse_argv([option, "-5"])


def test_non_integer_exits():
    with pytest.raises(SystemExit):
        parse_argv(["--chunk-size", "many"])


def test_parse_str_skips_program_name():
    args = parse_str("cryo logs --csv --rpc localhost:8545")
    assert args.datatype == ["logs"]
    assert args.csv is True
    assert args.rpc == "localhost:8545"


def test_help_exits():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-h"])


def test_dict_round_trip():
    args = parse_argv(["logs", "--blocks", "1:10", "--address", "0x01", "--hex"])
    assert Args.from_dict(args.to_dict()) == args


def test_to_dict_is_a_copy():
    args = Args(datatype=["blocks"])
    data = args.to_dict()
    data["datatype"].append("logs")
    assert args.datatype == ["blocks"]


def test_from_dict_missing_optional_is_none():
    data = Args().to_dict()
    del data["rpc"]
    assert Args.from_dict(data).rpc is None


def test_from_dict_missing_required_raises():
    data = Args().to_dict()
    del data["chunk_size"]
    with pytest.raises(ParseError, match="chunk_size"):
        Args.from_dict(data)


def test_merge_fills_in_remembered_values():
    current = parse_argv(["--dry"])
    remembered = Args(datatype=["logs"], rpc="localhost:8545")
    merged = current.merge_with_precedence(remembered)
    assert merged.datatype == ["logs"]
    assert merged.rpc == "localhost:8545"
    assert merged.dry is True


def test_merge_other_non_empty_values_take_precedence():
    current = Args(datatype=["blocks"], rpc="a")
    merged = current.merge_with_precedence(Args(datatype=["logs"], rpc="b"))
    assert merged.datatype == ["logs"]
    assert merged.rpc == "b"


def test_merge_empty_values_do_not_override():
    current = Args(rpc="a", hex=True, blocks=["1:2"])
    merged = current.merge_with_precedence(Args())
    assert merged.rpc == "a"
    assert merged.hex is True
    assert merged.blocks == ["1:2"]


def test_merge_compares_against_empty_not_cli_defaults():
    current = Args(chunk_size=50)
    merged = current.merge_with_precedence(Args())
    assert merged.chunk_size == Args().chunk_size


def test_merge_leaves_inputs_untouched():
    current = Args(datatype=["blocks"])
    other = Args(datatype=["logs"])
    current.merge_with_precedence(other)
    assert current.datatype == ["blocks"]
    assert other.datatype == ["logs"]