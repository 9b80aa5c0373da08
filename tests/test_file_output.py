import pytest

from chainfreeze.args import Args
from chainfreeze.file_output import (
    Compression,
    FileFormat,
    SubDir,
    parse_compression,
    parse_network_name,
    parse_output_format,
    parse_row_group_size,
    parse_subdirs,
)
from chainfreeze.parse_utils import ParseError


def test_subdirs():
    args = Args(subdirs=["datatype", "network", "mine"])
    assert parse_subdirs(args) == [
        SubDir("datatype"),
        SubDir("network"),
        SubDir("custom", "mine"),
    ]


@pytest.mark.parametrize(
    "chain_id, name",
    [(1, "ethereum"), (137, "polygon"), (11155111, "sepolia"), (7777777, "zora")],
)
def test_known_network_names(chain_id, name):
    assert parse_network_name(Args(), chain_id) == name


def test_unknown_network_name():
    assert parse_network_name(Args(), 31337) == "network_31337"


def test_explicit_network_name_wins():
    assert parse_network_name(Args(network_name="mynet"), 1) == "mynet"


def test_output_formats():
    assert parse_output_format(Args()) is FileFormat.PARQUET
    assert parse_output_format(Args(csv=True)) is FileFormat.CSV
    assert parse_output_format(Args(json=True)) is FileFormat.JSON


def test_output_format_conflict():
    with pytest.raises(ParseError, match="choose one of parquet, csv, or json"):
        parse_output_format(Args(csv=True, json=True))


def test_simple_compressions():
    assert parse_compression(["lz4"]) == Compression("lz4_raw")
    assert parse_compression(["snappy"]) == Compression("snappy")
    assert parse_compression(["uncompressed"]) == Compression("uncompressed")


@pytest.mark.parametrize("name, level", [("gzip", "5"), ("brotli", "5"), ("zstd", "5")])
def test_leveled_compressions(name, level):
    assert parse_compression([name, level]) == Compression(name, int(level))


@pytest.mark.parametrize(
    "tokens", [["gzip", "x"], ["zstd", "-3"], ["brotli", "500"], ["gzip", "200"]]
)
def test_invalid_levels(tokens):
    with pytest.raises(ParseError, match="Invalid compression level"):
        parse_compression(tokens)


def test_missing_level():
    with pytest.raises(ParseError, match="Missing compression level"):
        parse_compression(["zstd"])


@pytest.mark.parametrize("tokens", [["bogus"], ["snappy", "3"], []])
def test_invalid_algorithm(tokens):
    with pytest.raises(ParseError, match="Invalid compression algorithm"):
        parse_compression(tokens)


def test_row_group_size_explicit():
    assert parse_row_group_size(50, 3, 1000) == 50


def test_row_group_size_from_count():
    size = parse_row_group_size(None, 3, 1000)
    assert size * 3 >= 1000
    assert (size - 1) * 3 < 1000


def test_row_group_size_none():
    assert parse_row_group_size(None, None, 1000) is None
    assert parse_row_group_size(None, 4, None) is None