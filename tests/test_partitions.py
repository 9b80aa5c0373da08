import pytest

from chainfreeze.parse_utils import ParseError
from chainfreeze.partitions import (
    TimeDimension,
    parse_binary_chunks,
    parse_call_datas,
    parse_time_dimension,
)


def _no_files(path, column):
    raise AssertionError("no file should be read")


def test_time_dimension_blocks():
    assert parse_time_dimension(None) is TimeDimension.BLOCKS


def test_time_dimension_transactions():
    assert parse_time_dimension([[b"\x01"]]) is TimeDimension.TRANSACTIONS


def test_no_call_data():
    assert parse_call_datas(None, None, None) is None


def test_explicit_call_data():
    assert parse_call_datas(["0x01ab", "ff"], None, None) == [[b"\x01\xab", b"\xff"]]


def test_function_only():
    assert parse_call_datas(None, ["0xdeadbeef"], None) == [[b"\xde\xad\xbe\xef"]]


def test_function_with_inputs_is_cartesian_product():
    result = parse_call_datas(None, ["0xaa", "0xbb"], ["01", "0x02"])
    assert result == [[b"\xaa\x01", b"\xaa\x02", b"\xbb\x01", b"\xbb\x02"]]


@pytest.mark.parametrize(
    "call_data,function,inputs,message",
    [
        (None, None, ["01"], "must specify function if specifying inputs"),
        (["01"], ["02"], None, "cannot specify both call_data and function"),
        (["01"], None, ["02"], "cannot specify both call_data and inputs"),
        (["01"], ["02"], ["03"], "cannot specify both call_data and function"),
    ],
)
def test_call_data_conflicts(call_data, function, inputs, message):
    with pytest.raises(ParseError, match=message):
        parse_call_datas(call_data, function, inputs)


def test_bad_hex_call_data():
    with pytest.raises(ParseError, match="could not parse data as hex"):
        parse_call_datas(["0xzz"], None, None)


def test_binary_chunks_absent():
    assert parse_binary_chunks(None, "address", _no_files) == (None, None)


def test_binary_chunks_explicit():
    labels, chunks = parse_binary_chunks(["0x0102", "ab"], "address", _no_files)
    assert labels == [None]
    assert chunks == [[b"\x01\x02", b"\xab"]]


def test_binary_chunks_from_file(tmp_path):
    path = tmp_path / "ethereum__logs.parquet"
    path.write_bytes(b"")
    calls = []

    def read_column(file_path, column):
        calls.append((file_path, column))
        return [b"\x01", b"\x02"]

    labels, chunks = parse_binary_chunks([str(path), "0x03"], "topic0", read_column)
    assert calls == [(str(path), "topic0")]
    assert labels == ["logs", None]
    assert chunks == [[b"\x01", b"\x02"], [b"\x03"]]


def test_binary_chunks_unreadable_file(tmp_path):
    path = tmp_path / "ethereum__logs.parquet"
    path.write_bytes(b"")

    def read_column(file_path, column):
        raise OSError("broken")

    with pytest.raises(ParseError, match="could not read input"):
        parse_binary_chunks([str(path)], "address", read_column)