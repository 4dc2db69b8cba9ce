import pytest

from tmkms.amino import (
    DecodeError,
    ProtoReader,
    ProtoWriter,
    compute_prefix,
    decode_uvarint,
    encode_uvarint,
    length_prefixed,
    split_length_prefixed,
)


@pytest.mark.parametrize(
    "name,prefix",
    [
        ("tendermint/remotesigner/PubKeyRequest", [0xCB, 0x94, 0xD6, 0x20]),
        ("tendermint/remotesigner/PubKeyResponse", [0x17, 0x0E, 0xD5, 0x7C]),
        ("tendermint/remotesigner/SignVoteRequest", [243, 244, 18, 4]),
        ("tendermint/remotesigner/SignProposalRequest", [189, 228, 152, 226]),
    ],
)
def test_compute_prefix(name, prefix):
    assert compute_prefix(name) == bytes(prefix)


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 2**63, 2**64 - 1])
def test_uvarint_round_trip(value):
    encoded = encode_uvarint(value)
    assert decode_uvarint(encoded, 0) == (value, len(encoded))


def test_uvarint_known_bytes():
    assert encode_uvarint(1_000_000) == bytes([192, 132, 61])


def test_uvarint_truncated():
    with pytest.raises(DecodeError):
        decode_uvarint(b"\x80", 0)


def test_uvarint_negative_rejected():
    with pytest.raises(ValueError):
        encode_uvarint(-1)


def test_length_prefix_round_trip():
    payload = b"parts_hash"
    assert split_length_prefixed(length_prefixed(payload)) == payload


def test_length_prefix_mismatch():
    with pytest.raises(DecodeError):
        split_length_prefixed(b"\x05abc")


def test_writer_negative_int64():
    w = ProtoWriter()
    w.int64(4, -1)
    assert w.getvalue() == bytes([32] + [255] * 9 + [1])


def test_writer_sfixed64():
    w = ProtoWriter()
    w.sfixed64(2, 1)
    assert w.getvalue() == bytes([0x11, 1, 0, 0, 0, 0, 0, 0, 0])


def test_writer_omits_defaults():
    w = ProtoWriter()
    w.uint(1, 0)
    w.int64(2, 0)
    w.bytes(3, b"")
    w.string(4, "")
    w.message(5, None)
    assert w.getvalue() == b""


def test_reader_round_trip():
    w = ProtoWriter()
    w.uint(1, 32)
    w.bytes(2, b"hash")
    w.sfixed64(3, 7)
    fields = list(ProtoReader(w.getvalue()).fields())
    assert [(t, v) for t, _, v in fields] == [(1, 32), (2, b"hash"), (3, 7)]