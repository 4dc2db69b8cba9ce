import struct
from datetime import datetime, timezone

import pytest

from tmkms.amino import DecodeError, decode_uvarint
from tmkms.block_id import BlockId, PartsSetHeader
from tmkms.consensus import BlockId as ConsensusBlockId
from tmkms.consensus import PartSetHeader
from tmkms.proposal import (
    CanonicalProposal,
    Proposal,
    SignedProposalResponse,
    SignProposalRequest,
)
from tmkms.remote_error import RemoteError
from tmkms.signature import SignedMsgType
from tmkms.timestamp import TimeMsg
from tmkms.validate import ValidationError, ValidationErrorKind

ENCODED = bytes([
    66,
    189, 228, 152, 226,
    10, 60, 8, 32, 16, 185, 96, 24, 160, 183, 1, 32, 255, 255, 255, 255, 255, 255, 255,
    255, 255, 1, 42, 24, 10, 4, 104, 97, 115, 104, 18, 16, 8, 192, 132, 61, 18, 10, 112,
    97, 114, 116, 115, 95, 104, 97, 115, 104, 50, 12, 8, 162, 216, 255, 211, 5, 16, 192,
    242, 227, 236, 2,
])


def make_proposal(**overrides):
    t = TimeMsg.from_datetime(datetime(2018, 2, 11, 7, 9, 22, 765000, tzinfo=timezone.utc))
    fields = dict(
        msg_type=int(SignedMsgType.PROPOSAL),
        height=12345,
        round=23456,
        pol_round=-1,
        block_id=BlockId(b"hash", PartsSetHeader(1_000_000, b"parts_hash")),
        timestamp=t,
        signature=b"",
    )
    fields.update(overrides)
    return Proposal(**fields)


def test_serialization():
    assert SignProposalRequest(make_proposal()).encode() == ENCODED


def test_deserialization():
    assert SignProposalRequest.decode(ENCODED) == SignProposalRequest(make_proposal())


def test_proposal_roundtrip_with_signature():
    p = make_proposal(signature=b"\x01" * 64)
    assert Proposal.decode(p.encode()) == p


def test_decode_wrong_prefix():
    with pytest.raises(DecodeError):
        SignedProposalResponse.decode(ENCODED)


def test_validate_ok():
    assert SignProposalRequest(make_proposal()).validate() is None


@pytest.mark.parametrize(
    "overrides, kind",
    [
        ({"msg_type": 1}, ValidationErrorKind.INVALID_MESSAGE_TYPE),
        ({"height": -1}, ValidationErrorKind.NEGATIVE_HEIGHT),
        ({"round": -1}, ValidationErrorKind.NEGATIVE_ROUND),
        ({"pol_round": -2}, ValidationErrorKind.NEGATIVE_POL_ROUND),
    ],
)
def test_validate_errors(overrides, kind):
    with pytest.raises(ValidationError) as info:
        SignProposalRequest(make_proposal(**overrides)).validate()
    assert info.value.kind == kind


def test_validate_missing():
    with pytest.raises(ValidationError) as info:
        SignProposalRequest(None).validate()
    assert info.value.kind == ValidationErrorKind.MISSING_CONSENSUS_MESSAGE


def test_sign_bytes_legacy_layout():
    got = SignProposalRequest(make_proposal()).sign_bytes("test_chain_id", False)
    length, pos = decode_uvarint(got, 0)
    body = got[pos:]
    assert length == len(body)
    assert body.startswith(b"\x08\x20\x11" + struct.pack("<q", 12345))
    assert b"\x21" + b"\xff" * 8 in body
    assert body.endswith(b"\x3a\x0dtest_chain_id")


def test_sign_bytes_legacy_matches_canonical():
    p = make_proposal()
    canonical = CanonicalProposal(
        msg_type=int(SignedMsgType.PROPOSAL),
        height=p.height,
        round=p.round,
        pol_round=p.pol_round,
        block_id=None,
        timestamp=p.timestamp,
        chain_id="c",
    )
    got = SignProposalRequest(make_proposal(block_id=None)).sign_bytes("c", False)
    assert got == canonical.encode_length_delimited()


def test_sign_bytes_ignores_signature():
    unsigned = SignProposalRequest(make_proposal()).sign_bytes("c", False)
    signed = SignProposalRequest(make_proposal(signature=b"\x07" * 64)).sign_bytes("c", False)
    assert unsigned == signed


def test_sign_bytes_protobuf_layout():
    got = SignProposalRequest(make_proposal()).sign_bytes("c", True)
    length, pos = decode_uvarint(got, 0)
    body = got[pos:]
    assert length == len(body)
    assert b"\x20" + b"\xff" * 9 + b"\x01" in body
    assert body.endswith(b"\x3a\x01c")


def test_sign_bytes_protobuf_empty_hash_drops_block_id():
    empty = SignProposalRequest(make_proposal(block_id=BlockId(b"", None))).sign_bytes("c", True)
    missing = SignProposalRequest(make_proposal(block_id=None)).sign_bytes("c", True)
    assert empty == missing


def test_sign_bytes_missing_proposal():
    with pytest.raises(ValidationError):
        SignProposalRequest(None).sign_bytes("c", False)


def test_set_signature():
    req = SignProposalRequest(make_proposal())
    req.set_signature(b"\x05" * 64)
    assert req.proposal.signature == b"\x05" * 64


def test_consensus_state_with_valid_block_id():
    h = bytes(range(32))
    ph = bytes(range(32, 64))
    req = SignProposalRequest(make_proposal(block_id=BlockId(h, PartsSetHeader(3, ph))))
    state = req.consensus_state()
    assert (state.height, state.round, state.step) == (12345, 23456, 3)
    assert state.block_id == ConsensusBlockId(h, PartSetHeader(3, ph))


def test_consensus_state_unparseable_block_id():
    state = SignProposalRequest(make_proposal()).consensus_state()
    assert state.block_id is None
    assert state.step == 3


def test_consensus_state_none_cases():
    assert SignProposalRequest(None).consensus_state() is None
    assert SignProposalRequest(make_proposal(height=-5)).consensus_state() is None


def test_height_and_msg_type():
    req = SignProposalRequest(make_proposal())
    assert req.height() == 12345
    assert SignProposalRequest(None).height() is None
    assert req.msg_type() == SignedMsgType.PROPOSAL


def test_build_response_success_and_error():
    req = SignProposalRequest(make_proposal())
    ok = req.build_response(None)
    assert ok.proposal == req.proposal and ok.err is None
    err = RemoteError.double_sign(7)
    failed = req.build_response(err)
    assert failed.proposal is None and failed.err == err


def test_response_roundtrip():
    resp = SignedProposalResponse(make_proposal(signature=b"\x02" * 64), None)
    assert SignedProposalResponse.decode(resp.encode()) == resp
    err_resp = SignedProposalResponse(None, RemoteError.double_sign(12))
    assert SignedProposalResponse.decode(err_resp.encode()) == err_resp