"""Proposal messages and their signing requests."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .amino import (
    LENGTH_DELIMITED,
    VARINT,
    ProtoReader,
    ProtoWriter,
    _decode_registered,
    _encode_registered,
    _to_int64,
    compute_prefix,
    length_prefixed,
)
from .block_id import BlockId, CanonicalBlockId, CanonicalPartSetHeader
from .consensus import ConsensusState
from .remote_error import RemoteError
from .signature import SignedMsgType
from .timestamp import TimeMsg
from .validate import ValidationError, ValidationErrorKind

AMINO_NAME = "tendermint/remotesigner/SignProposalRequest"
AMINO_PREFIX = compute_prefix(AMINO_NAME)
RESPONSE_AMINO_NAME = "tendermint/remotesigner/SignedProposalResponse"
RESPONSE_AMINO_PREFIX = compute_prefix(RESPONSE_AMINO_NAME)

PROPOSAL_STEP = 3


@dataclass
class Proposal:
    msg_type: int = 0
    height: int = 0
    round: int = 0
    pol_round: int = 0
    block_id: BlockId | None = None
    timestamp: TimeMsg | None = None
    signature: bytes = b""

    def validate_basic(self) -> None:
        if self.msg_type != SignedMsgType.PROPOSAL:
            raise ValidationError(ValidationErrorKind.INVALID_MESSAGE_TYPE)
        if self.height < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_HEIGHT)
        if self.round < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_ROUND)
        if self.pol_round < -1:
            raise ValidationError(ValidationErrorKind.NEGATIVE_POL_ROUND)

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.uint(1, self.msg_type)
        w.int64(2, self.height)
        w.int64(3, self.round)
        w.int64(4, self.pol_round)
        w.message(5, self.block_id.encode() if self.block_id is not None else None)
        w.message(6, self.timestamp.encode() if self.timestamp is not None else None)
        w.bytes(7, self.signature)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "Proposal":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if wire == VARINT:
                if tag == 1:
                    msg.msg_type = value & 0xFFFFFFFF
                elif tag == 2:
                    msg.height = _to_int64(value)
                elif tag == 3:
                    msg.round = _to_int64(value)
                elif tag == 4:
                    msg.pol_round = _to_int64(value)
            elif wire == LENGTH_DELIMITED:
                if tag == 5:
                    msg.block_id = BlockId.decode(value)
                elif tag == 6:
                    msg.timestamp = TimeMsg.decode(value)
                elif tag == 7:
                    msg.signature = bytes(value)
        return msg


@dataclass
class CanonicalProposal:
    msg_type: int = 0
    height: int = 0
    round: int = 0
    pol_round: int = 0
    block_id: CanonicalBlockId | None = None
    timestamp: TimeMsg | None = None
    chain_id: str = ""

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.uint(1, self.msg_type)
        w.sfixed64(2, self.height)
        w.sfixed64(3, self.round)
        w.sfixed64(4, self.pol_round)
        w.message(5, self.block_id.encode() if self.block_id is not None else None)
        w.message(6, self.timestamp.encode() if self.timestamp is not None else None)
        w.string(7, self.chain_id)
        return w.getvalue()

    def encode_length_delimited(self) -> bytes:
        return length_prefixed(self.encode())


def _proto_canonical_block_id(block_id: BlockId | None) -> bytes | None:
    if block_id is None or not block_id.hash:
        return None
    w = ProtoWriter()
    w.bytes(1, block_id.hash)
    if block_id.parts_header is not None:
        header = ProtoWriter()
        header.uint(1, block_id.parts_header.total & 0xFFFFFFFF)
        header.bytes(2, block_id.parts_header.hash)
        w.message(2, header.getvalue())
    return w.getvalue()


def _canonical_block_id(block_id: BlockId | None) -> CanonicalBlockId | None:
    if block_id is None:
        return None
    parts = block_id.parts_header
    return CanonicalBlockId(
        block_id.hash,
        CanonicalPartSetHeader(parts.hash, parts.total) if parts is not None else None,
    )


@dataclass
class SignedProposalResponse:
    proposal: Proposal | None = None
    err: RemoteError | None = None

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.proposal.encode() if self.proposal is not None else None)
        w.message(2, self.err.encode() if self.err is not None else None)
        return _encode_registered(RESPONSE_AMINO_PREFIX, w.getvalue())

    @classmethod
    def decode(cls, data: bytes) -> "SignedProposalResponse":
        body = _decode_registered(RESPONSE_AMINO_PREFIX, data)
        msg = cls()
        for tag, wire, value in ProtoReader(body).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                msg.proposal = Proposal.decode(value)
            elif tag == 2 and wire == LENGTH_DELIMITED:
                msg.err = RemoteError.decode(value)
        return msg


@dataclass
class SignProposalRequest:
    proposal: Proposal | None = None

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.proposal.encode() if self.proposal is not None else None)
        return _encode_registered(AMINO_PREFIX, w.getvalue())

    @classmethod
    def decode(cls, data: bytes) -> "SignProposalRequest":
        body = _decode_registered(AMINO_PREFIX, data)
        msg = cls()
        for tag, wire, value in ProtoReader(body).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                msg.proposal = Proposal.decode(value)
        return msg

    def sign_bytes(self, chain_id: str, protobuf: bool) -> bytes:
        """Canonical bytes to sign, length-delimited, in the given encoding."""
        if self.proposal is None:
            raise ValidationError(ValidationErrorKind.MISSING_CONSENSUS_MESSAGE)
        proposal = replace(self.proposal, signature=b"")
        chain_id = str(chain_id)

        if protobuf:
            w = ProtoWriter()
            w.uint(1, int(SignedMsgType.PROPOSAL))
            w.sfixed64(2, proposal.height)
            w.sfixed64(3, proposal.round)
            w.int64(4, proposal.pol_round)
            w.message(5, _proto_canonical_block_id(proposal.block_id))
            w.message(
                6, proposal.timestamp.encode() if proposal.timestamp is not None else None
            )
            w.string(7, chain_id)
            return length_prefixed(w.getvalue())

        canonical = CanonicalProposal(
            msg_type=int(SignedMsgType.PROPOSAL),
            height=proposal.height,
            round=proposal.round,
            pol_round=proposal.pol_round,
            block_id=_canonical_block_id(proposal.block_id),
            timestamp=proposal.timestamp,
            chain_id=chain_id,
        )
        return canonical.encode_length_delimited()

    def set_signature(self, signature: bytes) -> None:
        if self.proposal is not None:
            self.proposal.signature = bytes(signature)

    def validate(self) -> None:
        if self.proposal is None:
            raise ValidationError(ValidationErrorKind.MISSING_CONSENSUS_MESSAGE)
        self.proposal.validate_basic()

    def consensus_state(self) -> ConsensusState | None:
        p = self.proposal
        if p is None or p.height < 0:
            return None
        block_id = None
        if p.block_id is not None:
            try:
                block_id = p.block_id.parse_block_id()
            except ValueError:
                block_id = None
        return ConsensusState(
            height=p.height,
            round=p.round & 0xFFFF,
            step=PROPOSAL_STEP,
            block_id=block_id,
        )

    def height(self) -> int | None:
        return self.proposal.height if self.proposal is not None else None

    def msg_type(self) -> SignedMsgType:
        return SignedMsgType.PROPOSAL

    def build_response(self, error: RemoteError | None) -> SignedProposalResponse:
        if error is not None:
            return SignedProposalResponse(proposal=None, err=error)
        return SignedProposalResponse(proposal=self.proposal, err=None)