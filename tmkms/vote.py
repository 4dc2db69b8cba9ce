"""Vote messages and their signing requests."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .amino import (
    LENGTH_DELIMITED,
    VARINT,
    ProtoReader,
    ProtoWriter,
    _decode_registered,
    _encode_registered,
    _to_int32,
    _to_int64,
    compute_prefix,
    length_prefixed,
)
from .block_id import BlockId, CanonicalBlockId
from .consensus import ConsensusState
from .proposal import _canonical_block_id, _proto_canonical_block_id
from .remote_error import RemoteError
from .signature import SignedMsgType
from .timestamp import TimeMsg
from .validate import ValidationError, ValidationErrorKind

AMINO_NAME = "tendermint/remotesigner/SignVoteRequest"
AMINO_PREFIX = compute_prefix(AMINO_NAME)
RESPONSE_AMINO_NAME = "tendermint/remotesigner/SignedVoteResponse"
RESPONSE_AMINO_PREFIX = compute_prefix(RESPONSE_AMINO_NAME)

VALIDATOR_ADDR_SIZE = 20
VOTE_STEP = 6

# 0001-01-01T00:00:00Z, the zero time used when a vote carries no timestamp
_ZERO_TIME_SECONDS = -62_135_596_800


@dataclass
class Vote:
    vote_type: int = 0
    height: int = 0
    round: int = 0
    block_id: BlockId | None = None
    timestamp: TimeMsg | None = None
    validator_address: bytes = b""
    validator_index: int = 0
    signature: bytes = b""

    def msg_type(self) -> SignedMsgType | None:
        """The vote's type, or None if it is not a pre-vote or pre-commit."""
        if self.vote_type == SignedMsgType.PRE_VOTE:
            return SignedMsgType.PRE_VOTE
        if self.vote_type == SignedMsgType.PRE_COMMIT:
            return SignedMsgType.PRE_COMMIT
        return None

    def validate_basic(self) -> None:
        if self.msg_type() is None:
            raise ValidationError(ValidationErrorKind.INVALID_MESSAGE_TYPE)
        if self.height < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_HEIGHT)
        if self.round < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_ROUND)
        if self.validator_index < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_VALIDATOR_INDEX)
        if len(self.validator_address) != VALIDATOR_ADDR_SIZE:
            raise ValidationError(ValidationErrorKind.INVALID_VALIDATOR_ADDRESS_SIZE)
        if self.block_id is not None:
            self.block_id.validate_basic()

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.uint(1, self.vote_type)
        w.int64(2, self.height)
        w.int64(3, self.round)
        w.message(4, self.block_id.encode() if self.block_id is not None else None)
        w.message(5, self.timestamp.encode() if self.timestamp is not None else None)
        w.bytes(6, self.validator_address)
        w.int64(7, self.validator_index)
        w.bytes(8, self.signature)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "Vote":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if wire == VARINT:
                if tag == 1:
                    msg.vote_type = value & 0xFFFFFFFF
                elif tag == 2:
                    msg.height = _to_int64(value)
                elif tag == 3:
                    msg.round = _to_int64(value)
                elif tag == 7:
                    msg.validator_index = _to_int64(value)
            elif wire == LENGTH_DELIMITED:
                if tag == 4:
                    msg.block_id = BlockId.decode(value)
                elif tag == 5:
                    msg.timestamp = TimeMsg.decode(value)
                elif tag == 6:
                    msg.validator_address = bytes(value)
                elif tag == 8:
                    msg.signature = bytes(value)
        return msg


@dataclass
class CanonicalVote:
    vote_type: int = 0
    height: int = 0
    round: int = 0
    block_id: CanonicalBlockId | None = None
    timestamp: TimeMsg | None = None
    chain_id: str = ""

    @classmethod
    def from_vote(cls, vote: Vote, chain_id: str) -> "CanonicalVote":
        timestamp = vote.timestamp
        if timestamp is None:
            timestamp = TimeMsg(seconds=_ZERO_TIME_SECONDS, nanos=0)
        return cls(
            vote_type=vote.vote_type,
            height=vote.height,
            round=vote.round,
            block_id=_canonical_block_id(vote.block_id),
            timestamp=timestamp,
            chain_id=str(chain_id),
        )

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.uint(1, self.vote_type)
        w.sfixed64(2, self.height)
        w.sfixed64(3, self.round)
        w.message(4, self.block_id.encode() if self.block_id is not None else None)
        w.message(5, self.timestamp.encode() if self.timestamp is not None else None)
        w.string(6, self.chain_id)
        return w.getvalue()

    def encode_length_delimited(self) -> bytes:
        return length_prefixed(self.encode())


@dataclass
class SignedVoteResponse:
    vote: Vote | None = None
    err: RemoteError | None = None

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.vote.encode() if self.vote is not None else None)
        w.message(2, self.err.encode() if self.err is not None else None)
        return _encode_registered(RESPONSE_AMINO_PREFIX, w.getvalue())

    @classmethod
    def decode(cls, data: bytes) -> "SignedVoteResponse":
        body = _decode_registered(RESPONSE_AMINO_PREFIX, data)
        msg = cls()
        for tag, wire, value in ProtoReader(body).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                msg.vote = Vote.decode(value)
            elif tag == 2 and wire == LENGTH_DELIMITED:
                msg.err = RemoteError.decode(value)
        return msg


@dataclass
class SignVoteRequest:
    vote: Vote | None = None

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.vote.encode() if self.vote is not None else None)
        return _encode_registered(AMINO_PREFIX, w.getvalue())

    @classmethod
    def decode(cls, data: bytes) -> "SignVoteRequest":
        body = _decode_registered(AMINO_PREFIX, data)
        msg = cls()
        for tag, wire, value in ProtoReader(body).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                msg.vote = Vote.decode(value)
        return msg

    def sign_bytes(self, chain_id: str, protobuf: bool) -> bytes:
        """Canonical bytes to sign, length-delimited, in the given encoding."""
        if self.vote is None:
            raise ValidationError(ValidationErrorKind.MISSING_CONSENSUS_MESSAGE)
        vote = replace(self.vote, signature=b"")
        chain_id = str(chain_id)

        if protobuf:
            w = ProtoWriter()
            w.int64(1, _to_int32(vote.vote_type))
            w.sfixed64(2, vote.height)
            w.sfixed64(3, vote.round)
            w.message(4, _proto_canonical_block_id(vote.block_id))
            w.message(5, vote.timestamp.encode() if vote.timestamp is not None else None)
            w.string(6, chain_id)
            return length_prefixed(w.getvalue())

        return CanonicalVote.from_vote(vote, chain_id).encode_length_delimited()

    def set_signature(self, signature: bytes) -> None:
        if self.vote is not None:
            self.vote.signature = bytes(signature)

    def validate(self) -> None:
        if self.vote is None:
            raise ValidationError(ValidationErrorKind.MISSING_CONSENSUS_MESSAGE)
        self.vote.validate_basic()

    def consensus_state(self) -> ConsensusState | None:
        v = self.vote
        if v is None or v.height < 0:
            return None
        block_id = None
        if v.block_id is not None:
            try:
                block_id = v.block_id.parse_block_id()
            except ValueError:
                block_id = None
        return ConsensusState(
            height=v.height,
            round=v.round & 0xFFFF,
            step=VOTE_STEP,
            block_id=block_id,
        )

    def height(self) -> int | None:
        return self.vote.height if self.vote is not None else None

    def msg_type(self) -> SignedMsgType | None:
        return self.vote.msg_type() if self.vote is not None else None

    def build_response(self, error: RemoteError | None) -> SignedVoteResponse:
        if error is not None:
            return SignedVoteResponse(vote=None, err=error)
        return SignedVoteResponse(vote=self.vote, err=None)