"""Amino block ID messages."""

from __future__ import annotations

from dataclasses import dataclass

from . import consensus
from .amino import LENGTH_DELIMITED, VARINT, ProtoReader, ProtoWriter, _to_int64
from .validate import ValidationError, ValidationErrorKind


def _parse_sha256_hash(data: bytes) -> bytes:
    if len(data) != consensus.SHA256_HASH_SIZE:
        raise ValueError(f"invalid SHA-256 hash length: {len(data)}")
    return bytes(data)


def _check_hash_size(data: bytes) -> None:
    if data and len(data) != consensus.SHA256_HASH_SIZE:
        raise ValidationError(ValidationErrorKind.INVALID_HASH_SIZE)


@dataclass
class PartsSetHeader:
    total: int = 0
    hash: bytes = b""

    def validate_basic(self) -> None:
        if self.total < 0:
            raise ValidationError(ValidationErrorKind.NEGATIVE_TOTAL)
        _check_hash_size(self.hash)

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.int64(1, self.total)
        w.bytes(2, self.hash)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "PartsSetHeader":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if tag == 1 and wire == VARINT:
                msg.total = _to_int64(value)
            elif tag == 2 and wire == LENGTH_DELIMITED:
                msg.hash = bytes(value)
        return msg

    def to_header(self) -> consensus.PartSetHeader:
        return consensus.PartSetHeader(self.total, _parse_sha256_hash(self.hash))


@dataclass
class BlockId:
    hash: bytes = b""
    parts_header: PartsSetHeader | None = None

    def validate_basic(self) -> None:
        _check_hash_size(self.hash)
        if self.parts_header is not None:
            self.parts_header.validate_basic()

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.bytes(1, self.hash)
        w.message(2, self.parts_header.encode() if self.parts_header else None)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "BlockId":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                msg.hash = bytes(value)
            elif tag == 2 and wire == LENGTH_DELIMITED:
                msg.parts_header = PartsSetHeader.decode(value)
        return msg

    def parse_block_id(self) -> consensus.BlockId:
        hash_ = _parse_sha256_hash(self.hash)
        if self.parts_header is None:
            raise ValueError("missing block ID parts header")
        return consensus.BlockId(hash_, self.parts_header.to_header())

    @classmethod
    def from_block_id(cls, block_id: consensus.BlockId) -> "BlockId":
        header = block_id.part_set_header
        return cls(block_id.hash, PartsSetHeader(header.total, header.hash))


@dataclass
class CanonicalPartSetHeader:
    hash: bytes = b""
    total: int = 0

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.bytes(1, self.hash)
        w.int64(2, self.total)
        return w.getvalue()

    def to_header(self) -> consensus.PartSetHeader:
        return consensus.PartSetHeader(self.total, _parse_sha256_hash(self.hash))


@dataclass
class CanonicalBlockId:
    hash: bytes = b""
    parts_header: CanonicalPartSetHeader | None = None

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.bytes(1, self.hash)
        w.message(2, self.parts_header.encode() if self.parts_header else None)
        return w.getvalue()

    def parse_block_id(self) -> consensus.BlockId:
        hash_ = _parse_sha256_hash(self.hash)
        if self.parts_header is None:
            raise ValueError("missing block ID parts header")
        return consensus.BlockId(hash_, self.parts_header.to_header())