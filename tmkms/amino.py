"""Amino/protobuf wire-format helpers: varints, field writer and reader."""

from __future__ import annotations

import hashlib
import struct
from collections.abc import Iterator
from itertools import islice

VARINT = 0
FIXED64 = 1
LENGTH_DELIMITED = 2
FIXED32 = 5

_MASK64 = (1 << 64) - 1


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded into a message."""


def compute_prefix(name: str) -> bytes:
    """Compute the Amino prefix for the given registered type name."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    nonzero = (b for b in digest if b != 0)
    return bytes(islice(nonzero, 3, 7))


def encode_uvarint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned varint."""
    if value < 0:
        raise ValueError("uvarint value must be non-negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_uvarint(data: bytes, pos: int = 0) -> tuple[int, int]:
    """Decode an unsigned varint at ``pos``; return (value, next position)."""
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise DecodeError("truncated varint")
        if shift >= 70:
            raise DecodeError("varint too long")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            return result, pos


def length_prefixed(payload: bytes) -> bytes:
    """Prefix ``payload`` with its length as a uvarint."""
    return encode_uvarint(len(payload)) + bytes(payload)


def split_length_prefixed(data: bytes) -> bytes:
    """Strip and check a uvarint length prefix, returning the payload."""
    length, pos = decode_uvarint(data, 0)
    if len(data) - pos != length:
        raise DecodeError(
            f"length prefix {length} does not match payload size {len(data) - pos}"
        )
    return bytes(data[pos:])


def _to_int64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value >= 1 << 63 else value


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def _zigzag_decode(value: int) -> int:
    return (value >> 1) ^ -(value & 1)


def _encode_registered(prefix: bytes, body: bytes) -> bytes:
    return length_prefixed(prefix + body)


def _decode_registered(prefix: bytes, data: bytes) -> bytes:
    payload = split_length_prefixed(data)
    if not payload.startswith(prefix):
        raise DecodeError("unexpected amino prefix")
    return payload[len(prefix):]


class ProtoWriter:
    """Accumulates protobuf fields, omitting zero/default values."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def _key(self, tag: int, wire_type: int) -> None:
        self._buf += encode_uvarint((tag << 3) | wire_type)

    def uint(self, tag: int, value: int) -> None:
        if value:
            self._key(tag, VARINT)
            self._buf += encode_uvarint(value)

    def int64(self, tag: int, value: int) -> None:
        if value:
            self._key(tag, VARINT)
            self._buf += encode_uvarint(value & _MASK64)

    def sint32(self, tag: int, value: int) -> None:
        if value:
            self._key(tag, VARINT)
            self._buf += encode_uvarint(((value << 1) ^ (value >> 31)) & 0xFFFFFFFF)

    def sfixed64(self, tag: int, value: int) -> None:
        if value:
            self._key(tag, FIXED64)
            self._buf += struct.pack("<q", value)

    def bytes(self, tag: int, value: bytes) -> None:
        if value:
            self._key(tag, LENGTH_DELIMITED)
            self._buf += length_prefixed(value)

    def string(self, tag: int, value: str) -> None:
        self.bytes(tag, value.encode("utf-8"))

    def message(self, tag: int, value: bytes | None) -> None:
        if value is not None:
            self._key(tag, LENGTH_DELIMITED)
            self._buf += length_prefixed(value)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class ProtoReader:
    """Iterates over the fields of an encoded protobuf message."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def fields(self) -> Iterator[tuple[int, int, int | bytes]]:
        """Yield (tag, wire_type, value) for each field in order."""
        data = self._data
        pos = 0
        while pos < len(data):
            key, pos = decode_uvarint(data, pos)
            tag, wire_type = key >> 3, key & 7
            if tag == 0:
                raise DecodeError("invalid field tag 0")
            if wire_type == VARINT:
                value, pos = decode_uvarint(data, pos)
                yield tag, wire_type, value
            elif wire_type == FIXED64:
                if pos + 8 > len(data):
                    raise DecodeError("truncated fixed64")
                yield tag, wire_type, struct.unpack_from("<Q", data, pos)[0]
                pos += 8
            elif wire_type == FIXED32:
                if pos + 4 > len(data):
                    raise DecodeError("truncated fixed32")
                yield tag, wire_type, struct.unpack_from("<I", data, pos)[0]
                pos += 4
            elif wire_type == LENGTH_DELIMITED:
                length, pos = decode_uvarint(data, pos)
                if pos + length > len(data):
                    raise DecodeError("truncated length-delimited field")
                yield tag, wire_type, data[pos:pos + length]
                pos += length
            else:
                raise DecodeError(f"unsupported wire type {wire_type}")