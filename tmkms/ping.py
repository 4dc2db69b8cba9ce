"""Ping request and response messages."""

from __future__ import annotations

from dataclasses import dataclass

from .amino import _decode_registered, _encode_registered, compute_prefix

AMINO_NAME = "tendermint/remotesigner/PingRequest"
AMINO_PREFIX = compute_prefix(AMINO_NAME)
RESPONSE_AMINO_NAME = "tendermint/remotesigner/PingResponse"
RESPONSE_AMINO_PREFIX = compute_prefix(RESPONSE_AMINO_NAME)


@dataclass
class PingRequest:
    def encode(self) -> bytes:
        return _encode_registered(AMINO_PREFIX, b"")

    @classmethod
    def decode(cls, data: bytes) -> "PingRequest":
        _decode_registered(AMINO_PREFIX, data)
        return cls()


@dataclass
class PingResponse:
    def encode(self) -> bytes:
        return _encode_registered(RESPONSE_AMINO_PREFIX, b"")

    @classmethod
    def decode(cls, data: bytes) -> "PingResponse":
        _decode_registered(RESPONSE_AMINO_PREFIX, data)
        return cls()