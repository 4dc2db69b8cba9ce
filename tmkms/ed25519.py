"""Public key request and response messages for Ed25519 keys."""

from __future__ import annotations

from dataclasses import dataclass

from .amino import (
    LENGTH_DELIMITED,
    DecodeError,
    ProtoReader,
    ProtoWriter,
    _decode_registered,
    _encode_registered,
    compute_prefix,
    length_prefixed,
    split_length_prefixed,
)

AMINO_NAME = "tendermint/remotesigner/PubKeyRequest"
AMINO_PREFIX = compute_prefix(AMINO_NAME)
RESPONSE_AMINO_NAME = "tendermint/remotesigner/PubKeyResponse"
RESPONSE_AMINO_PREFIX = compute_prefix(RESPONSE_AMINO_NAME)
PUBKEY_AMINO_NAME = "tendermint/PubKeyEd25519"
PUBKEY_AMINO_PREFIX = compute_prefix(PUBKEY_AMINO_NAME)

PUBLIC_KEY_LENGTH = 32


@dataclass(frozen=True)
class Ed25519PublicKey:
    """An Ed25519 public key."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != PUBLIC_KEY_LENGTH:
            raise ValueError(
                f"invalid Ed25519 public key length: {len(self.data)} "
                f"(expected {PUBLIC_KEY_LENGTH})"
            )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ed25519PublicKey":
        return cls(bytes(data))


@dataclass
class PubKeyRequest:
    """Request for the signer's public key."""

    def encode(self) -> bytes:
        return _encode_registered(AMINO_PREFIX, b"")

    @classmethod
    def decode(cls, data: bytes) -> "PubKeyRequest":
        _decode_registered(AMINO_PREFIX, data)
        return cls()


@dataclass
class PubKeyResponse:
    """Response carrying the signer's Ed25519 public key."""

    pub_key_ed25519: bytes = b""

    def encode(self) -> bytes:
        w = ProtoWriter()
        if self.pub_key_ed25519:
            w.message(1, PUBKEY_AMINO_PREFIX + length_prefixed(self.pub_key_ed25519))
        return _encode_registered(RESPONSE_AMINO_PREFIX, w.getvalue())

    @classmethod
    def decode(cls, data: bytes) -> "PubKeyResponse":
        body = _decode_registered(RESPONSE_AMINO_PREFIX, data)
        msg = cls()
        for tag, wire, value in ProtoReader(body).fields():
            if tag == 1 and wire == LENGTH_DELIMITED:
                if not value.startswith(PUBKEY_AMINO_PREFIX):
                    raise DecodeError("unexpected public key amino prefix")
                msg.pub_key_ed25519 = split_length_prefixed(value[len(PUBKEY_AMINO_PREFIX):])
        return msg

    def to_public_key(self) -> Ed25519PublicKey:
        """Convert to a public key; raises ValueError on a malformed key."""
        return Ed25519PublicKey.from_bytes(self.pub_key_ed25519)

    @classmethod
    def from_public_key(cls, public_key: Ed25519PublicKey) -> "PubKeyResponse":
        if not isinstance(public_key, Ed25519PublicKey):
            raise TypeError(
                f"PubKeyResponse unsupported for this key type: {public_key!r}"
            )
        return cls(public_key.data)