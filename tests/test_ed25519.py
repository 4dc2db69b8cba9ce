import pytest

from tmkms.amino import DecodeError
from tmkms.ed25519 import Ed25519PublicKey, PubKeyRequest, PubKeyResponse

PUBKEY = bytes([
    0x79, 0xCE, 0x0D, 0xE0, 0x43, 0x33, 0x4A, 0xEC, 0xE0, 0x8B, 0x7B, 0xB5, 0x61, 0xBC,
    0xE7, 0xC1, 0xD4, 0x69, 0xC3, 0x44, 0x26, 0xEC, 0xEF, 0xC0, 0x72, 0x0A, 0x52, 0x4D,
    0x37, 0x32, 0xEF, 0xED,
])

ENCODED_RESPONSE = bytes([0x2B, 0x17, 0x0E, 0xD5, 0x7C, 0x0A, 0x25, 0x16, 0x24, 0xDE, 0x64, 0x20]) + PUBKEY


def test_empty_pubkey_msg():
    want = bytes([0x4, 0xCB, 0x94, 0xD6, 0x20])
    msg = PubKeyRequest()
    assert msg.encode() == want
    assert PubKeyRequest.decode(want) == msg


def test_ed25519_pubkey_msg():
    msg = PubKeyResponse(PUBKEY)
    assert msg.encode() == ENCODED_RESPONSE
    assert PubKeyResponse.decode(ENCODED_RESPONSE) == msg


def test_into():
    raw_pk = bytes([
        0xAF, 0xF3, 0x94, 0xC5, 0xB7, 0x5C, 0xFB, 0x0D, 0xD9, 0x28, 0xE5, 0x8A, 0x92, 0xDD,
        0x76, 0x55, 0x2B, 0x2E, 0x8D, 0x19, 0x6F, 0xE9, 0x12, 0x14, 0x50, 0x80, 0x6B, 0xD0,
        0xD9, 0x3F, 0xD0, 0xCB,
    ])
    want = Ed25519PublicKey.from_bytes(raw_pk)
    pk = PubKeyResponse(raw_pk)
    got = pk.to_public_key()
    assert got == want
    assert PubKeyResponse.from_public_key(got) == pk


def test_empty_into():
    with pytest.raises(ValueError):
        PubKeyResponse(b"").to_public_key()


def test_wrong_length_key_rejected():
    with pytest.raises(ValueError):
        Ed25519PublicKey.from_bytes(b"\x01" * 31)


def test_from_public_key_rejects_other_types():
    with pytest.raises(TypeError):
        PubKeyResponse.from_public_key(b"\x00" * 32)


def test_request_decode_wrong_prefix():
    with pytest.raises(DecodeError):
        PubKeyRequest.decode(bytes([0x4, 0x00, 0x00, 0x00, 0x00]))


def test_response_decode_response_as_request_fails():
    with pytest.raises(DecodeError):
        PubKeyRequest.decode(ENCODED_RESPONSE)