"""Signed message types."""

from __future__ import annotations

import enum

from .amino import DecodeError


class SignedMsgType(enum.IntEnum):
    """Types of signed consensus messages."""

    PRE_VOTE = 0x01
    PRE_COMMIT = 0x02
    PROPOSAL = 0x20

    @classmethod
    def from_u32(cls, data: int) -> "SignedMsgType":
        try:
            return cls(data)
        except ValueError:
            raise DecodeError("Invalid vote type") from None