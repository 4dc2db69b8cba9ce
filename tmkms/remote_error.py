"""Remote signer error messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .amino import LENGTH_DELIMITED, VARINT, ProtoReader, ProtoWriter, _to_int32, _zigzag_decode


class RemoteErrorCode(enum.IntEnum):
    """Error codes for remote signer failures."""

    REMOTE_SIGNER_ERROR = 1
    DOUBLE_SIGN_ERROR = 2


@dataclass
class RemoteError:
    code: int = 0
    description: str = ""

    @classmethod
    def double_sign(cls, height: int) -> "RemoteError":
        return cls(
            int(RemoteErrorCode.DOUBLE_SIGN_ERROR),
            f"double signing requested at height: {height}",
        )

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.sint32(1, self.code)
        w.string(2, self.description)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "RemoteError":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if tag == 1 and wire == VARINT:
                msg.code = _to_int32(_zigzag_decode(value))
            elif tag == 2 and wire == LENGTH_DELIMITED:
                msg.description = value.decode("utf-8")
        return msg