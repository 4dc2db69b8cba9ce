"""Consensus version message."""

from __future__ import annotations

from dataclasses import dataclass

from .amino import VARINT, ProtoReader, ProtoWriter


@dataclass
class ConsensusVersion:
    block: int = 0
    app: int = 0

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.uint(1, self.block)
        w.uint(2, self.app)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "ConsensusVersion":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if tag == 1 and wire == VARINT:
                msg.block = value
            elif tag == 2 and wire == VARINT:
                msg.app = value
        return msg