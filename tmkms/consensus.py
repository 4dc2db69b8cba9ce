"""Consensus state and block identifiers."""

from __future__ import annotations

from dataclasses import dataclass, field

SHA256_HASH_SIZE = 32


@dataclass(frozen=True)
class PartSetHeader:
    """Header of a block's part set."""

    total: int = 0
    hash: bytes = b""

    def to_dict(self) -> dict:
        return {"total": self.total, "hash": self.hash.hex().upper()}

    @classmethod
    def from_dict(cls, data: dict) -> "PartSetHeader":
        return cls(int(data.get("total", 0)), bytes.fromhex(data.get("hash", "")))


@dataclass(frozen=True)
class BlockId:
    """Identifier of a block: its hash and part set header."""

    hash: bytes
    part_set_header: PartSetHeader = field(default_factory=PartSetHeader)

    @classmethod
    def parse(cls, text: str) -> "BlockId":
        try:
            raw = bytes.fromhex(text)
        except ValueError:
            raise ValueError(f"invalid block ID: {text!r}") from None
        if len(raw) != SHA256_HASH_SIZE:
            raise ValueError(f"invalid block ID hash length: {len(raw)}")
        return cls(raw)

    def prefix(self) -> str:
        return self.hash.hex().upper()[:12]

    def to_dict(self) -> dict:
        return {"hash": self.hash.hex().upper(), "parts": self.part_set_header.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "BlockId":
        return cls(
            bytes.fromhex(data["hash"]),
            PartSetHeader.from_dict(data.get("parts") or {}),
        )


@dataclass(frozen=True)
class ConsensusState:
    """Height, round and step of the last signed message."""

    height: int = 0
    round: int = 0
    step: int = 0
    block_id: BlockId | None = None

    def block_id_prefix(self) -> str:
        return self.block_id.prefix() if self.block_id is not None else "<nil>"

    def to_dict(self) -> dict:
        return {
            "height": str(self.height),
            "round": str(self.round),
            "step": self.step,
            "block_id": self.block_id.to_dict() if self.block_id else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsensusState":
        block_id = data.get("block_id")
        return cls(
            height=int(data.get("height", 0)),
            round=int(data.get("round", 0)),
            step=int(data.get("step", 0)),
            block_id=BlockId.from_dict(block_id) if block_id else None,
        )