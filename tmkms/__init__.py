"""Tendermint remote-signer messages, canonical sign bytes and double-signing protection."""

__version__ = "0.1.0"