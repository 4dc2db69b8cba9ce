"""Known Tendermint networks for generated configuration."""

from __future__ import annotations

import enum


class Network(enum.Enum):
    """Tendermint networks with configuration templates."""

    COLUMBUS = "columbus"
    COSMOS_HUB = "cosmoshub"
    IRIS_HUB = "irishub"
    SENTINEL_HUB = "sentinelhub"
    OSMOSIS = "osmosis"
    PERSISTENCE = "core"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def all(cls) -> tuple["Network", ...]:
        """All known networks."""
        return tuple(cls)

    @classmethod
    def parse(cls, name: str) -> "Network":
        """Parse a network from its chain ID prefix."""
        try:
            return cls(name)
        except ValueError:
            registered = "\n".join(f"- {network}" for network in cls)
            raise ValueError(
                f"unknown Tendermint network: `{name}`\n\nRegistered networks:\n{registered}"
            ) from None

    def chain_id(self) -> str:
        """Current production chain ID of this network."""
        return _CHAIN_IDS[self]

    def schema_file(self) -> str:
        """Schema file for this network."""
        return _SCHEMA_FILES[self]


_CHAIN_IDS = {
    Network.COLUMBUS: "columbus-3",
    Network.COSMOS_HUB: "cosmoshub-3",
    Network.IRIS_HUB: "irishub",
    Network.SENTINEL_HUB: "sentinelhub-2",
    Network.OSMOSIS: "osmosis-1",
    Network.PERSISTENCE: "core-1",
}

_SCHEMA_FILES = {
    Network.COLUMBUS: "terra.toml",
    Network.COSMOS_HUB: "cosmos-sdk.toml",
    Network.IRIS_HUB: "iris.toml",
    Network.SENTINEL_HUB: "sentinelhub.toml",
    Network.OSMOSIS: "osmosis.toml",
    Network.PERSISTENCE: "persistence.toml",
}