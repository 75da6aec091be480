"""Network and asset registry: immutable lookup tables for rule modules.

The registry is a frozen value object. Registry.default() builds the
bundled tables once; callers that need different data construct their own
Registry and pass it to the validator.
"""

import re
from functools import lru_cache
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# CAIP-2: namespace (3-8 of [-a-z0-9]) ":" reference (1-32 of [-_a-zA-Z0-9])
CAIP2_PATTERN = re.compile(r"[-a-z0-9]{3,8}:[-_a-zA-Z0-9]{1,32}")

# Solana genesis-hash references
SOLANA_MAINNET = "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp"
SOLANA_DEVNET = "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1"


class NetworkInfo(BaseModel):
    """Display metadata for a CAIP-2 network."""
    name: str
    type: Literal["mainnet", "testnet"]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_testnet(self) -> bool:
        return self.type == "testnet"


class AssetInfo(BaseModel):
    """A token known to be accepted on a network."""
    address: str
    symbol: str
    decimals: int

    model_config = ConfigDict(frozen=True, extra="forbid")


class Registry(BaseModel):
    """Read-only network and asset tables."""
    networks: Dict[str, NetworkInfo] = Field(default_factory=dict)
    assets: Dict[str, Tuple[AssetInfo, ...]] = Field(default_factory=dict)
    simple_names: Dict[str, str] = Field(
        default_factory=dict,
        description="Shorthand chain names (e.g. 'base') mapped to canonical CAIP-2 ids",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def default(cls) -> "Registry":
        """The bundled registry, built once per process."""
        return _default_registry()

    @staticmethod
    def is_valid_caip2(network: object) -> bool:
        return isinstance(network, str) and CAIP2_PATTERN.fullmatch(network) is not None

    def is_known_network(self, network: object) -> bool:
        return isinstance(network, str) and network in self.networks

    def get_network_info(self, network: object) -> Optional[NetworkInfo]:
        if not isinstance(network, str):
            return None
        return self.networks.get(network)

    def canonical_network(self, name: object) -> Optional[str]:
        """Canonical CAIP-2 id for a shorthand chain name, if one is known."""
        if not isinstance(name, str):
            return None
        return self.simple_names.get(name.strip().lower())

    def get_asset_info(self, network: object, asset: object) -> Optional[AssetInfo]:
        if not isinstance(network, str) or not isinstance(asset, str):
            return None
        evm = network.startswith("eip155:")
        for info in self.assets.get(network, ()):
            # EVM addresses are case-insensitive; others (base58) are exact
            if (evm and info.address.lower() == asset.lower()) or info.address == asset:
                return info
        return None

    def is_known_asset(self, network: object, asset: object) -> bool:
        return self.get_asset_info(network, asset) is not None


def _usdc(address: str) -> Tuple[AssetInfo, ...]:
    return (AssetInfo(address=address, symbol="USDC", decimals=6),)


@lru_cache(maxsize=1)
def _default_registry() -> Registry:
    networks = {
        "eip155:1": NetworkInfo(name="Ethereum", type="mainnet"),
        "eip155:11155111": NetworkInfo(name="Ethereum Sepolia", type="testnet"),
        "eip155:8453": NetworkInfo(name="Base", type="mainnet"),
        "eip155:84532": NetworkInfo(name="Base Sepolia", type="testnet"),
        "eip155:137": NetworkInfo(name="Polygon", type="mainnet"),
        "eip155:80002": NetworkInfo(name="Polygon Amoy", type="testnet"),
        "eip155:43114": NetworkInfo(name="Avalanche C-Chain", type="mainnet"),
        "eip155:43113": NetworkInfo(name="Avalanche Fuji", type="testnet"),
        "eip155:42161": NetworkInfo(name="Arbitrum One", type="mainnet"),
        "eip155:421614": NetworkInfo(name="Arbitrum Sepolia", type="testnet"),
        "eip155:10": NetworkInfo(name="Optimism", type="mainnet"),
        "eip155:11155420": NetworkInfo(name="Optimism Sepolia", type="testnet"),
        "eip155:4689": NetworkInfo(name="IoTeX", type="mainnet"),
        "eip155:1329": NetworkInfo(name="Sei", type="mainnet"),
        "eip155:1328": NetworkInfo(name="Sei Testnet", type="testnet"),
        SOLANA_MAINNET: NetworkInfo(name="Solana", type="mainnet"),
        SOLANA_DEVNET: NetworkInfo(name="Solana Devnet", type="testnet"),
    }
    assets = {
        "eip155:1": _usdc("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"),
        "eip155:11155111": _usdc("0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238"),
        "eip155:8453": _usdc("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"),
        "eip155:84532": _usdc("0x036CbD53842c5426634e7929541eC2318f3dCF7e"),
        "eip155:137": _usdc("0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359"),
        "eip155:80002": _usdc("0x41E94Eb019C0762f9Bfcf9Fb1E58725BfB0e7582"),
        "eip155:43114": _usdc("0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E"),
        "eip155:43113": _usdc("0x5425890298aed601595a70AB815c96711a31Bc65"),
        "eip155:42161": _usdc("0xaf88d065e77c8cC2239327C5EDb3A432268e5831"),
        "eip155:10": _usdc("0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85"),
        SOLANA_MAINNET: _usdc("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"),
        SOLANA_DEVNET: _usdc("4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU"),
    }
    simple_names = {
        "ethereum": "eip155:1",
        "mainnet": "eip155:1",
        "sepolia": "eip155:11155111",
        "base": "eip155:8453",
        "base-mainnet": "eip155:8453",
        "base-sepolia": "eip155:84532",
        "polygon": "eip155:137",
        "polygon-amoy": "eip155:80002",
        "avalanche": "eip155:43114",
        "avalanche-fuji": "eip155:43113",
        "arbitrum": "eip155:42161",
        "arbitrum-sepolia": "eip155:421614",
        "optimism": "eip155:10",
        "optimism-sepolia": "eip155:11155420",
        "iotex": "eip155:4689",
        "sei": "eip155:1329",
        "sei-testnet": "eip155:1328",
        "solana": SOLANA_MAINNET,
        "solana-mainnet": SOLANA_MAINNET,
        "solana-devnet": SOLANA_DEVNET,
    }
    return Registry(networks=networks, assets=assets, simple_names=simple_names)
