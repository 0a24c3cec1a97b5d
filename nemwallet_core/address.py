"""
Account addresses for nemwallet.

An address is the Base58Check encoding of ``version || hash160(public_key)``.
The version byte selects the network.
"""

from __future__ import annotations

from nemwallet_core.crypto_utils import (
    PublicKey,
    base58check_decode_versioned,
    base58check_encode,
    hash160,
)

MAIN_NET_VERSION = 0x68
TEST_NET_VERSION = 0x98

NETWORKS: dict[str, int] = {
    "mainnet": MAIN_NET_VERSION,
    "testnet": TEST_NET_VERSION,
}


def network_version(name: str) -> int:
    """Map a network name to its address version byte."""
    try:
        return NETWORKS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown network {name!r}; expected one of {sorted(NETWORKS)}"
        ) from None


class Address:
    """Immutable account address. Equality and hash use the encoded string."""

    __slots__ = ("_encoded", "_public_key")

    def __init__(self, encoded: str, public_key: PublicKey | None = None):
        self._encoded = encoded
        self._public_key = public_key

    @classmethod
    def from_public_key(cls, public_key: PublicKey, version: int = MAIN_NET_VERSION) -> Address:
        return cls(base58check_encode(version, hash160(public_key.raw)), public_key)

    @classmethod
    def from_encoded(cls, encoded: str) -> Address:
        """Wrap an existing encoded address; no public key is attached."""
        return cls(encoded.strip())

    @property
    def encoded(self) -> str:
        return self._encoded

    @property
    def public_key(self) -> PublicKey | None:
        return self._public_key

    def is_valid(self, version: int | None = None) -> bool:
        """
        Check checksum and payload length.  The version byte must equal
        *version* when given, otherwise it must belong to a known network.
        """
        try:
            found, payload = base58check_decode_versioned(self._encoded)
        except ValueError:
            return False
        if len(payload) != 20:
            return False
        if version is not None:
            return found == version
        return found in NETWORKS.values()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._encoded == other._encoded

    def __hash__(self) -> int:
        return hash(self._encoded)

    def __str__(self) -> str:
        return self._encoded

    def __repr__(self) -> str:
        return f"Address({self._encoded})"
